from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import TYPE_CHECKING

from markupsafe import Markup

if TYPE_CHECKING:
    from .summary import PostSummary, SummaryRenderer


class SummaryCollection(Sequence["PostSummary"]):
    """Ordered list of post summaries with pagination helpers."""

    def __init__(self, summaries: Iterable[PostSummary]):
        self._summaries = list(summaries)

    def __iter__(self) -> Iterator[PostSummary]:
        return iter(self._summaries)

    def __len__(self) -> int:
        return len(self._summaries)

    def __getitem__(self, item):
        if isinstance(item, slice):
            return SummaryCollection(self._summaries[item])
        return self._summaries[item]

    def page_count(self, per_page: int) -> int:
        """Number of listing pages; an empty collection still has one."""
        if per_page < 1:
            raise ValueError(f"per_page must be positive, got {per_page}")
        return max(1, -(-len(self._summaries) // per_page))

    def paginate(self, per_page: int) -> list[SummaryCollection]:
        """Split into consecutive pages of at most ``per_page`` summaries.

        Args:
            per_page: Summaries per page, usually SiteConfig.posts_per_page.

        Returns:
            List of pages in order. An empty collection yields one empty page.
        """
        count = self.page_count(per_page)
        return [self[i * per_page : (i + 1) * per_page] for i in range(count)]

    def page(self, number: int, per_page: int) -> SummaryCollection:
        """Return the 1-based page ``number``."""
        count = self.page_count(per_page)
        if not 1 <= number <= count:
            raise IndexError(f"Page {number} out of range (1-{count})")
        start = (number - 1) * per_page
        return self[start : start + per_page]

    def render(self, renderer: SummaryRenderer) -> Markup:
        return Markup("\n").join(renderer.render_post(s) for s in self._summaries)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"SummaryCollection({len(self._summaries)} summaries)"
