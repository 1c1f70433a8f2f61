"""Post summary rendering for Postcard.

This module turns a post's metadata into the summary block shown on listing
pages: an optional featured image linking to the post, the title as a link,
and the date.

Key items:
- PostSummary: Frozen view model for one post.
- SummaryRenderer: Holds the Jinja2 environment and renders summaries.
- render_summary: Pure function rendering one summary with default settings.

Rendering has no side effects. A missing image simply omits the image block.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment
from markupsafe import Markup

from .config import SiteConfig
from .html_utils import prefix_path
from .images import SizedImage
from .templates import SUMMARY_TEMPLATE, create_environment
from .utils import format_date


@dataclass(frozen=True)
class PostSummary:
    """Per-post view model.

    Attributes:
        date: Display date.
        title: Post title.
        slug: Site path of the post, such as "/hello-world/".
        image: Optional featured image.
    """

    date: str
    title: str
    slug: str
    image: SizedImage | None = None

    @classmethod
    def from_frontmatter(
        cls,
        frontmatter: Mapping[str, Any],
        *,
        slug: str | None = None,
        base_dir: Path | None = None,
        image_url: str | None = None,
    ) -> PostSummary:
        """Build a summary from a post's front-matter.

        Args:
            frontmatter: Parsed front-matter mapping.
            slug: Slug to use when the front-matter has no ``slug``/``path``.
            base_dir: Directory that image file names are relative to.
            image_url: Public URL for a file-based image; defaults to
                ``/<image file name>``.

        Returns:
            PostSummary.

        Raises:
            ValueError: If there is no title or slug, or the image is unusable.
        """
        title = frontmatter.get("title")
        if not title:
            raise ValueError("Front-matter is missing a title")
        target = frontmatter.get("slug") or frontmatter.get("path") or slug
        if not target:
            raise ValueError(f"No slug for post {title!r}")

        image = None
        raw_image = frontmatter.get("image")
        if isinstance(raw_image, Mapping):
            image = SizedImage.from_mapping(raw_image)
        elif isinstance(raw_image, str) and raw_image:
            image_path = Path(raw_image)
            if base_dir is not None and not image_path.is_absolute():
                image_path = base_dir / image_path
            image = SizedImage.from_file(
                image_path,
                image_url or f"/{image_path.name}",
                alt=str(frontmatter.get("imageAlt") or ""),
            )

        return cls(
            date=format_date(frontmatter.get("date")),
            title=str(title),
            slug=str(target),
            image=image,
        )


class SummaryRenderer:
    """Renders post summaries with the bundled (or site-overridden) templates.

    Attributes:
        config: Optional site configuration; its path prefix is applied to links.
        env: Jinja2 environment holding the summary templates.
    """

    def __init__(
        self,
        config: SiteConfig | None = None,
        env: Environment | None = None,
        site_dir: Path | None = None,
    ):
        self.config = config
        self.env = env or create_environment(site_dir)
        self._template = self.env.get_template(SUMMARY_TEMPLATE)

    @property
    def path_prefix(self) -> str:
        return self.config.path_prefix if self.config else "/"

    def render(
        self,
        date: str,
        title: str,
        slug: str,
        image: SizedImage | None = None,
    ) -> Markup:
        """Render one summary.

        Args:
            date: Display date.
            title: Post title, used as the link text.
            slug: Site path of the post, used as the link target.
            image: Optional sized image; omitted from the output when None.

        Returns:
            Markup-safe HTML fragment.
        """
        html = self._template.render(
            date=date,
            title=title,
            href=prefix_path(self.path_prefix, slug),
            image=image,
        )
        return Markup(html)

    def render_post(self, post: PostSummary) -> Markup:
        return self.render(post.date, post.title, post.slug, post.image)

    def install(self, env: Environment) -> None:
        """Expose summary rendering to a generator's Jinja2 environment.

        Adds a ``summary`` global taking the four summary fields and a
        ``summary`` filter taking a PostSummary. When a config is set it is
        also published as the ``site`` global.
        """
        env.globals["summary"] = self.render
        env.filters["summary"] = self.render_post
        if self.config is not None:
            env.globals["site"] = self.config.as_dict()
            env.globals["url_for"] = self.config.url_for


@functools.lru_cache(maxsize=1)
def _default_template():
    return create_environment().get_template(SUMMARY_TEMPLATE)


def render_summary(
    date: str,
    title: str,
    slug: str,
    image: SizedImage | None = None,
    *,
    path_prefix: str = "/",
) -> Markup:
    """Render a post summary as an HTML fragment.

    Args:
        date: Display date.
        title: Post title.
        slug: Site path of the post.
        image: Optional sized image.
        path_prefix: Path the site is served under.

    Returns:
        Markup-safe HTML with, in order, the optional image link, the title
        heading and the date label.
    """
    href = prefix_path(path_prefix, slug)
    html = _default_template().render(date=date, title=title, href=href, image=image)
    return Markup(html)
