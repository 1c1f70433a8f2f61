"""Front-matter extraction for Postcard.

This module reads Markdown posts and turns their YAML front-matter into
PostSummary objects. Only the header is used; post bodies are not rendered.

Key functions:
- extract_frontmatter: Split YAML front-matter from the body.
- load_summary: Build a PostSummary from one post file.
- load_summaries: Build the newest-first collection for a posts directory.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from .collections import SummaryCollection
from .summary import PostSummary
from .utils import (
    extract_date_from_name,
    format_date,
    is_draft_path,
    is_markdown,
    parse_date,
    slugify,
    titleize,
)

FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*(?:\n|$)", re.DOTALL)


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (frontmatter dict, remaining content).
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1)) or {}
        if not isinstance(data, dict):
            return {}, text
        return data, text[match.end() :]
    except yaml.YAMLError:
        return {}, text


def _read_frontmatter(path: Path) -> dict[str, Any]:
    frontmatter, _ = extract_frontmatter(path.read_text(encoding="utf-8"))
    return frontmatter


def _post_date(frontmatter: dict[str, Any], path: Path) -> datetime | None:
    return parse_date(frontmatter.get("date")) or extract_date_from_name(path.stem)


def load_summary(path: Path) -> PostSummary:
    """Build a PostSummary from a Markdown post.

    The title falls back to the titleized filename, the date to the
    YYYY-MM-DD filename prefix, and the slug to ``/<slugified stem>/``.
    A string ``image`` is resolved relative to the post's directory.

    Args:
        path: Path to the post file.

    Returns:
        PostSummary for the post.
    """
    return _summary_from(path, _read_frontmatter(path))


def _summary_from(path: Path, frontmatter: dict[str, Any]) -> PostSummary:
    values = dict(frontmatter)
    if not values.get("title"):
        values["title"] = titleize(path.name)
    if values.get("date") is None:
        values["date"] = format_date(extract_date_from_name(path.stem))
    return PostSummary.from_frontmatter(
        values,
        slug=f"/{slugify(path.stem)}/",
        base_dir=path.parent,
    )


def load_summaries(posts_dir: Path, include_drafts: bool = False) -> SummaryCollection:
    """Load summaries for every Markdown post under a directory.

    Files whose name starts with an underscore, and posts with
    ``draft: true`` in their front-matter, are skipped unless
    ``include_drafts`` is set.

    Args:
        posts_dir: Directory containing post files.
        include_drafts: Whether to include drafts.

    Returns:
        SummaryCollection ordered newest first; undated posts come last.
    """
    dated: list[tuple[datetime, PostSummary]] = []
    undated: list[PostSummary] = []
    for path in sorted(posts_dir.rglob("*.md")):
        if not path.is_file() or not is_markdown(path):
            continue
        frontmatter = _read_frontmatter(path)
        draft = is_draft_path(path) or frontmatter.get("draft") is True
        if draft and not include_drafts:
            continue
        summary = _summary_from(path, frontmatter)
        when = _post_date(frontmatter, path)
        if when is None:
            undated.append(summary)
        else:
            dated.append((when, summary))
    dated.sort(key=lambda item: item[0], reverse=True)
    return SummaryCollection([s for _, s in dated] + undated)
