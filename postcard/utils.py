"""Utility functions for Postcard.

This module contains string and date helpers used when turning post files
into summaries.

Key functions:
    slugify: Convert filenames to URL slugs.
    titleize: Convert filenames to human-readable titles.
    extract_date_from_name: Extract date from filename prefix.
    format_date: Render a front-matter date value as a display string.
    is_markdown: Check if a path is a Markdown file.
    is_draft_path: Check if a path is a draft (underscore-prefixed).
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from pathlib import Path

DISPLAY_DATE_FORMAT = "%Y-%m-%d"


def _strip_date_prefix(name: str) -> str:
    parts = name.split("-")
    if len(parts) >= 4 and all(p.isdigit() for p in parts[:3]):
        return "-".join(parts[3:])
    return name


def slugify(name: str) -> str:
    """Convert filename (without extension) to slug, dropping date prefix.

    Args:
        name: Filename stem.

    Returns:
        URL-friendly slug.
    """
    cleaned = _strip_date_prefix(name)
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", cleaned)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Removes date prefixes (YYYY-MM-DD), replaces hyphens and underscores
    with spaces, and capitalizes each word.

    Args:
        filename: Filename with or without extension.

    Returns:
        Human-readable title string.

    Examples:
        >>> titleize("2018-01-01-hello-world.md")
        'Hello World'
    """
    base = _strip_date_prefix(Path(filename).stem)
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def extract_date_from_name(name: str) -> datetime | None:
    """Extract a date from a filename with YYYY-MM-DD prefix.

    Args:
        name: Filename stem (without extension).

    Returns:
        datetime object if a valid date prefix is found, None otherwise.
    """
    parts = name.split("-")
    if len(parts) >= 3 and all(p.isdigit() for p in parts[:3]):
        try:
            return datetime(int(parts[0]), int(parts[1]), int(parts[2]))
        except ValueError:
            return None
    return None


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_date(value) -> datetime | None:
    """Coerce a front-matter date value to a datetime.

    YAML turns unquoted ``2018-01-01`` into a ``date``; quoted values stay
    strings and are parsed as ISO dates. Anything else yields None.
    Values with a UTC offset are converted to naive UTC so every result
    compares with every other.
    """
    if isinstance(value, datetime):
        return _naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            return _naive_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def format_date(value) -> str:
    """Render a front-matter date value as a display string.

    Dates and datetimes use YYYY-MM-DD. Strings are kept as written so
    a post can carry its own display text (e.g. "January 1, 2018").
    """
    if isinstance(value, (date, datetime)):
        return value.strftime(DISPLAY_DATE_FORMAT)
    if value is None:
        return ""
    return str(value)


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == ".md"


def is_draft_path(path: Path) -> bool:
    """Check if a file is a draft (its name starts with an underscore)."""
    return path.name.startswith("_")
