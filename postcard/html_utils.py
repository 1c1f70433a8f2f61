"""HTML and URL utility functions for Postcard.

This module provides small string helpers for building links: joining a
site URL with a path, and applying a path prefix.

Functions:
    join_root_url: Join a base URL with a path.
    prefix_path: Apply a site path prefix to a root-relative path.
    is_external_url: Check whether a URL points off-site.
"""

from __future__ import annotations

# URL prefixes that should not be modified
_URL_SKIP_PREFIXES = (
    "http://",
    "https://",
    "//",
    "mailto:",
    "tel:",
    "#",
)


def is_external_url(url: str) -> bool:
    """Return True for absolute URLs, anchors and mailto/tel links."""
    return url.startswith(_URL_SKIP_PREFIXES)


def join_root_url(root_url: str, path: str) -> str:
    """Safely join a root URL and a path, avoiding double slashes.

    Args:
        root_url: Base URL (e.g., https://example.com/blog).
        path: Path beginning with or without a leading slash.

    Returns:
        Combined URL with proper slash handling.

    Examples:
        >>> join_root_url('https://example.com', '/about')
        'https://example.com/about'

        >>> join_root_url('https://example.com/', 'about')
        'https://example.com/about'
    """
    if not root_url:
        return path
    base = root_url.rstrip("/")
    suffix = path if path.startswith("/") else f"/{path}"
    return f"{base}{suffix}"


def prefix_path(prefix: str, path: str) -> str:
    """Apply a path prefix to a site path.

    A prefix of "/" (or empty) leaves the path as a root-relative path.
    External URLs and anchors are returned unchanged.

    Args:
        prefix: Path prefix such as "/" or "/blog".
        path: Site path such as "/hello-world" or "hello-world/".

    Returns:
        Root-relative path with the prefix applied.

    Examples:
        >>> prefix_path('/blog', '/hello-world')
        '/blog/hello-world'

        >>> prefix_path('/', 'hello-world')
        '/hello-world'
    """
    if is_external_url(path):
        return path
    suffix = path if path.startswith("/") else f"/{path}"
    base = (prefix or "/").rstrip("/")
    return f"{base}{suffix}"
