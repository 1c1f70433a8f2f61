"""Template environment for Postcard.

This module builds the Jinja2 environment used to render summaries. The
bundled templates live in postcard/layouts; a site can override any of them
by placing a file with the same name in its own _partials directory.

Key function:
- create_environment: Build a Jinja2 Environment with the layout loaders.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    select_autoescape,
)

SUMMARY_TEMPLATE = "summary.html.jinja"


def create_environment(site_dir: Path | None = None) -> Environment:
    """Create the Jinja2 environment for summary rendering.

    Args:
        site_dir: Optional site directory whose _partials folder takes
            precedence over the bundled layouts.

    Returns:
        Jinja2 Environment with autoescaping enabled for HTML templates.
    """
    loaders = []
    if site_dir is not None:
        loaders.append(FileSystemLoader(str(site_dir / "_partials")))
    loaders.append(PackageLoader("postcard", "layouts"))
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
        enable_async=False,
    )
