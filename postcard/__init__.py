"""Postcard: site configuration and post summaries for static blogs.

This package provides the two pieces a static blog generator needs from a theme:
a validated site configuration loaded from postcard.yaml, and a summary view
that renders a post's image, title and date as an HTML fragment.

The main entry point is the CLI module, which provides commands for checking
configuration and rendering summaries from Markdown front-matter.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
