"""Command-line interface for Postcard.

This module defines the CLI commands using Click framework.

Commands:
- check: Validate postcard.yaml.
- summary: Render a single post summary.
- list: Render one listing page of summaries from a posts directory.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .config import ConfigError, SiteConfig, load_config
from .extractors import load_summaries
from .images import SizedImage
from .summary import SummaryRenderer

_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    required=False,
    help="Path to the config file (defaults to ./postcard.yaml)",
)


@click.group()
@click.version_option(version=__version__, prog_name="postcard")
def cli():
    """Site configuration and post summaries for static blogs."""


def _load_config_or_exit(config_path: Path | None) -> SiteConfig:
    try:
        return load_config(Path.cwd(), config_path)
    except ConfigError as exc:
        click.echo(click.style("Configuration error:", fg="red", bold=True), err=True)
        if exc.key:
            click.echo(click.style(f"  Key: {exc.key}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None


@cli.command()
@_config_option
def check(config_path: Path | None):
    """Validate the site configuration."""
    config = _load_config_or_exit(config_path)
    click.echo(
        f"Config OK: {config.title} by {config.author}, "
        f"{config.posts_per_page} posts per page"
    )


@cli.command()
@click.option("--title", required=True, help="Post title")
@click.option("--slug", required=True, help="Post path, e.g. /hello-world/")
@click.option("--date", "date_text", required=True, help="Display date")
@click.option(
    "--image",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    required=False,
    help="Featured image file",
)
@click.option("--image-url", required=False, help="Public URL of the featured image")
@_config_option
def summary(
    title: str,
    slug: str,
    date_text: str,
    image: Path | None,
    image_url: str | None,
    config_path: Path | None,
):
    """Render a single post summary."""
    config = _load_config_or_exit(config_path) if config_path else None
    sized = None
    if image is not None:
        try:
            sized = SizedImage.from_file(image, image_url or f"/{image.name}")
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc
    renderer = SummaryRenderer(config)
    click.echo(renderer.render(date_text, title, slug, sized))


@cli.command(name="list")
@click.argument(
    "posts_dir", type=click.Path(path_type=Path, exists=True, file_okay=False)
)
@click.option("--page", "page_number", type=int, default=1, show_default=True)
@click.option("--drafts", is_flag=True, help="Include draft posts")
@_config_option
def list_posts(
    posts_dir: Path, page_number: int, drafts: bool, config_path: Path | None
):
    """Render one listing page of post summaries."""
    config = _load_config_or_exit(config_path)
    try:
        summaries = load_summaries(posts_dir, include_drafts=drafts)
        page = summaries.page(page_number, config.posts_per_page)
    except (IndexError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(page.render(SummaryRenderer(config)))


def main():
    """Entry point for the CLI application."""
    cli()
