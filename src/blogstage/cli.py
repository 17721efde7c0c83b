"""CLI interface for Blogstage.

Command-line tool for serving and building the blog.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import click

from blogstage.config import Config


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_path: Path | None, **overrides: Any) -> Config:
    """Load config and apply CLI overrides, exiting on invalid configuration."""
    try:
        config = Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
    return config.with_overrides(**overrides)


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover blogstage.toml)",
)
posts_dir_option = click.option(
    "--posts-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Posts directory (overrides config)",
)
snapshot_option = click.option(
    "--snapshot",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Prebuilt sitemap.json to read instead of scanning posts (overrides config)",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)


@click.group()
def cli() -> None:
    """Blogstage - a blog with tag-indexed listing pages."""


@cli.command()
@config_option
@posts_dir_option
@snapshot_option
@click.option(
    "--cache-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Cache directory (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@verbose_option
def serve(
    config_path: Path | None,
    posts_dir: Path | None,
    snapshot: Path | None,
    cache_dir: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Start the development server."""
    from blogstage.server import run_server

    _configure_logging(verbose)
    config = _load_config(
        config_path,
        host=host,
        port=port,
        posts_dir=posts_dir,
        cache_dir=cache_dir,
        snapshot=snapshot,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    if config.content.snapshot is not None:
        click.echo(f"Site map snapshot: {config.content.snapshot}")
    else:
        click.echo(f"Posts directory: {config.content.posts_dir}")
    click.echo(f"Blog root: {config.content.blog_root}")

    run_server(config)


@cli.command()
@config_option
@posts_dir_option
@snapshot_option
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Output directory (overrides config)",
)
@verbose_option
def build(
    config_path: Path | None,
    posts_dir: Path | None,
    snapshot: Path | None,
    output_dir: Path | None,
    verbose: bool,
) -> None:
    """Build static index and tag pages."""
    from blogstage.build import build_site
    from blogstage.core.loader import SiteMapLoader

    _configure_logging(verbose)
    config = _load_config(
        config_path,
        posts_dir=posts_dir,
        snapshot=snapshot,
        output_dir=output_dir,
    )

    loader = SiteMapLoader(
        config.content.posts_dir,
        blog_root=config.content.blog_root,
        snapshot=config.content.snapshot,
    )
    try:
        site_map = loader.load()
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    result = build_site(
        site_map,
        config.build.output_dir,
        config.site,
        blog_root=config.content.blog_root,
        bio=config.bio,
    )

    for path in result.written:
        click.echo(f"  -> {path.relative_to(result.output_dir)}")
    for tag in result.skipped_tags:
        click.echo(click.style(f"Warning: skipped tag {tag!r}", fg="yellow"), err=True)
    click.echo(
        click.style(
            f"\nBuilt {len(site_map)} posts, {len(result.tag_pages)} tag pages "
            f"into {result.output_dir}",
            fg="green",
            bold=True,
        ),
    )


@cli.command()
@config_option
@posts_dir_option
@snapshot_option
@click.option(
    "--counts",
    is_flag=True,
    help="Show the number of posts per tag",
)
def tags(
    config_path: Path | None,
    posts_dir: Path | None,
    snapshot: Path | None,
    counts: bool,
) -> None:
    """List the tags used across all posts."""
    from blogstage.core.loader import SiteMapLoader
    from blogstage.core.tags import build_tag_index

    config = _load_config(config_path, posts_dir=posts_dir, snapshot=snapshot)
    loader = SiteMapLoader(
        config.content.posts_dir,
        blog_root=config.content.blog_root,
        snapshot=config.content.snapshot,
    )
    try:
        site_map = loader.load()
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    index = build_tag_index(site_map)
    if not index:
        click.echo("No tags found.")
        return

    for tag, routes in index.items():
        if counts:
            click.echo(f"{tag} ({len(routes)})")
        else:
            click.echo(tag)


if __name__ == "__main__":
    cli()
