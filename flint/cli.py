"""Command-line interface for Flint.

This module defines the CLI commands using Click framework.

Commands:
- build: Build the site into the output directory.
- compile: Compile a single Markdown document and print the HTML.
- tags: List built-in and component tags available to skeletons.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from . import __version__


@click.group()
@click.version_option(version=__version__, prog_name="flint")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Flint static site compiler."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--drafts", is_flag=True, help="Include draft content")
@click.option("--base-path", default=None, help="Path prefix the site is served under (overrides flint.yaml)")
@click.option("--site-url", default=None, help="Absolute site URL for sitemap/robots/llms.txt (overrides flint.yaml)")
@click.option("--theme", default=None, help="Theme whose templates overlay the project's (overrides flint.yaml)")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Parallel compile workers")
@click.option(
    "--output",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write the site here instead of the configured output_dir",
)
def build(
    drafts: bool,
    base_path: str | None,
    site_url: str | None,
    theme: str | None,
    workers: int | None,
    output_dir: Path | None,
):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import build_site

    result = build_site(
        project_root,
        include_drafts=drafts,
        output_dir_override=output_dir.resolve() if output_dir else None,
        overrides={
            "base_path": base_path,
            "site_url": site_url,
            "theme": theme,
            "workers": workers,
        },
    )
    if result.errors:
        click.echo(
            click.style(f"Build failed for {len(result.errors)} file(s):", fg="red", bold=True),
            err=True,
        )
        for exc in result.errors:
            click.echo(click.style(f"  File: {_display_path(exc.source_path, project_root)}", fg="yellow"), err=True)
            click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1)
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")
    for name in result.artifacts:
        click.echo(f"  wrote {name}")


@cli.command(name="compile")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--no-html", is_flag=True, help="Escape raw HTML in prose")
@click.option("--breaks", is_flag=True, help="Render single newlines as <br>")
@click.option("--heading-ids", is_flag=True, help="Add slug ids to headings")
def compile_command(source: Path, no_html: bool, breaks: bool, heading_ids: bool):
    """Compile a single Markdown document and print the HTML body."""
    from .compiler import DocumentCompiler
    from .errors import FlintError

    compiler = DocumentCompiler(
        allow_html=not no_html, breaks=breaks, heading_ids=heading_ids
    )
    try:
        document = compiler.compile_with_frontmatter(
            source.read_text(encoding="utf-8"), path=source
        )
    except FlintError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(document.html, nl=False)


@cli.command()
def tags():
    """List tags available to page skeletons."""
    project_root = Path.cwd()
    from .build import create_tag_registry, load_config
    from .engine import BUILTIN_TAGS

    registry = create_tag_registry(project_root, load_config(project_root))
    click.echo(click.style("Built-in:", bold=True))
    click.echo("  " + ", ".join(f"{{{{{name}}}}}" for name in BUILTIN_TAGS))
    click.echo(click.style("Components:", bold=True))
    if not len(registry):
        click.echo("  (none)")
    for definition in registry.all():
        name = f"{{{{{definition.tag}}}}}" if definition.tag else "(pattern)"
        label = " ".join(part for part in (definition.icon, definition.label) if part)
        click.echo(f"  {name:<20} {label}")
        if definition.description:
            click.echo(f"  {'':<20} {definition.description}")


def _display_path(path: Path, project_root: Path) -> Path:
    try:
        return path.relative_to(project_root)
    except ValueError:
        return path


def main():
    """Entry point for the CLI application."""
    cli()
