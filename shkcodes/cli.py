"""Command-line interface for shkcodes.

This module defines the CLI commands using the Click framework.

Commands:
- config: Print the resolved site configuration as JSON.
- theme: Print the merged theme, or the palette of one color mode.
- posts: List posts, newest first.
- new: Scaffold a new post.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import click
import questionary
import yaml

from . import __version__
from .config import ConfigError, load_config
from .content import POSTS_DIR, load_posts
from .theme import ThemeError, color_mode_palette, load_theme
from .utils import build_tags_index, format_date, slugify


@click.group()
@click.version_option(version=__version__, prog_name="shkcodes")
def cli():
    """shkcodes blog tooling."""


@cli.command()
def config():
    """Print the resolved site configuration as JSON."""
    site_config = _load_config_or_exit(Path.cwd())
    click.echo(json.dumps(site_config.to_dict(), indent=2, default=str))


@cli.command()
@click.option("--mode", help="Print the resolved palette of this color mode")
def theme(mode: str | None):
    """Print the merged theme as JSON."""
    project_root = Path.cwd()
    try:
        merged = load_theme(project_root)
        payload = merged if mode is None else color_mode_palette(merged, mode)
    except ThemeError as exc:
        _report_error("Theme error:", exc.source_path, exc.message, project_root)
        raise SystemExit(1) from None
    click.echo(json.dumps(payload, indent=2, default=str))


@cli.command()
@click.option("--tag", help="Only list posts carrying this tag")
@click.option("--drafts", is_flag=True, help="Include draft posts")
def posts(tag: str | None, drafts: bool):
    """List posts, newest first."""
    project_root = Path.cwd()
    site_config = _load_config_or_exit(project_root)
    format_string = site_config.theme_options.format_string
    loaded = load_posts(project_root, include_drafts=drafts)
    if tag is not None:
        loaded = build_tags_index(loaded).get(tag, [])
    if not loaded:
        click.echo("No posts found.")
        return
    for post in loaded:
        line = f"{format_date(post.date, format_string)}  {post.title}"
        if post.tags:
            line += click.style(f"  [{', '.join(post.tags)}]", fg="cyan")
        if post.draft:
            line += click.style("  (draft)", fg="yellow")
        click.echo(line)


@cli.command()
@click.argument("title")
@click.option("--description", help="Short description of the post")
@click.option("--tag", "tags", multiple=True, help="Tag to attach (repeatable)")
@click.option("--yes", is_flag=True, help="Do not prompt for missing fields")
def new(title: str, description: str | None, tags: tuple[str, ...], yes: bool):
    """Scaffold a new post under content/posts."""
    project_root = Path.cwd()
    title = title.strip()
    if not title:
        raise click.ClickException("Title cannot be empty")

    target_dir = project_root / POSTS_DIR / slugify(title)
    target_path = target_dir / "index.mdx"
    if target_dir.exists():
        raise click.ClickException(
            f"Post already exists: {target_dir.relative_to(project_root)}"
        )

    if description is None and not yes:
        description = questionary.text(
            "Description:",
            style=_questionary_style(),
        ).ask()
        if description is None:
            raise click.Abort()

    tag_list = [t.strip() for t in tags if t.strip()]
    if not tag_list and not yes:
        answer = questionary.text(
            "Tags (comma-separated):",
            style=_questionary_style(),
        ).ask()
        if answer is None:
            raise click.Abort()
        tag_list = [t.strip() for t in answer.split(",") if t.strip()]

    frontmatter = {
        "title": title,
        "date": datetime.now().date(),
        "description": (description or "").strip(),
        "tags": tag_list,
    }
    target_dir.mkdir(parents=True)
    content = (
        "---\n"
        + yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
        + "---\n\n"
    )
    target_path.write_text(content, encoding="utf-8")
    click.echo(f"Created {target_path.relative_to(project_root)}")


def _load_config_or_exit(project_root: Path):
    try:
        return load_config(project_root)
    except ConfigError as exc:
        _report_error("Invalid configuration:", exc.source_path, exc.message, project_root)
        raise SystemExit(1) from None


def _report_error(
    heading: str, source_path: Path | None, message: str, project_root: Path
) -> None:
    """Display a user-friendly error with its file context on stderr."""
    click.echo(click.style(heading, fg="red", bold=True), err=True)
    if source_path is not None:
        try:
            shown = source_path.relative_to(project_root)
        except ValueError:
            shown = source_path
        click.echo(click.style(f"  File: {shown}", fg="yellow"), err=True)
    click.echo(click.style(f"  Error: {message}", fg="white"), err=True)


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()
