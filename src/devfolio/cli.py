"""devfolio CLI — check and inspect portfolio content."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable

from . import __version__
from .core.config import CONTENT_DIR_ENV, ContentConfig
from .core.errors import (
    ContentLoadError,
    ContentValidationError,
    EntryValidationError,
)
from .core.loader import check_collection, get_entry, load_collection, read_record
from .core.models import ProjectEntry
from .core.registry import get_collection, list_collections
from .core.site_config import APP_CONFIG
from .core.validator import validate

console = Console()

_STATUS_STYLE = {
    "active": "green",
    "paused": "yellow",
    "archived": "dim",
}


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _content_config(content_dir: str | None) -> ContentConfig:
    return ContentConfig.from_env(content_dir)


_content_dir_option = click.option(
    "--content-dir",
    "content_dir",
    type=click.Path(file_okay=False),
    envvar=CONTENT_DIR_ENV,
    default=None,
    help=f"Content root (default: src/content, or ${CONTENT_DIR_ENV}).",
)


@click.group()
@click.version_option(version=__version__, prog_name="devfolio")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def main(verbose: bool):
    """devfolio — validate portfolio content and inspect site settings."""
    _setup_logging(verbose)


@main.command()
@_content_dir_option
@click.option(
    "--collection",
    "collection_names",
    multiple=True,
    help="Collection to check (repeatable, default: all).",
)
def check(content_dir: str | None, collection_names: tuple[str, ...]):
    """Validate every entry in the content directory."""
    config = _content_config(content_dir)
    try:
        definitions = [get_collection(n) for n in collection_names] or list_collections()
    except ContentLoadError as exc:
        console.print(f"[bold red]✗[/bold red] {escape(str(exc))}")
        raise SystemExit(1)

    failures = 0
    for definition in definitions:
        report = check_collection(config, definition.name)
        if report.ok:
            console.print(
                f"[bold green]✓[/bold green] {definition.name}: "
                f"{len(report.entries)} entr{'y' if len(report.entries) == 1 else 'ies'} valid"
            )
            continue

        failures += len(report.failures)
        table = RichTable(title=f"{definition.name}: {len(report.failures)} invalid", show_lines=False)
        table.add_column("File", style="bold cyan")
        table.add_column("Field")
        table.add_column("Problem", style="red")
        for failure in report.failures:
            if isinstance(failure, EntryValidationError):
                for issue in failure.issues:
                    table.add_row(escape(str(failure.source)), escape(issue.path), escape(issue.reason))
            else:
                table.add_row(escape(str(getattr(failure, "source", ""))), "", escape(str(failure)))
        console.print(table)

    if failures:
        raise SystemExit(1)


@main.command("list")
@_content_dir_option
def list_projects(content_dir: str | None):
    """List projects with their status and tags."""
    config = _content_config(content_dir)
    try:
        entries = load_collection(config, "projects")
    except ContentLoadError as exc:
        console.print(f"[bold red]✗[/bold red] {escape(str(exc))}")
        raise SystemExit(1)

    table = RichTable(title="Projects", show_lines=False)
    table.add_column("Slug", style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Status")
    table.add_column("Tags")

    for entry in entries:
        project: ProjectEntry = entry.data
        status = project.status.value
        style = _STATUS_STYLE.get(status, "")
        table.add_row(
            escape(entry.slug),
            escape(project.name),
            f"[{style}]{status}[/]",
            escape(", ".join(project.tags)),
        )

    console.print(table)


@main.command()
@click.argument("slug")
@_content_dir_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the normalized record as JSON.")
def show(slug: str, content_dir: str | None, as_json: bool):
    """Show one normalized project entry."""
    from rich.tree import Tree

    config = _content_config(content_dir)
    try:
        entry = get_entry(config, "projects", slug)
    except ContentLoadError as exc:
        console.print(f"[bold red]✗[/bold red] {escape(str(exc))}")
        raise SystemExit(1)

    project: ProjectEntry = entry.data
    if as_json:
        click.echo(json.dumps(project.to_record(), indent=2))
        return

    tree = Tree(f"[bold]{escape(project.name)}[/bold]  [dim]{escape(str(entry.source_path))}[/dim]")
    tree.add(escape(project.summary))
    tree.add(f"[dim]Status:[/dim] {project.status.value}")
    if project.website:
        tree.add(f"[dim]Website:[/dim] {escape(project.website)}")
    if project.tags:
        tree.add(f"[dim]Tags:[/dim] {escape(', '.join(project.tags))}")
    tech = tree.add("[dim]Tech[/dim]")
    tech.add(f"Languages: {escape(', '.join(project.tech.languages)) or '—'}")
    tech.add(f"Frameworks: {escape(', '.join(project.tech.frameworks)) or '—'}")

    if project.repos:
        repos = tree.add(f"[dim]Repos ({len(project.repos)})[/dim]")
        for r in project.repos:
            lock = " [yellow](private)[/yellow]" if r.private else ""
            repos.add(f"{escape(r.name)}{lock} — {escape(r.role)} [dim]{escape(r.url)}[/dim]")
    if project.hosting:
        hosting = tree.add(f"[dim]Hosting ({len(project.hosting)})[/dim]")
        for h in project.hosting:
            hosting.add(escape(" / ".join(x for x in (h.provider, h.service, h.url) if x)))
    if project.components:
        comps = tree.add(f"[dim]Components ({len(project.components)})[/dim]")
        for c in project.components:
            label = f"{escape(c.name)} [cyan]{c.type.value}[/cyan] {escape(c.language)}"
            if c.framework:
                label += f" / {escape(c.framework)}"
            node = comps.add(label)
            for note in c.notes:
                node.add(f"[dim]{escape(note)}[/dim]")

    console.print(tree)


@main.command("validate")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def validate_file(path: str):
    """Validate a single Markdown, YAML or JSON project record."""
    try:
        record = read_record(Path(path))
        project = validate(record)
    except ContentValidationError as exc:
        console.print(f"[bold red]✗[/bold red] {escape(path)}")
        for issue in exc.issues:
            console.print(f"  [red]{escape(issue.path)}[/red]: {escape(issue.reason)}")
        raise SystemExit(1)
    except ContentLoadError as exc:
        console.print(f"[bold red]✗[/bold red] {escape(str(exc))}")
        raise SystemExit(1)

    console.print(f"[bold green]✓[/bold green] {escape(path)}: {escape(project.name)} ({project.status.value})")


@main.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Print as JSON.")
def site(as_json: bool):
    """Show the site configuration."""
    if as_json:
        click.echo(json.dumps(APP_CONFIG.as_dict(), indent=2))
        return

    table = RichTable(title="Site configuration", show_header=False)
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")
    for key, value in APP_CONFIG.as_dict().items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                table.add_row(f"{key}.{sub_key}", sub_value)
        else:
            table.add_row(key, value)
    console.print(table)


if __name__ == "__main__":
    main()
