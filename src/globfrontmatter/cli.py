"""Command line interface for globfrontmatter."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from globfrontmatter.config import DEFAULT_BASE, LoaderOptions
from globfrontmatter.ingestion.sources import (
    SourceParseError,
    build_authoritative_mapping,
    collect_source_document_paths,
)
from globfrontmatter.loader.glob_frontmatter import GlobFrontmatterLoader, read_content_body
from globfrontmatter.loader.store import MemoryStore
from globfrontmatter.models import DataEntry, LoaderContext
from globfrontmatter.utils.text import extract_leading_heading


console = Console()
app = typer.Typer(help="globfrontmatter - layered frontmatter for markdown content")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2, default=str, ensure_ascii=False)


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[red]{escape(str(exc))}[/red]")
    raise typer.Exit(code=1)


async def _identity_parse(entry: DataEntry) -> Dict[str, Any]:
    return entry.data


@app.command("map")
def show_map(
    base: Path = typer.Argument(..., help="Content base directory."),
    frontmatter: Optional[Path] = typer.Option(
        None, "--frontmatter", "-f", help="Centralized frontmatter file"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the mapping as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show the external frontmatter resolved for each content path."""
    _setup_logging(verbose)
    try:
        fm_map = build_authoritative_mapping(base, frontmatter)
    except SourceParseError as exc:
        _fail(exc)

    if as_json:
        typer.echo(_dump(fm_map))
        return

    if not fm_map:
        console.print("[yellow]No external frontmatter found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Path")
    table.add_column("Frontmatter")
    for path, record in sorted(fm_map.items()):
        table.add_row(path, json.dumps(record, default=str, ensure_ascii=False))
    console.print(table)


@app.command()
def sources(
    base: Path = typer.Argument(..., help="Content base directory."),
    frontmatter: Optional[Path] = typer.Option(
        None, "--frontmatter", "-f", help="Centralized frontmatter file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List the frontmatter source files that feed the mapping."""
    _setup_logging(verbose)
    paths = collect_source_document_paths(base, frontmatter)
    if not paths:
        console.print("[yellow]No frontmatter sources found.[/yellow]")
        return
    for path in paths:
        typer.echo(str(path))


@app.command()
def title(
    file: Path = typer.Argument(..., help="Markdown content file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print the title inferred from a file's leading heading."""
    _setup_logging(verbose)
    if not file.is_file():
        raise typer.BadParameter(f"File not found: {file}")

    extraction = extract_leading_heading(read_content_body(file))
    if extraction is None:
        console.print("[yellow]No leading heading found.[/yellow]")
        raise typer.Exit(code=1)
    typer.echo(extraction.title)


@app.command()
def resolve(
    root: Path = typer.Argument(Path("."), help="Project root."),
    pattern: List[str] = typer.Option(["**/*.md"], "--pattern", "-p", help="Glob pattern"),
    base: str = typer.Option(DEFAULT_BASE, "--base", "-b", help="Content base, relative to root"),
    frontmatter: Optional[str] = typer.Option(
        None, "--frontmatter", "-f", help="Centralized frontmatter file, relative to root"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print entries as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Load every matching file and print its merged frontmatter."""
    _setup_logging(verbose)
    options = LoaderOptions(pattern=pattern, base=base, frontmatter=frontmatter)
    store = MemoryStore()
    context = LoaderContext(root=root.resolve(), parse_data=_identity_parse, store=store)

    try:
        asyncio.run(GlobFrontmatterLoader(options).load(context))
    except SourceParseError as exc:
        _fail(exc)

    entries = sorted(store.entries(), key=lambda entry: entry.id)
    if as_json:
        typer.echo(_dump({entry.id: entry.data for entry in entries}))
        return

    if not entries:
        console.print("[yellow]No content files found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Id")
    table.add_column("Title")
    table.add_column("Frontmatter")
    for entry in entries:
        data = dict(entry.data)
        entry_title = data.pop("title", "")
        table.add_row(entry.id, str(entry_title), json.dumps(data, default=str, ensure_ascii=False))
    console.print(table)
