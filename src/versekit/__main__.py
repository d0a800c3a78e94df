"""CLI entry point for versekit."""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from versekit import __version__
from versekit.canon.books import DEFAULT_REGISTRY, Testament
from versekit.config import Settings
from versekit.engine import ScriptureEngine
from versekit.errors import ScriptureError
from versekit.reference.continuity import is_continuous

console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (default: VERSEKIT_LOG_LEVEL or WARNING)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """versekit - scripture reference parsing and verse retrieval."""
    settings = Settings.from_env()
    if log_level:
        settings.log_level = log_level.upper()
    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.command()
@click.option(
    "--testament",
    "-t",
    type=click.Choice(["OT", "NT"], case_sensitive=False),
    default=None,
    help="Only list one testament",
)
def books(testament: str | None):
    """List the 66 canonical books."""
    if testament:
        selected = DEFAULT_REGISTRY.slice(Testament(testament.upper()))
    else:
        selected = list(DEFAULT_REGISTRY)

    table = Table(title="Canonical Books")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Book", style="cyan")
    table.add_column("Testament", style="green")
    for book in selected:
        table.add_row(str(book.index), book.name, book.testament.value)
    console.print(table)


@cli.command()
@click.argument("search", required=False)
@click.pass_obj
def translations(settings: Settings, search: str | None):
    """List supported translations, optionally filtered."""
    engine = ScriptureEngine.from_settings(settings)
    found = engine.catalog.search(search) if search else list(engine.catalog)

    if not found:
        console.print(f"[yellow]No translations match '{escape(search or '')}'[/yellow]")
        sys.exit(1)

    table = Table(title="Translations")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    for t in found:
        marker = " [green](default)[/green]" if t.short_name == settings.default_translation else ""
        table.add_row(t.short_name, escape(t.full_name) + marker)
    console.print(table)


@cli.command()
@click.argument("reference")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_obj
def parse(settings: Settings, reference: str, as_json: bool):
    """Parse a reference and resolve its book.

    Example: versekit parse "Rom 8:1-4"
    """
    engine = ScriptureEngine.from_settings(settings)

    try:
        parsed = engine.parse_strict(reference)
    except ScriptureError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    if parsed is None:
        console.print(f"[red]Error: Cannot parse reference: '{escape(reference)}'[/red]")
        sys.exit(1)

    match = engine.normalizer.match(engine.parser.book_token(reference))
    result = {
        "book": parsed.book,
        "book_index": engine.registry.index_of(parsed.book),
        "chapter": parsed.chapter,
        "start_verse": parsed.start_verse,
        "end_verse": parsed.end_verse,
        "whole_chapter": parsed.is_whole_chapter,
        "label": str(parsed),
        "match": match.kind.value,
    }

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    console.print(Panel(f"[bold]{escape(str(parsed))}[/bold]", title="Reference"))
    if match.is_ambiguous:
        console.print(
            f"[yellow]'{escape(match.token)}' also matches: "
            f"{escape(', '.join(match.candidates[1:]))}[/yellow]"
        )
    if parsed.is_whole_chapter:
        console.print(
            f"[dim]Whole chapter: verses 1-{settings.whole_chapter_max_verse} will be requested[/dim]"
        )


@cli.command()
@click.argument("verses", nargs=-1)
def continuity(verses: tuple[str, ...]):
    """Check whether verses form one continuous passage.

    Example: versekit continuity "Psalms 22:31" "Psalms 23:1"
    """
    try:
        result = is_continuous(verses)
    except ScriptureError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    if result:
        console.print("[green]✓ Continuous passage[/green]")
    else:
        console.print("[yellow]✗ Not a continuous passage[/yellow]")
        sys.exit(1)


@cli.command()
@click.argument("reference")
@click.option("--translation", "-t", default=None, help="Translation code (default: NASB)")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_obj
def fetch(settings: Settings, reference: str, translation: str | None, as_json: bool):
    """Fetch verse text for one or more references.

    Example: versekit fetch "Romans 8:1-4; Psalm 23" -t KJV
    """
    engine = ScriptureEngine.from_settings(settings)
    translation = translation or settings.default_translation

    try:
        groups = asyncio.run(engine.fetch_passage(reference, translation))
    except ScriptureError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    if not groups:
        console.print("[yellow]No verses found for the given references[/yellow]")
        sys.exit(1)

    if as_json:
        result = [
            {
                "reference": group.reference.original,
                "label": group.label,
                "verses": [
                    {"book": v.book, "chapter": v.chapter, "verse": v.verse, "text": v.text}
                    for v in group.verses
                ],
            }
            for group in groups
        ]
        click.echo(json.dumps(result, indent=2, ensure_ascii=False))
        return

    for group in groups:
        body = "\n".join(f"[dim]{v.verse}[/dim] {escape(v.text)}" for v in group.verses)
        console.print(Panel(body, title=f"{escape(group.label)} ({translation})"))


@cli.command()
@click.option("--host", default=None, help="Bind host (default: 127.0.0.1)")
@click.option("--port", "-p", type=int, default=None, help="Bind port")
@click.pass_obj
def serve(settings: Settings, host: str | None, port: int | None):
    """Run the HTTP API."""
    from versekit.api.main import run_server

    if host:
        settings.host = host
    if port:
        settings.port = port

    console.print(f"[bold blue]Serving on http://{settings.host}:{settings.port}[/bold blue]")
    run_server(settings)


if __name__ == "__main__":
    cli()
