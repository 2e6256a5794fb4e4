"""Portable Text CLI."""

import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from portabletext.codec import decode, encode_string
from portabletext.config import settings
from portabletext.errors import DecodeError
from portabletext.extract import find_links, render_outline, shift_headings, table_of_contents
from portabletext.models import Document, new_block, new_node
from portabletext.validation import ValidationOptions, validate

app = typer.Typer(
    name="portabletext",
    help="Inspect, validate and rewrite Portable Text JSON documents",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("portabletext")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for all commands."""
    level = logging.DEBUG if verbose else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load(path: str) -> Document:
    """Decode a file (or stdin for "-"), exiting with status 2 on failure."""
    try:
        if path == "-":
            return decode(sys.stdin.buffer)
        with open(path, "rb") as f:
            return decode(f)
    except OSError as e:
        err_console.print(f"[bold red]Cannot read {escape(path)}:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=2)
    except DecodeError as e:
        err_console.print(f"[bold red]Decode failed:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=2)


def _print_json(doc: Document, indent: Optional[int]) -> None:
    # soft_wrap keeps rich from inserting line breaks into the JSON
    console.print(
        encode_string(doc, indent=indent),
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


@app.command()
def check(
    path: str = typer.Argument(..., help="Portable Text JSON file, or - for stdin"),
    require_keys: bool = typer.Option(
        settings.require_keys, "--require-keys", help="Require _key on every node"
    ),
    check_mark_refs: bool = typer.Option(
        settings.check_mark_def_refs,
        "--check-mark-refs",
        help="Require span marks to resolve to markDefs",
    ),
    disallow_empty_text: bool = typer.Option(
        not settings.allow_empty_text,
        "--disallow-empty-text",
        help="Flag spans with empty text",
    ),
) -> None:
    """Validate a document and list every finding."""
    doc = _load(path)
    options = ValidationOptions(
        require_keys=require_keys,
        check_mark_def_refs=check_mark_refs,
        allow_empty_text=not disallow_empty_text,
    )
    diagnostics = validate(doc, options)
    if not diagnostics:
        console.print(f"[bold green]OK[/bold green] {len(doc)} nodes, no findings")
        return

    for diagnostic in diagnostics:
        console.print(f"[yellow]{escape(diagnostic.path)}[/yellow]: {escape(diagnostic.message)}")
    console.print(f"[bold red]{len(diagnostics)} finding(s)[/bold red]")
    raise typer.Exit(code=1)


@app.command()
def fmt(
    path: str = typer.Argument(..., help="Portable Text JSON file, or - for stdin"),
    indent: Optional[int] = typer.Option(settings.indent, help="Indent width; compact if unset"),
) -> None:
    """Re-encode a document (lossless)."""
    _print_json(_load(path), indent)


@app.command()
def text(
    path: str = typer.Argument(..., help="Portable Text JSON file, or - for stdin"),
) -> None:
    """Print a plain text outline of a document."""
    for line in render_outline(_load(path)):
        console.print(line, markup=False, highlight=False, emoji=False)


@app.command()
def links(
    path: str = typer.Argument(..., help="Portable Text JSON file, or - for stdin"),
) -> None:
    """List link annotations and the text they cover."""
    found = find_links(_load(path))
    if not found:
        console.print("No links found")
        return

    table = Table(title=f"Links ({len(found)})")
    table.add_column("Key")
    table.add_column("URL")
    table.add_column("Title")
    table.add_column("Text")
    for link in found:
        table.add_row(link.key or "", link.href or "", link.title or "", " | ".join(link.texts))
    console.print(table)


@app.command()
def toc(
    path: str = typer.Argument(..., help="Portable Text JSON file, or - for stdin"),
) -> None:
    """Print the table of contents built from heading blocks."""
    entries = table_of_contents(_load(path))
    if not entries:
        console.print("No headings found")
        return
    for entry in entries:
        indent = "  " * (entry.level - 1)
        console.print(f"{indent}{entry.text}", markup=False, highlight=False, emoji=False)


@app.command()
def headings(
    path: str = typer.Argument(..., help="Portable Text JSON file, or - for stdin"),
    downgrade: bool = typer.Option(False, "--downgrade", help="h1 -> h2 instead of h2 -> h1"),
    indent: Optional[int] = typer.Option(settings.indent, help="Indent width; compact if unset"),
) -> None:
    """Shift every heading one level and print the result."""
    _print_json(shift_headings(_load(path), downgrade=downgrade), indent)


def sample_document() -> Document:
    """Build a small document with headings, marks, a list, a link and a custom node."""
    link_block = (
        new_block("normal")
        .add_span("For more info, visit ")
        .add_span("our website", "link1")
        .add_span(".")
        .add_mark_def("link1", "link", {"href": "https://example.com"})
    )
    callout = new_node("callout")
    callout.raw["text"] = "This is a custom callout box!"
    callout.raw["variant"] = "info"

    doc = [
        new_block("h1").add_span("My Blog Post"),
        new_block("normal")
        .add_span("This is an introduction with ")
        .add_span("bold text", "strong")
        .add_span(" and ")
        .add_span("italic text", "em")
        .add_span("."),
        new_block("h2").add_span("Key Points"),
        new_block("normal").add_span("First important point"),
        new_block("normal").add_span("Second important point"),
        link_block,
        callout,
    ]
    doc[3].list_item = "bullet"
    doc[4].list_item = "bullet"
    return doc


@app.command()
def sample(
    indent: Optional[int] = typer.Option(settings.indent, help="Indent width; compact if unset"),
) -> None:
    """Print a programmatically built example document."""
    doc = sample_document()
    for diagnostic in validate(doc):
        logger.warning("Sample document: %s", diagnostic)
    _print_json(doc, indent)


if __name__ == "__main__":
    app()
