"""Rich components for the CLI."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from yammer.core.domain.models import CompositeDocument, EntryKind


def build_entries_table(composite: CompositeDocument, *, title: str | None = None) -> Table:
    """One row per composed entry, in output order."""

    table = Table(title=title)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Kind", style="white")
    table.add_column("Source", style="dim")
    for kind, name, origin in composite.entries():
        style = "magenta" if kind is EntryKind.EXTENSION else None
        table.add_row(escape(name), kind.value, escape(origin), style=style)
    return table


def print_error(console: Console, message: str) -> None:
    console.print(f"[bold red]error:[/bold red] {escape(message)}", soft_wrap=True)


def print_written(console: Console, output_path: Path, composite: CompositeDocument) -> None:
    console.print(build_entries_table(composite, title=str(output_path)))
    console.print(
        f"[green]Wrote[/green] {len(composite.services)} service(s) and "
        f"{len(composite.extensions)} extension field(s) to {escape(str(output_path))}"
    )
