"""Rich terminal reporter."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from stage_editor.output.models import EditResult


def render(result: EditResult, *, show_summary: bool = True, console: Optional[Console] = None) -> None:
    """Print the list of restaged files to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not result.updated_files:
        console.print()
        if result.dry_run:
            console.print("[bold yellow]Dry run — the index was not modified.[/bold yellow]")
        else:
            console.print("[bold green]✅ Nothing to restage — staged files unchanged.[/bold green]")
        if show_summary:
            _print_summary(console, result)
        return

    console.print()
    table = Table(title="Restaged files", title_style="bold", border_style="dim")
    table.add_column("#", justify="right", style="dim")
    table.add_column("File", style="magenta")
    for idx, path in enumerate(result.updated_files, start=1):
        table.add_row(str(idx), escape(path))
    console.print(table)

    if show_summary:
        _print_summary(console, result)


def _print_summary(console: Console, result: EditResult) -> None:
    console.print()
    console.print(f"[dim]Command:[/dim]       {escape(result.command) or '-'}")
    console.print(f"[dim]Patterns:[/dim]      {escape(', '.join(result.patterns)) or '(all files)'}")
    console.print(f"[dim]Updated:[/dim]       {len(result.updated_files)}")
    console.print(f"[dim]Working tree:[/dim]  {'patched' if result.update_working_tree else 'untouched'}")
    console.print(f"[dim]Duration:[/dim]      {result.duration_ms:.0f}ms")
