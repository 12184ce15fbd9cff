"""
Rendering functions for repostamp output.

This module handles all pretty-printing and table formatting.
Core functions return data, this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import Optional

from .domain import Description, Situation

console = Console()


def _new_table(title: str) -> Table:
    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    return table


def render_situation_table(situation: Situation, description: Optional[Description] = None) -> None:
    """
    Render a situation (and optionally its description) as a table.

    Args:
        situation: Situation to show
        description: Description of the same revision, if computed
    """
    table = _new_table("Repository Situation")

    if situation.root_directory:
        table.add_row("Root", situation.root_directory)
    if situation.has_commit:
        table.add_row("Commit", f"[green]{situation.hash}[/green]")
        table.add_row("Committed", situation.committed_at.isoformat())
    else:
        table.add_row("Commit", "[yellow]no commits yet[/yellow]")
    table.add_row("Branch", situation.branch or "[yellow](detached)[/yellow]")
    table.add_row("Tags", ", ".join(situation.tags) if situation.tags else "[dim]none[/dim]")
    table.add_row("Clean", "[green]yes[/green]" if situation.clean else "[red]no[/red]")

    if description is not None:
        if description.tag:
            table.add_row("Nearest tag", f"{description.tag_name} ({description.depth} commits back)")
        else:
            table.add_row("Nearest tag", "[dim]none[/dim]")

    console.print(table)

