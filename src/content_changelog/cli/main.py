"""Main CLI entry point."""

import logging
from typing import Optional

import structlog
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from content_changelog.errors import ChangeLogError

app = typer.Typer(
    name="changelog",
    help="Content change log CLI",
    add_completion=False
)

console = Console()


def _reader():
    from content_changelog.services import ChangeLogReader

    return ChangeLogReader()


def _fail(error: Exception) -> None:
    console.print(f"[red]{escape(str(error))}[/red]")
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", help="Log at DEBUG level")
):
    """Configure logging for every command."""
    from content_changelog.config import get_settings

    level_name = "DEBUG" if verbose else get_settings().log_level.upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


@app.command()
def init_db(
    force: bool = typer.Option(False, "--force", "-f", help="Drop and recreate the change log table")
):
    """Initialize the change log table."""
    from content_changelog.database import init_database
    from content_changelog.models import CHANGE_LOG_TABLE

    with console.status("Initializing database..."):
        created = init_database(drop=force)

    if force:
        console.print(f"[yellow]Recreated {CHANGE_LOG_TABLE}[/yellow]")
    elif created:
        console.print(f"[green]Created {CHANGE_LOG_TABLE}[/green]")
    else:
        console.print(f"{CHANGE_LOG_TABLE} already present")


@app.command("list")
def list_entries(
    content_type: Optional[str] = typer.Option(None, "--content-type", "-t", help="Content type slug"),
    content_id: Optional[int] = typer.Option(None, "--content-id", "-c", help="Content record ID"),
    limit: Optional[int] = typer.Option(20, "--limit", "-n", help="Maximum entries to show"),
    offset: Optional[int] = typer.Option(None, "--offset", help="Entries to skip"),
    order: Optional[str] = typer.Option(None, "--order", help="Column to order by"),
    direction: str = typer.Option("ASC", "--direction", help="ASC or DESC"),
):
    """List change log entries."""
    reader = _reader()
    options = {
        "contentid": content_id,
        "limit": limit,
        "offset": offset,
        "order": order,
        "direction": direction,
    }

    try:
        if content_type:
            entries = reader.get_by_content_type(content_type, options)
            total = reader.count(content_type, {"contentid": content_id})
        else:
            entries = reader.get_all(options)
            total = reader.count()
    except ChangeLogError as e:
        _fail(e)

    table = Table(title=f"Change Log ({len(entries)} of {total})")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Content", justify="right")
    table.add_column("Mutation")
    table.add_column("Title")
    table.add_column("Fields")

    for entry in entries:
        table.add_row(
            str(entry.id),
            entry.date.isoformat(sep=" ", timespec="seconds"),
            entry.content_type,
            str(entry.content_id),
            entry.effective_mutation_type or "-",
            escape(entry.title or ""),
            ", ".join(entry.changed_fields),
        )

    console.print(table)


@app.command()
def show(
    content_type: str = typer.Argument(..., help="Content type slug"),
    content_id: int = typer.Argument(..., help="Content record ID"),
    id: int = typer.Argument(..., help="Change log entry ID"),
):
    """Show one change log entry with its neighbours."""
    reader = _reader()

    try:
        entry = reader.get_entry(content_type, content_id, id)
        if entry is None:
            console.print(f"[yellow]No change log entry {id} for {content_type}/{content_id}[/yellow]")
            raise typer.Exit(code=1)
        prev_entry = reader.get_prev_entry(content_type, content_id, id)
        next_entry = reader.get_next_entry(content_type, content_id, id)
    except ChangeLogError as e:
        _fail(e)

    table = Table(title=f"Change Log Entry {entry.id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Content", f"{entry.content_type}/{entry.content_id}")
    table.add_row("Date", entry.date.isoformat(sep=" ", timespec="seconds"))
    table.add_row("Title", escape(entry.title or ""))
    table.add_row("Owner", str(entry.owner_id) if entry.owner_id is not None else "-")
    table.add_row("Mutation", entry.effective_mutation_type or "-")
    table.add_row("Comment", escape(entry.comment or ""))
    for name in entry.changed_fields:
        table.add_row(f"  {name}", escape(repr(entry.diff[name])))
    table.add_row("Previous", str(prev_entry.id) if prev_entry else "-")
    table.add_row("Next", str(next_entry.id) if next_entry else "-")

    console.print(table)


if __name__ == "__main__":
    app()
