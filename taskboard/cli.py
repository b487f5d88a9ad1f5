#!/usr/bin/env python3
"""Taskboard conflict CLI.

Command-line interface for checking schedules against stored tasks and for
managing stored conflict records.
"""

import json
from datetime import date
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import configure_logging, get_settings
from .database import create_db_and_tables, get_sync_session, verify_database
from .exceptions import TaskboardError
from .schemas.unified_models import (
    ConflictCheckRequest,
    ConflictSeverity,
    ConflictType,
    TaskPriority,
)
from .services import ConflictService


# Initialize CLI and console
app = typer.Typer(help="Taskboard scheduling conflict CLI")
console = Console()

SEVERITY_STYLES = {
    "low": "green",
    "medium": "yellow",
    "high": "bold red",
}


class TaskboardCLI:
    """CLI wrapper owning the conflict service."""

    def __init__(self):
        """Initialize CLI without opening a database session."""
        self.service: ConflictService | None = None

    def get_service(self) -> ConflictService:
        """Create the conflict service on first use."""
        if self.service is None:
            self.service = ConflictService(session=get_sync_session())
        return self.service

    def cleanup(self):
        """Close the service session."""
        if self.service is not None:
            self.service.close()
            self.service = None


# Global CLI instance
cli_instance = TaskboardCLI()


def _parse_date(value: str | None, option: str) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"{value!r} is not a YYYY-MM-DD date", param_hint=option) from e


def _parse_enum(value: str | None, enum_cls: type, option: str):
    if value is None:
        return None
    try:
        return enum_cls(value.lower())
    except ValueError as e:
        choices = ", ".join(member.value for member in enum_cls)
        raise typer.BadParameter(
            f"{value!r} is not one of: {choices}", param_hint=option
        ) from e


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error: {escape(str(error))}[/bold red]")
    raise typer.Exit(code=1)


def _severity_text(severity: str) -> str:
    style = SEVERITY_STYLES.get(severity, "white")
    return f"[{style}]{severity.upper()}[/{style}]"


def _print_records(records: list[dict[str, Any]]) -> None:
    table = Table(title="Stored Conflicts")
    table.add_column("ID", style="cyan")
    table.add_column("Task")
    table.add_column("Conflicting Task")
    table.add_column("Type")
    table.add_column("Severity")
    table.add_column("Message")

    for record in records:
        task = record["task"] or {}
        other = record["conflicting_task"] or {}
        table.add_row(
            str(record["id"]),
            f"{record['task_id']}: {task.get('title', '')}",
            f"{record['conflicting_task_id']}: {other.get('title', '')}",
            record["type"].upper(),
            _severity_text(record["severity"]),
            record["message"],
        )
    console.print(table)


@app.command()
def init_db():
    """Create the database tables."""
    try:
        create_db_and_tables()
        counts = verify_database()
    except Exception as e:
        _fail(e)

    console.print(
        Panel.fit(
            "\n".join(f"{name}: {count}" for name, count in counts.items()),
            title=f"Database ready at {get_settings().database.url}",
        )
    )


@app.command()
def check(
    task_id: int | None = typer.Option(
        None, "--task-id", help="Existing task being edited (excluded from comparison)"
    ),
    title: str = typer.Option("", "--title", help="Title of the candidate task"),
    start: str | None = typer.Option(None, "--start", help="Start date (YYYY-MM-DD)"),
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    hours: float | None = typer.Option(
        None, "--hours", min=0.0, help="Estimated hours of effort"
    ),
    priority: str | None = typer.Option(
        None, "--priority", "-p", help="low, medium, high or urgent"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """Check a candidate schedule against the stored active tasks."""
    request = ConflictCheckRequest(
        task_id=task_id,
        title=title,
        start_date=_parse_date(start, "--start"),
        due_date=_parse_date(due, "--due"),
        estimated_hours=hours,
        priority=_parse_enum(priority, TaskPriority, "--priority"),
    )

    try:
        result = cli_instance.get_service().check_conflicts(request)
    except TaskboardError as e:
        _fail(e)
    finally:
        cli_instance.cleanup()

    if as_json:
        console.print_json(json.dumps(result.model_dump(mode="json")))
        return

    if not result.has_conflicts:
        console.print("[green]No conflicts found[/green]")
        return

    for conflict in result.conflicts:
        body = [conflict.message, ""]
        body.extend(f"- {suggestion}" for suggestion in conflict.suggestions)
        console.print(
            Panel(
                "\n".join(body),
                title=(
                    f"{conflict.type.value.upper()} "
                    f"{_severity_text(conflict.severity.value)} "
                    f"with #{conflict.conflicting_task_id} "
                    f"{conflict.conflicting_task_title}"
                ),
            )
        )


@app.command()
def refresh(
    task_id: int = typer.Argument(..., help="ID of the task that was created or updated"),
):
    """Recompute and replace the stored conflicts of a task."""
    try:
        records = cli_instance.get_service().refresh_conflicts(task_id)
    except TaskboardError as e:
        _fail(e)
    finally:
        cli_instance.cleanup()

    console.print(f"[green]Stored {len(records)} conflict(s) for task {task_id}[/green]")


@app.command("list")
def list_conflicts(
    task_id: int | None = typer.Option(
        None, "--task-id", help="Only conflicts involving this task"
    ),
    severity: str | None = typer.Option(
        None, "--severity", "-s", help="Filter by severity (low, medium, high)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """List stored conflicts, newest first."""
    severity_filter = _parse_enum(severity, ConflictSeverity, "--severity")
    try:
        records = cli_instance.get_service().list_conflicts(
            task_id=task_id, severity=severity_filter
        )
    except TaskboardError as e:
        _fail(e)
    finally:
        cli_instance.cleanup()

    if as_json:
        console.print_json(json.dumps(records))
    elif not records:
        console.print("[yellow]No stored conflicts[/yellow]")
    else:
        _print_records(records)


@app.command()
def show(conflict_id: int = typer.Argument(..., help="ID of the conflict to show")):
    """Show a stored conflict."""
    try:
        record = cli_instance.get_service().get_conflict(conflict_id)
    except TaskboardError as e:
        _fail(e)
    finally:
        cli_instance.cleanup()

    console.print_json(json.dumps(record))


@app.command()
def update(
    conflict_id: int = typer.Argument(..., help="ID of the conflict to edit"),
    severity: str | None = typer.Option(None, "--severity", "-s", help="New severity"),
    message: str | None = typer.Option(None, "--message", "-m", help="New message"),
):
    """Edit the severity and/or message of a stored conflict."""
    new_severity = _parse_enum(severity, ConflictSeverity, "--severity")
    if new_severity is None and not message:
        console.print("[yellow]No changes specified[/yellow]")
        return

    try:
        record = cli_instance.get_service().update_conflict(
            conflict_id, severity=new_severity, message=message
        )
    except TaskboardError as e:
        _fail(e)
    finally:
        cli_instance.cleanup()

    console.print(
        f"[green]Updated conflict {record['id']}: "
        f"{record['severity'].upper()} - {record['message']}[/green]"
    )


@app.command()
def resolve(conflict_id: int = typer.Argument(..., help="ID of the conflict to resolve")):
    """Delete a stored conflict and note the resolution on both tasks."""
    try:
        cli_instance.get_service().resolve_conflict(conflict_id)
    except TaskboardError as e:
        _fail(e)
    finally:
        cli_instance.cleanup()

    console.print(f"[green]Conflict {conflict_id} resolved[/green]")


@app.command()
def record(
    task_id: int = typer.Argument(..., help="Task the conflict belongs to"),
    conflicting_task_id: int = typer.Argument(..., help="The other task"),
    message: str = typer.Option(..., "--message", "-m", help="Conflict description"),
    conflict_type: str = typer.Option(
        "overlap", "--type", "-t", help="overlap or overload"
    ),
    severity: str | None = typer.Option(
        None, "--severity", "-s", help="low, medium or high (default medium)"
    ),
):
    """Store a manually reported conflict between two tasks."""
    parsed_type = _parse_enum(conflict_type, ConflictType, "--type")
    parsed_severity = _parse_enum(severity, ConflictSeverity, "--severity")
    try:
        stored = cli_instance.get_service().record_conflict(
            task_id,
            conflicting_task_id,
            parsed_type,
            message,
            severity=parsed_severity,
        )
    except (TaskboardError, ValidationError) as e:
        _fail(e)
    finally:
        cli_instance.cleanup()

    console.print(f"[green]Recorded conflict {stored['id']}[/green]")


@app.command()
def config():
    """Show the effective configuration."""
    console.print(
        Panel(
            json.dumps(get_settings().summary(), indent=2),
            title="Current Configuration",
            border_style="blue",
        )
    )


@app.callback()
def main():
    """Taskboard scheduling conflict CLI.

    Detects overlapping schedules and workload overloads between tasks and
    manages the stored conflict records.
    """
    configure_logging(get_settings())


if __name__ == "__main__":
    app()
