"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of schedules, records and addresses.
"""

from typing import Iterable, Literal

from rich.console import Console
from rich.table import Table

from ..core.addressing import (
    exercise_name_column,
    exercise_notes_column,
    numeric_columns_for,
    parse_table_address,
    table_address,
)
from ..core.config import EXERCISES_PER_DAY, WEEKDAY_NAMES
from ..core.curriculum import (
    WORKOUT_TYPE_LABELS,
    phase_of,
    rep_range_of,
    rest_period_seconds_of,
    workout_name_of,
    workout_type_of,
)
from ..core.models import (
    CompletedWorkoutRecord,
    CurriculumPosition,
    Schedule,
    today_str,
    weekday_number,
)

EntryStatus = Literal["done", "missed", "next", "planned"]

console = Console()


def format_rest_days(rest_days: Iterable[int]) -> str:
    """Human-readable rest-day list, e.g. 'Sunday, Saturday'."""
    days = sorted(rest_days)
    if not days:
        return "none"
    return ", ".join(WEEKDAY_NAMES[d] for d in days)


def entry_statuses(
    schedule: Schedule,
    completed_dates: set[str],
    today: str | None = None,
) -> dict[str, EntryStatus]:
    """
    Classify each schedule entry.

    done    - backed by a completed record
    missed  - in the past without a record
    next    - first open entry dated today or later
    planned - every later projection
    """
    today = today if today is not None else today_str()
    statuses: dict[str, EntryStatus] = {}
    next_seen = False
    for date in sorted(schedule):
        if date in completed_dates:
            statuses[date] = "done"
        elif date < today:
            statuses[date] = "missed"
        elif not next_seen:
            statuses[date] = "next"
            next_seen = True
        else:
            statuses[date] = "planned"
    return statuses


_STATUS_STYLE = {
    "done": "[green]done[/green]",
    "missed": "[red]missed[/red]",
    "next": "[bold cyan]next[/bold cyan]",
    "planned": "[dim]planned[/dim]",
}


def _position_cells(position: CurriculumPosition) -> list[str]:
    return [
        str(position.week),
        str(position.day),
        str(phase_of(position.week)),
        WORKOUT_TYPE_LABELS[workout_type_of(position.day)],
        rep_range_of(position.week, position.day),
        f"{rest_period_seconds_of(position.week, position.day)}s",
    ]


def format_schedule_table(
    schedule: Schedule,
    completed_dates: set[str],
    today: str | None = None,
    title: str = "Training schedule",
) -> Table:
    """Build a Rich table of schedule entries."""
    statuses = entry_statuses(schedule, completed_dates, today)

    table = Table(title=title)
    table.add_column("Date", style="cyan")
    table.add_column("Weekday")
    table.add_column("Wk", justify="right")
    table.add_column("Day", justify="right")
    table.add_column("Phase", justify="right")
    table.add_column("Type")
    table.add_column("Reps", justify="right")
    table.add_column("Rest", justify="right")
    table.add_column("Status")

    for date, position in sorted(schedule.items()):
        table.add_row(
            date,
            WEEKDAY_NAMES[weekday_number(date)][:3],
            *_position_cells(position),
            _STATUS_STYLE[statuses[date]],
        )
    return table


def print_schedule(
    schedule: Schedule,
    completed_dates: set[str],
    today: str | None = None,
    title: str = "Training schedule",
) -> None:
    """Print a schedule table."""
    if not schedule:
        print_info("Nothing scheduled.")
        return
    console.print(format_schedule_table(schedule, completed_dates, today, title))


def print_schedule_changes(before: Schedule, after: Schedule) -> None:
    """Print the dates whose assignment differs between two schedules."""
    changed = sorted(
        d for d in set(before) | set(after) if before.get(d) != after.get(d)
    )
    if not changed:
        print_info("No changes.")
        return

    table = Table(title="Schedule changes")
    table.add_column("Date", style="cyan")
    table.add_column("Weekday")
    table.add_column("Before")
    table.add_column("After")
    for date in changed:
        old, new = before.get(date), after.get(date)
        table.add_row(
            date,
            WEEKDAY_NAMES[weekday_number(date)][:3],
            str(old) if old else "[dim]-[/dim]",
            f"[bold]{new}[/bold]" if new else "[dim]-[/dim]",
        )
    console.print(table)


def print_records(records: list[CompletedWorkoutRecord]) -> None:
    """Print completed workouts with 1-based IDs (used by delete-record)."""
    if not records:
        print_info("No completed workouts yet.")
        return

    table = Table(title="Completed workouts")
    table.add_column("#", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Wk", justify="right")
    table.add_column("Day", justify="right")
    table.add_column("Workout")
    for i, record in enumerate(records, 1):
        table.add_row(
            str(i),
            record.date,
            str(record.week),
            str(record.day),
            workout_name_of(record.day),
        )
    console.print(table)


def print_table_addresses(addresses: list[str]) -> None:
    """Print every day table with its curriculum position."""
    table = Table(title="Workout tracking tables")
    table.add_column("Table", style="cyan")
    table.add_column("Phase", justify="right")
    table.add_column("Workout")
    for address in addresses:
        position = parse_table_address(address)
        table.add_row(address, str(phase_of(position.week)), workout_name_of(position.day))
    console.print(table)


def print_column_layout(position: CurriculumPosition, exercises: Iterable[int] | None = None) -> None:
    """Print the table address and column names for one curriculum day."""
    console.print(f"[bold]{table_address(position.week, position.day)}[/bold]")
    console.print(f"{workout_name_of(position.day)}")

    table = Table()
    table.add_column("Ex", justify="right")
    table.add_column("Name column")
    table.add_column("Notes column")
    table.add_column("Set columns")
    for exercise in exercises if exercises is not None else range(1, EXERCISES_PER_DAY + 1):
        table.add_row(
            str(exercise),
            exercise_name_column(exercise),
            exercise_notes_column(exercise),
            "\n".join(numeric_columns_for(exercise)),
        )
    console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
