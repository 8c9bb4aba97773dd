"""Session commands: log, history, delete-record."""

from typing import Annotated, Optional

import typer

from ...core.curriculum import describe_position
from ...core.errors import SchedulerError
from ...core.generator import next_position_after, recompute
from ...core.models import CompletedWorkoutRecord, today_str, weekday_number
from ...io.serializers import ValidationError
from .. import views
from ..app import RecordsPathOption, app, get_settings, get_store, load_inputs_or_exit


@app.command()
def log(
    records_path: RecordsPathOption = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", help="Workout date YYYY-MM-DD (default: today)"),
    ] = None,
    week: Annotated[
        Optional[int],
        typer.Option("--week", "-w", help="Curriculum week 1-6 (default: scheduled)"),
    ] = None,
    day: Annotated[
        Optional[int],
        typer.Option("--day", "-d", help="Curriculum day 1-6 (default: scheduled)"),
    ] = None,
) -> None:
    """
    Record a completed workout.

    Without --week/--day the workout scheduled for the date is logged, or
    the next one in sequence if nothing is scheduled that day.
    """
    store = get_store(records_path)
    inputs = load_inputs_or_exit(store)
    date = date if date is not None else today_str()

    if (week is None) != (day is None):
        views.print_error("Pass both --week and --day, or neither.")
        raise typer.Exit(1)

    try:
        if week is None:
            _, built = recompute(inputs, today=date, horizon_days=get_settings().horizon_days)
            position = built.get(date) or next_position_after(inputs.completed_records)
            week, day = position.week, position.day
        record = CompletedWorkoutRecord(date=date, week=week, day=day)
        if weekday_number(date) in inputs.preferences.rest_days:
            views.print_warning(f"{date} is one of your rest days.")
        replaced = store.append_record(record)
    except (SchedulerError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    verb = "Replaced" if replaced else "Logged"
    views.print_success(f"{verb} {date}: {describe_position(record.position)}")


@app.command()
def history(records_path: RecordsPathOption = None) -> None:
    """
    Show all completed workouts.
    """
    store = get_store(records_path)
    inputs = load_inputs_or_exit(store)
    views.print_records(inputs.completed_records)


@app.command("delete-record")
def delete_record(
    record_id: Annotated[int, typer.Argument(help="Record # as shown by 'history'")],
    records_path: RecordsPathOption = None,
) -> None:
    """
    Delete a completed workout by its # in 'history'.
    """
    store = get_store(records_path)
    load_inputs_or_exit(store)

    try:
        removed = store.delete_record_at(record_id - 1)
    except IndexError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Deleted {removed.date}: Week {removed.week} Day {removed.day}")
