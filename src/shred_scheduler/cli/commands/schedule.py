"""Schedule commands: schedule, move, toggle."""

from typing import Annotated, Optional

import typer

from ...core.errors import SchedulerError, SchedulingConflictError
from ...core.generator import recompute
from ...core.models import today_str
from ...core.mutator import move_workout, toggle_workout_on_date
from .. import views
from ..app import RecordsPathOption, app, get_settings, get_store, load_inputs_or_exit

ModeOption = Annotated[
    Optional[str],
    typer.Option("--mode", "-m", help="Edit mode for this preview: custom or standard (default: program setting)"),
]


def _resolve_mode(mode: str | None, program_custom_mode: bool) -> bool:
    """Return True for custom mode; --mode overrides the program setting."""
    if mode is None:
        return program_custom_mode
    if mode not in ("custom", "standard"):
        raise typer.BadParameter(f"Unknown mode {mode!r}. Use 'custom' or 'standard'.")
    return mode == "custom"


@app.command()
def schedule(
    records_path: RecordsPathOption = None,
    days: Annotated[
        int,
        typer.Option("--days", "-d", min=1, help="Number of upcoming workouts to show"),
    ] = 12,
    history: Annotated[
        bool,
        typer.Option("--history", help="Include completed workouts"),
    ] = False,
) -> None:
    """
    Show the training schedule rebuilt from completed workouts and rest days.
    """
    store = get_store(records_path)
    inputs = load_inputs_or_exit(store)
    _, built = recompute(inputs, horizon_days=get_settings().horizon_days)

    today = today_str()
    completed_dates = {r.date for r in inputs.completed_records}
    past = {d: p for d, p in built.items() if d < today} if history else {}
    future = [(d, p) for d, p in sorted(built.items()) if d >= today][:days]

    shown = dict(past)
    shown.update(future)
    views.print_schedule(shown, completed_dates, today)
    views.print_info(f"Rest days: {views.format_rest_days(inputs.preferences.rest_days)}")


@app.command()
def move(
    from_date: Annotated[str, typer.Argument(help="Date of the workout to move (YYYY-MM-DD)")],
    to_date: Annotated[str, typer.Argument(help="Target date (YYYY-MM-DD)")],
    records_path: RecordsPathOption = None,
    mode: ModeOption = None,
) -> None:
    """
    Preview moving a workout to another date.

    In standard mode every later workout shifts with it, skipping rest days.
    Schedules are rebuilt on every run, so the preview is not saved.
    """
    store = get_store(records_path)
    inputs = load_inputs_or_exit(store)
    preferences = inputs.preferences
    _, before = recompute(inputs, horizon_days=get_settings().horizon_days)

    custom_mode = _resolve_mode(mode, preferences.custom_mode)
    try:
        after = move_workout(before, from_date, to_date, preferences.rest_days, custom_mode=custom_mode)
    except SchedulingConflictError as e:
        views.print_error(str(e))
        if e.reason == "sequence_order":
            views.print_info(f"Blocked by {e.position} on {e.date}.")
        raise typer.Exit(1)
    except SchedulerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Moved {before[from_date]} from {from_date} to {to_date}.")
    views.print_schedule_changes(before, after)


@app.command()
def toggle(
    date: Annotated[str, typer.Argument(help="Date to add or remove a workout on (YYYY-MM-DD)")],
    records_path: RecordsPathOption = None,
    mode: ModeOption = None,
) -> None:
    """
    Preview adding or removing the workout on a date.
    """
    store = get_store(records_path)
    inputs = load_inputs_or_exit(store)
    preferences = inputs.preferences
    settings = get_settings()
    _, before = recompute(inputs, horizon_days=settings.horizon_days)

    custom_mode = _resolve_mode(mode, preferences.custom_mode)
    try:
        after = toggle_workout_on_date(
            before,
            date,
            preferences.rest_days,
            custom_mode=custom_mode,
            horizon_days=settings.horizon_days,
        )
    except SchedulerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if date in after:
        views.print_success(f"Added {after[date]} on {date}.")
    else:
        views.print_success(f"Removed {before[date]} from {date}.")
    views.print_schedule_changes(before, after)
