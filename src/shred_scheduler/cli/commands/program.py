"""Program commands: init, rest-days, status."""

from typing import Annotated, Optional

import typer

from ...core.curriculum import describe_position
from ...core.errors import SchedulerError
from ...core.generator import (
    RestDaysChanged,
    confirm_program,
    recompute,
    upcoming_entries,
)
from ...core.models import ProgramPreferences, parse_date, today_str
from ...io.serializers import ValidationError
from .. import views
from ..app import RecordsPathOption, app, get_settings, get_store, load_inputs_or_exit, parse_rest_days


@app.command()
def init(
    records_path: RecordsPathOption = None,
    start_date: Annotated[
        Optional[str],
        typer.Option("--start-date", "-s", help="Program start date YYYY-MM-DD (default: today)"),
    ] = None,
    rest_days: Annotated[
        Optional[str],
        typer.Option("--rest-days", "-r", help="Rest weekdays, e.g. '0' or 'sun,wed'"),
    ] = None,
    custom: Annotated[
        bool,
        typer.Option("--custom", help="Free-form mode: schedule edits are independent toggles"),
    ] = False,
) -> None:
    """
    Set the program start date and rest days, and confirm the program.
    """
    store = get_store(records_path)
    settings = get_settings()

    try:
        existing = store.load_preferences()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    start = start_date if start_date is not None else today_str()
    rest = parse_rest_days(rest_days) if rest_days is not None else settings.default_rest_days

    if existing is not None and existing.confirmed and existing.program_start_date != start:
        if start_date is not None:
            views.print_error(
                f"Program already confirmed with start date {existing.program_start_date}; "
                "the start date cannot change."
            )
            raise typer.Exit(1)
        start = existing.program_start_date

    try:
        parse_date(start)
        preferences = confirm_program(
            ProgramPreferences(rest_days=rest, program_start_date=start, custom_mode=custom)
        )
    except SchedulerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.init()
    store.save_preferences(preferences)

    views.print_success(f"Program confirmed. Start date: {preferences.program_start_date}")
    views.print_info(f"Rest days: {views.format_rest_days(preferences.rest_days)}")
    if preferences.custom_mode:
        views.print_info("Custom mode: edits do not shift the rest of the schedule.")
    views.print_info(f"Records: {store.records_path}")


@app.command("rest-days")
def rest_days_command(
    days: Annotated[str, typer.Argument(help="Rest weekdays, e.g. '0,6' or 'sun,sat'")],
    records_path: RecordsPathOption = None,
) -> None:
    """
    Change rest days and rebuild the schedule.
    """
    store = get_store(records_path)
    inputs = load_inputs_or_exit(store)
    new_rest = parse_rest_days(days)

    try:
        updated, schedule = recompute(
            inputs,
            RestDaysChanged(new_rest),
            horizon_days=get_settings().horizon_days,
        )
    except SchedulerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.save_preferences(updated.preferences)
    views.print_success(f"Rest days updated: {views.format_rest_days(new_rest)}")

    upcoming = dict(upcoming_entries(schedule)[:6])
    views.print_schedule(upcoming, set(), title="Next workouts")


@app.command()
def status(records_path: RecordsPathOption = None) -> None:
    """
    Show program settings, the last completed workout and the next one.
    """
    store = get_store(records_path)
    inputs = load_inputs_or_exit(store)
    preferences = inputs.preferences

    _, schedule = recompute(inputs, horizon_days=get_settings().horizon_days)

    views.console.print()
    views.console.print(f"Start date:  {preferences.program_start_date}")
    views.console.print(f"Rest days:   {views.format_rest_days(preferences.rest_days)}")
    views.console.print(f"Mode:        {'custom' if preferences.custom_mode else 'standard'}")
    views.console.print(f"Completed:   {len(inputs.completed_records)} workouts")

    if inputs.completed_records:
        last = inputs.completed_records[-1]
        views.console.print(f"Last:        {last.date}  {describe_position(last.position)}")

    upcoming = upcoming_entries(schedule)
    completed_dates = {r.date for r in inputs.completed_records}
    next_entries = [(d, p) for d, p in upcoming if d not in completed_dates]
    if next_entries:
        date, position = next_entries[0]
        views.console.print(f"Next:        {date}  {describe_position(position)}")
    else:
        views.print_warning("No upcoming workouts in the schedule horizon.")
