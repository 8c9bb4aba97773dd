"""Address commands: tables, columns."""

from typing import Annotated, Optional

import typer

from ...core.addressing import all_table_addresses, validate_exercise_index
from ...core.config import EXERCISES_PER_DAY
from ...core.errors import RangeError
from ...core.models import CurriculumPosition
from .. import views
from ..app import app


@app.command()
def tables() -> None:
    """
    List the tracking table of every curriculum day.
    """
    views.print_table_addresses(all_table_addresses())


@app.command()
def columns(
    week: Annotated[int, typer.Argument(help="Curriculum week 1-6")],
    day: Annotated[int, typer.Argument(help="Curriculum day 1-6")],
    exercise: Annotated[
        Optional[int],
        typer.Option("--exercise", "-e", help=f"Only this exercise slot (1-{EXERCISES_PER_DAY})"),
    ] = None,
) -> None:
    """
    Show the table and column names that store one curriculum day.
    """
    try:
        position = CurriculumPosition(week=week, day=day)
    except RangeError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if exercise is not None and not validate_exercise_index(exercise):
        views.print_error(
            f"Invalid exercise index: {exercise}. Must be an integer between 1 and {EXERCISES_PER_DAY}."
        )
        raise typer.Exit(1)

    views.print_column_layout(position, [exercise] if exercise is not None else None)
