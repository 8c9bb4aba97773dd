"""
Storage addressing for workout tracking data.

Every day of the curriculum lives in its own flat table
(``week{W}_day{D}_workout_tracking``) whose row carries one column per
(exercise, set, field) slot, e.g. ``exercise_2_set3_weight``.  These names
end up inside storage queries, so they are only ever built here, from
validated integers and a closed set of field names.  Nothing outside this
module should format an address by hand.

All functions are pure: no I/O, no logging, no module state.
"""

import re
from datetime import datetime, timezone
from typing import Any, NewType

from .config import (
    COLUMN_ADDRESS_PATTERN,
    DAYS_PER_WEEK,
    DEFAULT_EXERCISE_NAME,
    EXERCISES_PER_DAY,
    NAME_COLUMN_TEMPLATE,
    NOTES_COLUMN_TEMPLATE,
    NUMERIC_SET_FIELDS,
    PROGRAM_WEEKS,
    SET_COLUMN_TEMPLATE,
    SET_FIELDS,
    SETS_PER_EXERCISE,
    TABLE_ADDRESS_PATTERN,
    TABLE_ADDRESS_TEMPLATE,
    UPDATED_AT_COLUMN,
)
from .errors import FormatError, RangeError
from .models import CurriculumPosition, ExerciseData, SetData, SetField, is_int_in_range

TableAddress = NewType("TableAddress", str)
ColumnAddress = NewType("ColumnAddress", str)

_TABLE_RE = re.compile(TABLE_ADDRESS_PATTERN)
_COLUMN_RE = re.compile(COLUMN_ADDRESS_PATTERN)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_week_day(week: object, day: object) -> bool:
    """
    Return True iff week and day are both integers in [1, 6].

    >>> validate_week_day(1, 1)
    True
    >>> validate_week_day(7, 1)
    False
    """
    return is_int_in_range(week, 1, PROGRAM_WEEKS) and is_int_in_range(day, 1, DAYS_PER_WEEK)


def validate_exercise_index(exercise: object) -> bool:
    """Return True iff exercise is an integer in [1, 7]."""
    return is_int_in_range(exercise, 1, EXERCISES_PER_DAY)


def validate_set_number(set_number: object) -> bool:
    """Return True iff set_number is an integer in [1, 4]."""
    return is_int_in_range(set_number, 1, SETS_PER_EXERCISE)


def _require_exercise(exercise: object) -> None:
    if not validate_exercise_index(exercise):
        raise RangeError(
            f"Invalid exercise index: {exercise!r}. "
            f"Must be an integer between 1 and {EXERCISES_PER_DAY}."
        )


def _require_set(set_number: object) -> None:
    if not validate_set_number(set_number):
        raise RangeError(
            f"Invalid set number: {set_number!r}. "
            f"Must be an integer between 1 and {SETS_PER_EXERCISE}."
        )


# ---------------------------------------------------------------------------
# Table addresses
# ---------------------------------------------------------------------------


def table_address(week: int, day: int) -> TableAddress:
    """
    Return the table address for one curriculum day.

    Args:
        week: Week number (1-6)
        day: Day number (1-6)

    Returns:
        Table address, e.g. ``week3_day4_workout_tracking``

    Raises:
        RangeError: If week or day is out of range
    """
    if not validate_week_day(week, day):
        raise RangeError(
            f"Invalid week ({week!r}) or day ({day!r}). "
            f"Week and day must be integers between 1 and {PROGRAM_WEEKS}."
        )
    return TableAddress(TABLE_ADDRESS_TEMPLATE.format(week=week, day=day))


def parse_table_address(address: str) -> CurriculumPosition:
    """
    Inverse of table_address().

    Raises:
        FormatError: If the string is not shaped like a table address
        RangeError: If the embedded week or day is out of range
    """
    match = _TABLE_RE.match(address) if isinstance(address, str) else None
    if match is None:
        raise FormatError(f"Invalid table address format: {address!r}")

    week, day = int(match.group(1)), int(match.group(2))
    if not validate_week_day(week, day):
        raise RangeError(f"Invalid week ({week}) or day ({day}) in table address: {address}")
    # Leading zeros ("week01_...") parse but would not round-trip
    if TABLE_ADDRESS_TEMPLATE.format(week=week, day=day) != address:
        raise FormatError(f"Invalid table address format: {address!r}")

    return CurriculumPosition(week=week, day=day)


def all_table_addresses() -> list[TableAddress]:
    """All 36 table addresses, week-major then day-minor."""
    return [
        table_address(week, day)
        for week in range(1, PROGRAM_WEEKS + 1)
        for day in range(1, DAYS_PER_WEEK + 1)
    ]


# ---------------------------------------------------------------------------
# Column addresses
# ---------------------------------------------------------------------------


def column_address(exercise: int, set_number: int, field: SetField) -> ColumnAddress:
    """
    Return the column address of one set slot.

    Args:
        exercise: Exercise index (1-7)
        set_number: Set number (1-4)
        field: "reps", "weight" or "notes"

    Returns:
        Column address, e.g. ``exercise_2_set3_weight``

    Raises:
        RangeError: If any coordinate is outside its domain
    """
    _require_exercise(exercise)
    _require_set(set_number)
    if field not in SET_FIELDS:
        raise RangeError(f"Invalid field: {field!r}. Must be one of {SET_FIELDS}.")
    return ColumnAddress(
        SET_COLUMN_TEMPLATE.format(exercise=exercise, set_number=set_number, field=field)
    )


def exercise_name_column(exercise: int) -> ColumnAddress:
    """Column holding the display name of an exercise slot."""
    _require_exercise(exercise)
    return ColumnAddress(NAME_COLUMN_TEMPLATE.format(exercise=exercise))


def exercise_notes_column(exercise: int) -> ColumnAddress:
    """Column holding the free-text notes of an exercise slot."""
    _require_exercise(exercise)
    return ColumnAddress(NOTES_COLUMN_TEMPLATE.format(exercise=exercise))


def parse_column_address(address: str) -> tuple[int, int | None, str]:
    """
    Inverse of the three column builders.

    Returns:
        (exercise, set_number, field) where set_number is None for the
        per-exercise ``name`` and ``notes`` columns

    Raises:
        FormatError: If the string is not shaped like a column address
        RangeError: If the embedded exercise or set is out of range
    """
    match = _COLUMN_RE.match(address) if isinstance(address, str) else None
    if match is None:
        raise FormatError(f"Invalid column address format: {address!r}")

    exercise = int(match.group(1))
    if match.group(2) is not None:
        set_number = int(match.group(2))
        field = match.group(3)
        rebuilt = column_address(exercise, set_number, field)
    else:
        set_number = None
        field = match.group(4) or match.group(5)
        rebuilt = exercise_name_column(exercise) if field == "name" else exercise_notes_column(exercise)

    if rebuilt != address:
        raise FormatError(f"Invalid column address format: {address!r}")
    return exercise, set_number, field


# ---------------------------------------------------------------------------
# Row mapping
# ---------------------------------------------------------------------------


def map_set_to_columns(exercise: int, set_number: int, data: SetData) -> dict[str, Any]:
    """
    Map one set to its reps/weight columns.

    >>> map_set_to_columns(1, 1, SetData(reps=10, weight=185))
    {'exercise_1_set1_reps': 10, 'exercise_1_set1_weight': 185}
    """
    return {
        column_address(exercise, set_number, "reps"): data.reps,
        column_address(exercise, set_number, "weight"): data.weight,
    }


def map_columns_to_set(row: dict[str, Any], exercise: int, set_number: int) -> SetData:
    """Read one set back out of a (partial or full) row; missing columns are None."""
    return SetData(
        reps=row.get(column_address(exercise, set_number, "reps")),
        weight=row.get(column_address(exercise, set_number, "weight")),
    )


def map_exercise_sets(
    row: dict[str, Any],
    exercise: int,
    max_sets: int = SETS_PER_EXERCISE,
) -> list[SetData]:
    """
    All sets of one exercise that carry reps or weight, in set order.

    Empty slots are dropped, so set positions are not preserved: a row with
    only set 2 filled yields a one-element list, which map_exercise_to_columns
    writes back as set 1.
    """
    sets = []
    for set_number in range(1, max_sets + 1):
        data = map_columns_to_set(row, exercise, set_number)
        if not data.is_empty:
            sets.append(data)
    return sets


def map_exercise_to_columns(exercise_data: ExerciseData) -> dict[str, Any]:
    """
    Map an exercise's sets (and notes, when present) to columns.

    Raises:
        RangeError: If the exercise index is invalid or there are more than 4 sets
    """
    columns: dict[str, Any] = {}
    for i, set_data in enumerate(exercise_data.sets):
        columns.update(map_set_to_columns(exercise_data.exercise_index, i + 1, set_data))

    if exercise_data.notes is not None:
        columns[exercise_notes_column(exercise_data.exercise_index)] = exercise_data.notes

    return columns


def extract_all_exercises(
    row: dict[str, Any],
    exercise_count: int = EXERCISES_PER_DAY,
) -> list[ExerciseData]:
    """
    Read every exercise slot out of a full table row.

    Missing names default to ``"Exercise {E}"``; missing notes to None.
    Sets are compacted as in map_exercise_sets().
    """
    exercises = []
    for exercise in range(1, exercise_count + 1):
        name = row.get(exercise_name_column(exercise)) or DEFAULT_EXERCISE_NAME.format(
            exercise=exercise
        )
        exercises.append(
            ExerciseData(
                exercise_index=exercise,
                name=name,
                sets=map_exercise_sets(row, exercise),
                notes=row.get(exercise_notes_column(exercise)) or None,
            )
        )
    return exercises


def create_partial_update(
    updates: list[ExerciseData],
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Build an update payload for some exercises of one row.

    Always stamps ``updated_at`` with an ISO-8601 instant that
    ``datetime.fromisoformat`` reads back.
    """
    columns: dict[str, Any] = {}
    for exercise_data in updates:
        columns.update(map_exercise_to_columns(exercise_data))

    stamp = now if now is not None else datetime.now(timezone.utc)
    columns[UPDATED_AT_COLUMN] = stamp.isoformat()
    return columns


def numeric_columns_for(exercise: int) -> list[ColumnAddress]:
    """Reps and weight columns of one exercise, set-major."""
    return [
        column_address(exercise, set_number, field)
        for set_number in range(1, SETS_PER_EXERCISE + 1)
        for field in NUMERIC_SET_FIELDS
    ]
