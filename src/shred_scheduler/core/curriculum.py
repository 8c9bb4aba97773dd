"""
Curriculum policy lookups.

Derives phase, workout type, rep range and rest period from a (week, day)
position.  Weeks 4-6 (phase 2) reuse the ladders of weeks 1-3: week 4 is
prescribed like week 1, week 5 like week 2 and week 6 like week 3.

Invalid coordinates raise RangeError; nothing is clamped.
"""

from .addressing import validate_week_day
from .config import (
    DAYS_PER_WEEK,
    ISOLATION_REP_RANGES,
    ISOLATION_REST_SECONDS,
    MULTI_JOINT_LAST_DAY,
    MULTI_JOINT_REP_RANGES,
    MULTI_JOINT_REST_SECONDS,
    PHASE_LENGTH_WEEKS,
    PROGRAM_WEEKS,
    WORKOUT_NAMES,
)
from .errors import RangeError
from .models import CurriculumPosition, PhaseNumber, WorkoutType, is_int_in_range

WORKOUT_TYPE_LABELS: dict[str, str] = {
    "MultiJoint": "Multi-Joint",
    "Isolation": "Isolation",
}


def _require_week_day(week: int, day: int) -> None:
    if not validate_week_day(week, day):
        raise RangeError(
            f"Invalid week ({week!r}) or day ({day!r}). "
            f"Week and day must be integers between 1 and {PROGRAM_WEEKS}."
        )


def phase_of(week: int) -> PhaseNumber:
    """
    Phase of a week: 1 for weeks 1-3, 2 for weeks 4-6.

    Raises:
        RangeError: If week is not an integer in [1, 6]
    """
    if not is_int_in_range(week, 1, PROGRAM_WEEKS):
        raise RangeError(f"Invalid week number: {week!r}. Must be between 1 and {PROGRAM_WEEKS}.")
    return 1 if week <= PHASE_LENGTH_WEEKS else 2


def week_in_phase(week: int) -> int:
    """Position of a week inside its phase (1, 2 or 3)."""
    phase = phase_of(week)
    return week - (phase - 1) * PHASE_LENGTH_WEEKS


def workout_type_of(day: int) -> WorkoutType:
    """
    Days 1-3 train compound (multi-joint) movements, days 4-6 isolation.

    Raises:
        RangeError: If day is not an integer in [1, 6]
    """
    if not is_int_in_range(day, 1, DAYS_PER_WEEK):
        raise RangeError(f"Invalid day number: {day!r}. Must be between 1 and {DAYS_PER_WEEK}.")
    return "MultiJoint" if day <= MULTI_JOINT_LAST_DAY else "Isolation"


def rep_range_of(week: int, day: int) -> str:
    """
    Target rep range for a curriculum day.

    Multi-joint: 9-11, 6-8, 2-5.  Isolation: 12-15, 16-20, 21-30.
    Indexed by week within phase.
    """
    _require_week_day(week, day)
    ladder = MULTI_JOINT_REP_RANGES if workout_type_of(day) == "MultiJoint" else ISOLATION_REP_RANGES
    return ladder[week_in_phase(week)]


def rest_period_seconds_of(week: int, day: int) -> int:
    """
    Rest between sets in seconds.

    Multi-joint: 90, 120, 180.  Isolation: 60, 75, 90.
    Indexed by week within phase.
    """
    _require_week_day(week, day)
    ladder = (
        MULTI_JOINT_REST_SECONDS if workout_type_of(day) == "MultiJoint" else ISOLATION_REST_SECONDS
    )
    return ladder[week_in_phase(week)]


def workout_name_of(day: int) -> str:
    """Muscle-group label of a curriculum day."""
    workout_type_of(day)
    return WORKOUT_NAMES[day]


def describe_position(position: CurriculumPosition) -> str:
    """One-line label, e.g. 'Week 2 Day 4: Chest, Triceps, Abs - Isolation (16-20 reps, 75s rest)'."""
    return (
        f"{position}: {workout_name_of(position.day)} "
        f"({rep_range_of(position.week, position.day)} reps, "
        f"{rest_period_seconds_of(position.week, position.day)}s rest)"
    )
