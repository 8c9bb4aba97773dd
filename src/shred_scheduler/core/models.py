"""
Data models for shred-scheduler.

Curriculum positions, completed-workout records, per-set tracking data and
program preferences.  Dates are ISO ``YYYY-MM-DD`` strings throughout; the
helpers at the top of this module are the only place they are parsed.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from .config import (
    DATE_FORMAT,
    DAYS_PER_WEEK,
    DEFAULT_REST_DAYS,
    PROGRAM_WEEKS,
)
from .errors import FormatError, RangeError

PhaseNumber = Literal[1, 2]
WorkoutType = Literal["MultiJoint", "Isolation"]
SetField = Literal["reps", "weight", "notes"]


def is_int_in_range(value: object, low: int, high: int) -> bool:
    """True iff value is a real integer (not a bool) within [low, high]."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return low <= value <= high


def parse_date(date_str: str) -> datetime:
    """
    Parse an ISO ``YYYY-MM-DD`` string.

    Raises:
        FormatError: If the string is not a valid calendar date
    """
    try:
        return datetime.strptime(date_str, DATE_FORMAT)
    except (TypeError, ValueError) as e:
        raise FormatError(f"Invalid date: {date_str!r}. Expected YYYY-MM-DD") from e


def format_date(value: datetime) -> str:
    """Format a datetime as an ISO ``YYYY-MM-DD`` string."""
    return value.strftime(DATE_FORMAT)


def weekday_number(date_str: str) -> int:
    """Weekday of an ISO date with 0=Sunday ... 6=Saturday."""
    return (parse_date(date_str).weekday() + 1) % 7


def today_str() -> str:
    """Today's local date as an ISO string."""
    return datetime.now().strftime(DATE_FORMAT)


@dataclass(frozen=True, order=True)
class CurriculumPosition:
    """
    A (week, day) point in the fixed 6 x 6 training plan.

    Construction validates both coordinates, so every instance is in range.
    """

    week: int
    day: int

    def __post_init__(self) -> None:
        if not is_int_in_range(self.week, 1, PROGRAM_WEEKS):
            raise RangeError(
                f"Invalid week ({self.week!r}). Week must be an integer between 1 and {PROGRAM_WEEKS}."
            )
        if not is_int_in_range(self.day, 1, DAYS_PER_WEEK):
            raise RangeError(
                f"Invalid day ({self.day!r}). Day must be an integer between 1 and {DAYS_PER_WEEK}."
            )

    def next(self) -> "CurriculumPosition":
        """Following position: next day, or day 1 of the next week after day 6."""
        if self.day == DAYS_PER_WEEK:
            return CurriculumPosition(week=(self.week % PROGRAM_WEEKS) + 1, day=1)
        return CurriculumPosition(week=self.week, day=self.day + 1)

    @property
    def sequence_index(self) -> int:
        """Global 1-based index within the curriculum (1 ... 36)."""
        return (self.week - 1) * DAYS_PER_WEEK + self.day

    def __str__(self) -> str:
        return f"Week {self.week} Day {self.day}"


FIRST_POSITION = CurriculumPosition(week=1, day=1)

# Calendar date (ISO) -> curriculum position.  Derived and disposable.
Schedule = dict[str, CurriculumPosition]


@dataclass(frozen=True)
class CompletedWorkoutRecord:
    """
    A submitted workout session.  Read-only input to the scheduler.
    """

    date: str  # ISO format: YYYY-MM-DD
    week: int
    day: int

    def __post_init__(self) -> None:
        parse_date(self.date)
        # Validates the coordinates
        CurriculumPosition(self.week, self.day)

    @property
    def position(self) -> CurriculumPosition:
        return CurriculumPosition(self.week, self.day)


@dataclass
class SetData:
    """One set slot as entered on the tracking form."""

    reps: int | None = None
    weight: float | None = None

    def __post_init__(self) -> None:
        if self.reps is not None and self.reps < 0:
            raise ValueError("reps must be non-negative")
        if self.weight is not None and self.weight < 0:
            raise ValueError("weight must be non-negative")

    @property
    def is_empty(self) -> bool:
        return self.reps is None and self.weight is None


@dataclass
class ExerciseData:
    """
    One exercise slot of a day table: name, logged sets and notes.

    ``sets[i]`` is written to set number ``i + 1``.
    """

    exercise_index: int
    name: str = ""
    sets: list[SetData] = field(default_factory=list)
    notes: str | None = None


def average_weight(sets: list[SetData]) -> int:
    """
    Mean weight over the sets that carry a positive weight, rounded half up.

    Returns 0 when no set has a weight.
    """
    weights = [s.weight for s in sets if s.weight is not None and s.weight > 0]
    if not weights:
        return 0
    return math.floor(sum(weights) / len(weights) + 0.5)


@dataclass
class ProgramPreferences:
    """
    Per-user scheduling preferences.

    ``rest_days`` holds weekday numbers (0=Sunday ... 6=Saturday).
    ``program_start_date`` is immutable once ``confirmed`` is set.
    ``custom_mode`` switches the mutator to free-form toggles.
    """

    rest_days: frozenset[int] = DEFAULT_REST_DAYS
    program_start_date: str | None = None
    confirmed: bool = False
    custom_mode: bool = False

    def __post_init__(self) -> None:
        """Validate preferences data."""
        self.rest_days = frozenset(self.rest_days)
        for weekday in self.rest_days:
            if not is_int_in_range(weekday, 0, 6):
                raise RangeError(
                    f"Invalid rest day ({weekday!r}). Weekdays are integers 0 (Sunday) to 6 (Saturday)."
                )
        if self.program_start_date is not None:
            parse_date(self.program_start_date)


@dataclass
class ProgramInputs:
    """
    Source-of-truth inputs that every schedule is rebuilt from.
    """

    preferences: ProgramPreferences
    completed_records: list[CompletedWorkoutRecord] = field(default_factory=list)
