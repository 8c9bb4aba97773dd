"""
Schedule generation for shred-scheduler.

Projects the curriculum onto calendar dates.  A schedule is never stored:
it is rebuilt from completed-workout records, rest days and the program
start date every time one of those inputs changes (see recompute()).

Catch-up policy: the projection always starts at today (or at the program
start date if that is later), never at the date of the last completed
workout, so a client who fell behind is not handed a backlog of missed
sessions.
"""

from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Iterable, Iterator, Union

from .config import SCHEDULE_HORIZON_DAYS
from .errors import PreconditionError
from .models import (
    FIRST_POSITION,
    CompletedWorkoutRecord,
    CurriculumPosition,
    ProgramInputs,
    ProgramPreferences,
    Schedule,
    format_date,
    parse_date,
    today_str,
)


def next_position_after(records: Iterable[CompletedWorkoutRecord]) -> CurriculumPosition:
    """
    Return the curriculum position that follows the latest completed record.

    Only the single latest-dated record matters; gaps or reordering in the
    history are tolerated.  With no records the program starts at week 1,
    day 1.  On a date tie the record listed last wins.
    """
    ordered = sorted(records, key=lambda r: r.date)
    if not ordered:
        return FIRST_POSITION
    return ordered[-1].position.next()


def iter_curriculum(start: CurriculumPosition) -> Iterator[CurriculumPosition]:
    """Endless curriculum walk from start, wrapping week 6 day 6 to week 1 day 1."""
    position = start
    while True:
        yield position
        position = position.next()


def walk_forward(
    start_date: str,
    positions: Iterable[CurriculumPosition],
    rest_days: Iterable[int],
    max_days: int,
    occupied: Iterable[str] = (),
) -> Schedule:
    """
    Assign positions, in order, to consecutive training days.

    Scans at most max_days calendar days from start_date.  Dates whose
    weekday is a rest day, or which are already occupied, are skipped.
    Stops early once positions is exhausted.

    Args:
        start_date: First candidate date (ISO)
        positions: Values to place, in sequence
        rest_days: Weekday numbers (0=Sunday) that take no workout
        max_days: Upper bound on calendar days scanned
        occupied: Dates that must not be assigned

    Returns:
        Only the newly placed entries
    """
    rest = frozenset(rest_days)
    taken = set(occupied)
    values = iter(positions)
    placed: Schedule = {}

    current = parse_date(start_date)
    for _ in range(max_days):
        key = format_date(current)
        # weekday(): Monday=0, shifted onto Sunday=0
        if key not in taken and (current.weekday() + 1) % 7 not in rest:
            position = next(values, None)
            if position is None:
                break
            placed[key] = position
        current += timedelta(days=1)

    return placed


def generate_schedule(
    program_start_date: str | None,
    completed_records: Iterable[CompletedWorkoutRecord],
    rest_days: Iterable[int],
    today: str | None = None,
    horizon_days: int = SCHEDULE_HORIZON_DAYS,
) -> Schedule:
    """
    Build the date -> (week, day) map for one client.

    1. Seed with every completed record (authoritative, never overwritten).
    2. Continue the curriculum after the latest completed record.
    3. Walk horizon_days days from max(today, program_start_date), skipping
       completed dates and rest days.

    An empty rest-day set is accepted here; rejecting it is the job of
    confirm_program().  Completed records that fall on a rest day are kept.

    Returns:
        Schedule ordered by date
    """
    records = list(completed_records)
    today = today if today is not None else today_str()
    parse_date(today)

    schedule: Schedule = {}
    for record in sorted(records, key=lambda r: r.date):
        schedule[record.date] = record.position

    start = today
    if program_start_date is not None and parse_date(program_start_date) > parse_date(today):
        start = program_start_date

    projected = walk_forward(
        start,
        iter_curriculum(next_position_after(records)),
        rest_days,
        horizon_days,
        occupied=schedule,
    )
    schedule.update(projected)
    return dict(sorted(schedule.items()))


def upcoming_entries(schedule: Schedule, today: str | None = None) -> list[tuple[str, CurriculumPosition]]:
    """Entries dated today or later, chronologically."""
    today = today if today is not None else today_str()
    return [(d, p) for d, p in sorted(schedule.items()) if d >= today]


# =============================================================================
# Program lifecycle
# =============================================================================


def check_rest_days(rest_days: Iterable[int]) -> frozenset[int]:
    """
    Enforce the confirmation policy on a rest-day set.

    Raises:
        PreconditionError: If the set is empty or covers all seven weekdays
    """
    rest = frozenset(rest_days)
    if not rest:
        raise PreconditionError("Choose at least one rest day before confirming the program.")
    if len(rest) >= 7:
        raise PreconditionError("At least one weekday must remain a training day.")
    return rest


def confirm_program(preferences: ProgramPreferences) -> ProgramPreferences:
    """
    Return a confirmed copy of preferences.

    Raises:
        PreconditionError: If the rest days are unusable or no start date is set
    """
    check_rest_days(preferences.rest_days)
    if preferences.program_start_date is None:
        raise PreconditionError("A program start date is required to confirm the program.")
    return replace(preferences, confirmed=True)


@dataclass(frozen=True)
class RestDaysChanged:
    rest_days: frozenset[int]


@dataclass(frozen=True)
class RecordsChanged:
    completed_records: tuple[CompletedWorkoutRecord, ...]


@dataclass(frozen=True)
class StartDateChanged:
    program_start_date: str


Trigger = Union[RestDaysChanged, RecordsChanged, StartDateChanged]


def recompute(
    inputs: ProgramInputs,
    trigger: Trigger | None = None,
    today: str | None = None,
    horizon_days: int = SCHEDULE_HORIZON_DAYS,
) -> tuple[ProgramInputs, Schedule]:
    """
    Apply one input change and rebuild the schedule from scratch.

    This is the single entry point hosts call whenever a source-of-truth
    input changes; it never patches a previous schedule.  With no trigger
    the schedule is rebuilt from inputs unchanged (initial load).

    Returns:
        (updated inputs, freshly generated schedule)

    Raises:
        PreconditionError: If a confirmed program would lose all rest days,
            or its start date is changed
    """
    preferences = inputs.preferences
    records = list(inputs.completed_records)

    if isinstance(trigger, RestDaysChanged):
        if preferences.confirmed:
            check_rest_days(trigger.rest_days)
        preferences = replace(preferences, rest_days=frozenset(trigger.rest_days))
    elif isinstance(trigger, RecordsChanged):
        records = list(trigger.completed_records)
    elif isinstance(trigger, StartDateChanged):
        if preferences.confirmed:
            raise PreconditionError("The program start date cannot change once the program is confirmed.")
        preferences = replace(preferences, program_start_date=trigger.program_start_date)
    elif trigger is not None:
        raise TypeError(f"Unknown recompute trigger: {trigger!r}")

    updated = ProgramInputs(preferences=preferences, completed_records=records)
    schedule = generate_schedule(
        preferences.program_start_date,
        records,
        preferences.rest_days,
        today=today,
        horizon_days=horizon_days,
    )
    return updated, schedule
