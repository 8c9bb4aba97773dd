"""
Manual schedule edits.

Both operations take a schedule and return a new one; the input map is
never modified.  Validation happens before anything is built, so a
rejected edit leaves no partial state behind.

Standard mode keeps the curriculum sequence contiguous by replaying the
future around the edit.  Custom mode treats entries as independent
toggles and performs no ordering or rest-day checks.
"""

from datetime import timedelta
from typing import Iterable

from .config import SCHEDULE_HORIZON_DAYS, WEEKDAY_NAMES
from .errors import PreconditionError, SchedulingConflictError
from .generator import iter_curriculum, walk_forward
from .models import (
    FIRST_POSITION,
    CurriculumPosition,
    Schedule,
    format_date,
    parse_date,
    weekday_number,
)


def _day_after(date_str: str) -> str:
    return format_date(parse_date(date_str) + timedelta(days=1))


def _regenerate_after(
    schedule: Schedule,
    date_str: str,
    first: CurriculumPosition,
    rest_days: frozenset[int],
    horizon_days: int,
) -> Schedule:
    """Drop every entry after date_str and re-walk the curriculum from first."""
    kept = {d: p for d, p in schedule.items() if d <= date_str}
    kept.update(
        walk_forward(_day_after(date_str), iter_curriculum(first), rest_days, horizon_days)
    )
    return dict(sorted(kept.items()))


def toggle_workout_on_date(
    schedule: Schedule,
    date_str: str,
    rest_days: Iterable[int] = (),
    custom_mode: bool = True,
    horizon_days: int = SCHEDULE_HORIZON_DAYS,
) -> Schedule:
    """
    Add or remove the workout on one date.

    Removing: the entry is dropped.  Outside custom mode everything after
    the date is regenerated starting with the removed position, so the
    sequence closes over the gap.

    Adding: the date gets the position following the latest entry in the
    schedule (week 1 day 1 for an empty schedule).  Outside custom mode
    everything after the date is regenerated to continue from it.

    Raises:
        FormatError: If date_str is not an ISO date
        SchedulingConflictError: Adding on a rest day outside custom mode
    """
    rest = frozenset(rest_days)
    weekday = weekday_number(date_str)
    updated = dict(schedule)

    if date_str in updated:
        removed = updated.pop(date_str)
        if custom_mode:
            return updated
        return _regenerate_after(updated, date_str, removed, rest, horizon_days)

    if not custom_mode and weekday in rest:
        raise SchedulingConflictError(
            f"Cannot schedule a workout on a rest day ({WEEKDAY_NAMES[weekday]})",
            reason="rest_day",
            date=date_str,
        )

    latest = max(updated) if updated else None
    position = updated[latest].next() if latest is not None else FIRST_POSITION
    updated[date_str] = position

    if custom_mode:
        return dict(sorted(updated.items()))
    return _regenerate_after(updated, date_str, position.next(), rest, horizon_days)


def move_workout(
    schedule: Schedule,
    from_date: str,
    to_date: str,
    rest_days: Iterable[int],
    custom_mode: bool = False,
) -> Schedule:
    """
    Move the workout on from_date to to_date.

    Custom mode relocates the single entry.  Standard mode validates, in
    order:

    1. to_date differs from from_date
    2. to_date is not a rest day
    3. moving backward, no entry in [to_date, from_date) is at or after the
       moved workout in the curriculum

    and then replays every entry dated from_date or later, in order, onto
    the training days starting at to_date.  Replayed entries replace
    whatever occupied the dates they land on.

    Raises:
        PreconditionError: If there is no workout on from_date
        SchedulingConflictError: If a validation rule is violated
    """
    source = parse_date(from_date)
    target = parse_date(to_date)
    if from_date not in schedule:
        raise PreconditionError(f"No workout is scheduled on {from_date}")
    moved = schedule[from_date]

    if custom_mode:
        updated = dict(schedule)
        del updated[from_date]
        updated[to_date] = moved
        return dict(sorted(updated.items()))

    if target == source:
        raise SchedulingConflictError(
            "Workout is already on this date",
            reason="same_date",
            date=to_date,
            position=moved,
        )

    rest = frozenset(rest_days)
    target_weekday = weekday_number(to_date)
    if target_weekday in rest:
        raise SchedulingConflictError(
            f"Cannot move workouts to a rest day ({WEEKDAY_NAMES[target_weekday]})",
            reason="rest_day",
            date=to_date,
            position=moved,
        )

    if target < source:
        # Compared by global sequence index, so week boundaries count
        for date_str in sorted(d for d in schedule if to_date <= d < from_date):
            blocker = schedule[date_str]
            if blocker.sequence_index >= moved.sequence_index:
                raise SchedulingConflictError(
                    f"Cannot move {moved} before {blocker}. Workouts must stay in sequential order.",
                    reason="sequence_order",
                    date=date_str,
                    position=blocker,
                )

    to_shift = [p for d, p in sorted(schedule.items()) if d >= from_date]
    updated = {d: p for d, p in schedule.items() if d < from_date}

    # to_date is a training weekday, so every 7 days place at least one value
    placed = walk_forward(to_date, to_shift, rest, max_days=7 * len(to_shift))
    updated.update(placed)
    return dict(sorted(updated.items()))
