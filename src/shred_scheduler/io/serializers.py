"""
JSON serialization for scheduler data models.

Handles conversion between dataclasses and JSON-compatible dicts.
"""

import json
import re
from datetime import datetime
from typing import Any

from ..core.errors import SchedulerError
from ..core.models import (
    CompletedWorkoutRecord,
    CurriculumPosition,
    ProgramPreferences,
    Schedule,
)


class ValidationError(Exception):
    """Raised when persisted data fails validation."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def record_to_dict(record: CompletedWorkoutRecord) -> dict[str, Any]:
    """
    Convert CompletedWorkoutRecord to JSON-compatible dict.

    Args:
        record: Record to convert

    Returns:
        Dict representation
    """
    return {"date": record.date, "week": record.week, "day": record.day}


def dict_to_record(data: dict[str, Any]) -> CompletedWorkoutRecord:
    """
    Convert dict to CompletedWorkoutRecord.

    Raises:
        ValidationError: If a field is missing or out of range
    """
    try:
        date = validate_date(data["date"])
        return CompletedWorkoutRecord(date=date, week=data["week"], day=data["day"])
    except KeyError as e:
        raise ValidationError(f"Missing field in workout record: {e}") from e
    except SchedulerError as e:
        raise ValidationError(str(e)) from e


def record_to_json_line(record: CompletedWorkoutRecord) -> str:
    """Serialize a record as one JSONL line (no trailing newline)."""
    return json.dumps(record_to_dict(record), separators=(",", ":"))


def preferences_to_dict(preferences: ProgramPreferences) -> dict[str, Any]:
    """Convert ProgramPreferences to a JSON-compatible dict."""
    return {
        "rest_days": sorted(preferences.rest_days),
        "program_start_date": preferences.program_start_date,
        "confirmed": preferences.confirmed,
        "custom_mode": preferences.custom_mode,
    }


def dict_to_preferences(data: dict[str, Any]) -> ProgramPreferences:
    """
    Convert dict to ProgramPreferences.

    Missing keys take the dataclass defaults.

    Raises:
        ValidationError: If rest days or the start date are invalid
    """
    rest_days = data.get("rest_days")
    if rest_days is not None and (
        not isinstance(rest_days, list) or not all(isinstance(d, int) for d in rest_days)
    ):
        raise ValidationError(f"rest_days must be a list of weekday numbers, got {rest_days!r}")

    start = data.get("program_start_date")
    if start is not None:
        validate_date(start)

    kwargs: dict[str, Any] = {
        "program_start_date": start,
        "confirmed": bool(data.get("confirmed", False)),
        "custom_mode": bool(data.get("custom_mode", False)),
    }
    if rest_days is not None:
        kwargs["rest_days"] = frozenset(rest_days)

    try:
        return ProgramPreferences(**kwargs)
    except SchedulerError as e:
        raise ValidationError(str(e)) from e


def schedule_to_dict(schedule: Schedule) -> dict[str, dict[str, int]]:
    """Convert a schedule to ``{date: {"week": W, "day": D}}``, sorted by date."""
    return {
        date: {"week": position.week, "day": position.day}
        for date, position in sorted(schedule.items())
    }


def dict_to_schedule(data: dict[str, Any]) -> Schedule:
    """
    Convert ``{date: {"week", "day"}}`` back into a schedule.

    Raises:
        ValidationError: If a date or position is invalid
    """
    schedule: Schedule = {}
    for date, entry in data.items():
        validate_date(date)
        try:
            schedule[date] = CurriculumPosition(week=entry["week"], day=entry["day"])
        except (KeyError, TypeError) as e:
            raise ValidationError(f"Malformed schedule entry for {date}: {entry!r}") from e
        except SchedulerError as e:
            raise ValidationError(f"{date}: {e}") from e
    return dict(sorted(schedule.items()))
