"""
JSONL-based storage for completed workouts and program preferences.

File adapter for the two collaborator contracts the scheduler consumes:
reading completed-workout records, and reading/writing rest days and the
program start date.
"""

import json
from pathlib import Path

from ..core.models import CompletedWorkoutRecord, ProgramPreferences
from .serializers import (
    ValidationError,
    dict_to_preferences,
    dict_to_record,
    preferences_to_dict,
    record_to_json_line,
)


class RecordStore:
    """
    Manages completed workouts stored in JSONL format.

    The records file contains one JSON object per line:
    ``{"date": "2025-10-06", "week": 1, "day": 1}``

    A sibling profile.json stores program preferences.
    """

    def __init__(self, records_path: str | Path):
        """
        Initialize the record store.

        Args:
            records_path: Path to the JSONL records file
        """
        self.records_path = Path(records_path)
        self.profile_path = self.records_path.parent / "profile.json"

    def exists(self) -> bool:
        """Check if the records file exists."""
        return self.records_path.exists()

    def init(self) -> None:
        """
        Initialize empty records file if it doesn't exist.

        Creates parent directories if needed.
        """
        self.records_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.records_path.exists():
            self.records_path.touch()

    def load_preferences(self) -> ProgramPreferences | None:
        """
        Load program preferences from profile.json.

        Returns:
            ProgramPreferences if the file exists, None otherwise

        Raises:
            ValidationError: If the file exists but is invalid
        """
        if not self.profile_path.exists():
            return None

        try:
            with open(self.profile_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {self.profile_path}: {e}") from e
        return dict_to_preferences(data)

    def save_preferences(self, preferences: ProgramPreferences) -> None:
        """
        Save program preferences to profile.json.

        Args:
            preferences: Preferences to save
        """
        self.profile_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.profile_path, "w") as f:
            json.dump(preferences_to_dict(preferences), f, indent=2)

    def load_records(self) -> list[CompletedWorkoutRecord]:
        """
        Load all completed-workout records.

        Returns:
            List of records, sorted by date

        Raises:
            FileNotFoundError: If records file doesn't exist
            ValidationError: If a line cannot be parsed
        """
        if not self.records_path.exists():
            raise FileNotFoundError(
                f"Records file not found: {self.records_path}. Run 'init' first."
            )

        records: list[CompletedWorkoutRecord] = []

        with open(self.records_path, "r") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue

                try:
                    records.append(dict_to_record(json.loads(line)))
                except (json.JSONDecodeError, ValidationError) as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.records_path}: {e}"
                    ) from e

        records.sort(key=lambda r: r.date)
        return records

    def append_record(self, record: CompletedWorkoutRecord) -> bool:
        """
        Add a record, keeping the file in date order.

        A resubmission on a date that already has a record replaces it.

        Returns:
            True if an existing record was replaced
        """
        records = self.load_records()
        replaced = any(r.date == record.date for r in records)
        records = [r for r in records if r.date != record.date]
        records.append(record)
        records.sort(key=lambda r: r.date)
        self._write_records(records)
        return replaced

    def delete_record_at(self, index: int) -> CompletedWorkoutRecord:
        """
        Delete the record at the given 0-based index in sorted order.

        Raises:
            IndexError: If index is out of range
        """
        records = self.load_records()
        if index < 0 or index >= len(records):
            raise IndexError(f"Record index {index} out of range (0-{len(records) - 1})")
        removed = records.pop(index)
        self._write_records(records)
        return removed

    def _write_records(self, records: list[CompletedWorkoutRecord]) -> None:
        with open(self.records_path, "w") as f:
            for record in records:
                f.write(record_to_json_line(record) + "\n")


def get_default_records_path(data_dir: Path | None = None) -> Path:
    """
    Get the default records file path.

    Args:
        data_dir: Directory from settings; defaults to ~/.shred-scheduler

    Returns:
        Default records path
    """
    base = data_dir if data_dir is not None else Path.home() / ".shred-scheduler"
    return base / "records.jsonl"
