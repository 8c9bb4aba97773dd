"""Shared Typer app object, shared option types, and store utilities."""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.config import WEEKDAY_NAMES
from ..core.engine.config_loader import SchedulerSettings, load_settings
from ..core.errors import SchedulerError
from ..core.models import ProgramInputs
from ..io.record_store import RecordStore, get_default_records_path
from ..io.serializers import ValidationError
from . import views

# Shared --records-path option type used across all commands
RecordsPathOption = Annotated[
    Optional[Path],
    typer.Option("--records-path", "-p", help="Path to the completed-workouts JSONL file"),
]

app = typer.Typer(
    name="shred-scheduler",
    help="Schedule a 6-week x 6-day training program around your rest days.",
    no_args_is_help=True,
)


@lru_cache(maxsize=1)
def get_settings() -> SchedulerSettings:
    """Settings from scheduler.yaml, read once per process."""
    return load_settings()


def get_store(records_path: Path | None) -> RecordStore:
    """Get record store from path or the configured default location."""
    if records_path is None:
        records_path = get_default_records_path(get_settings().data_dir)
    return RecordStore(records_path)


def load_inputs_or_exit(store: RecordStore) -> ProgramInputs:
    """
    Load preferences and records for a command, exiting with a message on failure.
    """
    if not store.exists():
        views.print_error(f"Records file not found: {store.records_path}")
        views.print_info("Run 'init' first to set your start date and rest days.")
        raise typer.Exit(1)

    try:
        preferences = store.load_preferences()
        records = store.load_records()
    except (ValidationError, SchedulerError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if preferences is None or not preferences.confirmed:
        views.print_error("No confirmed program found. Run 'init' first.")
        raise typer.Exit(1)

    return ProgramInputs(preferences=preferences, completed_records=records)


def parse_rest_days(text: str) -> frozenset[int]:
    """
    Parse a comma-separated list of weekdays.

    Accepts numbers (0=Sunday ... 6=Saturday) or names / three-letter
    abbreviations, e.g. ``"0,6"`` or ``"sun,sat"``.  An empty string means
    no rest days.

    Raises:
        typer.BadParameter: On an unknown weekday
    """
    lookup = {name.lower(): i for i, name in enumerate(WEEKDAY_NAMES)}
    lookup.update({name[:3].lower(): i for i, name in enumerate(WEEKDAY_NAMES)})

    days: set[int] = set()
    for token in (t.strip().lower() for t in text.split(",")):
        if not token:
            continue
        if token.isdigit() and 0 <= int(token) <= 6:
            days.add(int(token))
        elif token in lookup:
            days.add(lookup[token])
        else:
            raise typer.BadParameter(
                f"Unknown weekday {token!r}. Use 0-6 (0=Sunday) or names like 'sun'."
            )
    return frozenset(days)
