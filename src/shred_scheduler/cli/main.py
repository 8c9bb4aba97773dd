"""
CLI entry point using Typer.

Provides commands for program scheduling:
- init: Confirm start date and rest days
- schedule: Show the rebuilt training schedule
- status: Program settings, last and next workout
- rest-days: Change rest days
- log: Record a completed workout
- history / delete-record: Inspect and correct completed workouts
- move / toggle: Preview manual schedule edits
- tables / columns: Storage addresses of the curriculum
"""

from .app import app
from .commands import addresses, program, schedule, sessions  # noqa: F401  (registers commands)

__all__ = ["app"]


if __name__ == "__main__":
    app()
