"""
Configuration constants for the training curriculum and scheduler.

All fixed program dimensions, policy ladders and address patterns are
centralized here.  Host-level settings that a user may override (schedule
horizon, default rest days, data directory) are loaded from YAML by
engine/config_loader.py and fall back to the values below.
"""

from typing import Final

# =============================================================================
# CURRICULUM DIMENSIONS
# =============================================================================

PROGRAM_WEEKS: Final[int] = 6  # Weeks in one pass through the curriculum
DAYS_PER_WEEK: Final[int] = 6  # Training days per curriculum week
EXERCISES_PER_DAY: Final[int] = 7  # Exercise slots in every day table
SETS_PER_EXERCISE: Final[int] = 4  # Set slots per exercise

PHASE_LENGTH_WEEKS: Final[int] = 3  # Weeks 1-3 = phase 1, weeks 4-6 = phase 2
MULTI_JOINT_LAST_DAY: Final[int] = 3  # Days 1-3 multi-joint, 4-6 isolation

SET_FIELDS: Final[tuple[str, ...]] = ("reps", "weight", "notes")
NUMERIC_SET_FIELDS: Final[tuple[str, ...]] = ("reps", "weight")

# =============================================================================
# CURRICULUM POLICY LADDERS (keyed by week position within phase)
# =============================================================================

MULTI_JOINT_REP_RANGES: Final[dict[int, str]] = {1: "9-11", 2: "6-8", 3: "2-5"}
ISOLATION_REP_RANGES: Final[dict[int, str]] = {1: "12-15", 2: "16-20", 3: "21-30"}

MULTI_JOINT_REST_SECONDS: Final[dict[int, int]] = {1: 90, 2: 120, 3: 180}
ISOLATION_REST_SECONDS: Final[dict[int, int]] = {1: 60, 2: 75, 3: 90}

WORKOUT_NAMES: Final[dict[int, str]] = {
    1: "Chest, Triceps, Abs - Multi-Joint",
    2: "Shoulders, Legs, Calves - Multi-Joint",
    3: "Back, Traps, Biceps - Multi-Joint",
    4: "Chest, Triceps, Abs - Isolation",
    5: "Shoulders, Legs, Calves - Isolation",
    6: "Back, Traps, Biceps - Isolation",
}

# =============================================================================
# STORAGE ADDRESSES
# =============================================================================

TABLE_ADDRESS_TEMPLATE: Final[str] = "week{week}_day{day}_workout_tracking"
TABLE_ADDRESS_PATTERN: Final[str] = r"^week(\d+)_day(\d+)_workout_tracking$"

SET_COLUMN_TEMPLATE: Final[str] = "exercise_{exercise}_set{set_number}_{field}"
NAME_COLUMN_TEMPLATE: Final[str] = "exercise_{exercise}_name"
NOTES_COLUMN_TEMPLATE: Final[str] = "exercise_{exercise}_notes"
COLUMN_ADDRESS_PATTERN: Final[str] = (
    r"^exercise_(\d+)_(?:set(\d+)_(reps|weight|notes)|(name)|(notes))$"
)

UPDATED_AT_COLUMN: Final[str] = "updated_at"
DEFAULT_EXERCISE_NAME: Final[str] = "Exercise {exercise}"

# =============================================================================
# SCHEDULING
# =============================================================================

SCHEDULE_HORIZON_DAYS: Final[int] = 90  # Days scanned by the forward walk
DEFAULT_REST_DAYS: Final[frozenset[int]] = frozenset({0})  # Sunday
WEEKDAY_NAMES: Final[tuple[str, ...]] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

DATE_FORMAT: Final[str] = "%Y-%m-%d"
