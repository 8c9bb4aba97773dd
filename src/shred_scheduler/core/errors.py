"""
Error kinds raised by the scheduling and addressing core.

Every failure is a rejected operation reported synchronously to the caller;
nothing in the core catches these.
"""

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from .models import CurriculumPosition

ConflictReason = Literal["same_date", "rest_day", "sequence_order"]


class SchedulerError(Exception):
    """Base class for all core errors."""

    pass


class RangeError(SchedulerError, ValueError):
    """A week, day, exercise or set coordinate is outside its domain."""

    pass


class FormatError(SchedulerError, ValueError):
    """An address or date string does not match the expected shape."""

    pass


class PreconditionError(SchedulerError):
    """An operation was attempted with missing or unusable input."""

    pass


class SchedulingConflictError(SchedulerError):
    """
    A requested schedule edit violates the rest-day or ordering rules.

    Carries the offending date and curriculum position so the host can
    render a precise message.
    """

    def __init__(
        self,
        message: str,
        *,
        reason: ConflictReason,
        date: str | None = None,
        position: "CurriculumPosition | None" = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.date = date
        self.position = position
