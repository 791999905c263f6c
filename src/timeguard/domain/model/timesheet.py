"""Booked hours, weekly comments and the date ranges they are reconciled over."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from timeguard.domain.model.organisation import Assignment


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive range of calendar days; a missing bound leaves that side open."""

    start: date | None = None
    end: date | None = None

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError("Date range start must not be after its end")

    @classmethod
    def week_of(cls, day: date, *, first_weekday: int = 0) -> DateRange:
        """Return the seven-day week containing ``day``.

        ``first_weekday`` follows ``date.weekday()``: 0 is Monday, 6 is Sunday.
        """

        if not 0 <= first_weekday <= 6:  # noqa: PLR2004
            raise ValueError("first_weekday must be between 0 and 6")
        offset = (day.weekday() - first_weekday) % 7
        start = day - timedelta(days=offset)
        return cls(start=start, end=start + timedelta(days=6))

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        return not (self.end is not None and day > self.end)

    def __str__(self) -> str:
        start = self.start.isoformat() if self.start else "..."
        end = self.end.isoformat() if self.end else "..."
        return f"{start}/{end}"


@dataclass(eq=False, kw_only=True)
class TimesheetEntry:
    """Hours booked on one assignment for one day.

    ``hours`` of ``None`` or zero means nothing is booked; proposing such an entry
    for a day that has a stored booking removes it.
    """

    assignment: Assignment = field(repr=False)
    entry_date: date
    hours: float | None = None

    def __post_init__(self) -> None:
        if self.hours is not None and self.hours < 0:
            raise ValueError("Booked hours must not be negative")

    @property
    def is_booked(self) -> bool:
        return bool(self.hours)

    @property
    def booked_hours(self) -> float:
        return self.hours or 0.0


@dataclass(eq=False, kw_only=True)
class TimesheetComment:
    """Free-text remark a user leaves on a persisted week."""

    user_id: UUID
    comment_date: date
    text: str
