"""Public domain model surface."""

from __future__ import annotations

from timeguard.domain.model.entity import Entity, new_id
from timeguard.domain.model.enums import BudgetKind, StatusCode
from timeguard.domain.model.organisation import Assignment, Project, User
from timeguard.domain.model.status import (
    DEFAULT_INVALID_CODES,
    DEFAULT_NOTIFY_THRESHOLD,
    DEFAULT_SEVERITY_SCALE,
    DEFAULT_STATUS_RANKS,
    AssignmentAggregate,
    AssignmentStatus,
    SeverityScale,
)
from timeguard.domain.model.timesheet import DateRange, TimesheetComment, TimesheetEntry

__all__ = [
    "DEFAULT_INVALID_CODES",
    "DEFAULT_NOTIFY_THRESHOLD",
    "DEFAULT_SEVERITY_SCALE",
    "DEFAULT_STATUS_RANKS",
    "Assignment",
    "AssignmentAggregate",
    "AssignmentStatus",
    "BudgetKind",
    "DateRange",
    "Entity",
    "Project",
    "SeverityScale",
    "StatusCode",
    "TimesheetComment",
    "TimesheetEntry",
    "User",
    "new_id",
]
