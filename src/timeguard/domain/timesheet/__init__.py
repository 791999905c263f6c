"""Timesheet reconciliation and budget guard.

A proposed set of daily bookings for one assignment is diffed against the stored
bookings, applied, and checked against the assignment's budget status. Growth
that leaves the assignment over budget is rejected as a whole; accepted edits
may alert the project manager when a budget threshold is crossed.
"""

from __future__ import annotations

from .errors import AggregatedOverBudgetError, OverBudgetError, TimesheetError
from .guard import BudgetGuard, ReconciliationOutcome
from .notify import (
    ManagerNotification,
    decide_notification,
    deliver_notification,
    newly_reached_codes,
)
from .reconcile import ReconciliationChanges, reconcile_entries, validate_proposed_entries
from .service import TimesheetPersistence
from .week import WeekPersistResult, group_by_assignment, persist_timesheet_week

__all__ = [
    "AggregatedOverBudgetError",
    "BudgetGuard",
    "ManagerNotification",
    "OverBudgetError",
    "ReconciliationChanges",
    "ReconciliationOutcome",
    "TimesheetError",
    "TimesheetPersistence",
    "WeekPersistResult",
    "decide_notification",
    "deliver_notification",
    "group_by_assignment",
    "newly_reached_codes",
    "persist_timesheet_week",
    "reconcile_entries",
    "validate_proposed_entries",
]
