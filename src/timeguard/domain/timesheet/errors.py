"""Business errors raised while persisting timesheets."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from uuid import UUID

    from timeguard.domain.model import Assignment, AssignmentStatus, DateRange
    from timeguard.domain.timesheet.guard import ReconciliationOutcome


class TimesheetError(Exception):
    """Base class for rejected timesheet edits."""


class OverBudgetError(TimesheetError):
    """Raised when an edit adds hours to an assignment that ends up over budget."""

    def __init__(
        self,
        assignment: Assignment,
        date_range: DateRange,
        status: AssignmentStatus,
    ) -> None:
        super().__init__(
            f"Booking on assignment {assignment.id} for {date_range} exceeds its budget"
        )
        self.assignment = assignment
        self.date_range = date_range
        self.status = status


class AggregatedOverBudgetError(TimesheetError):
    """Raised after a weekly batch in which at least one assignment was rejected."""

    def __init__(
        self,
        failures: Mapping[UUID, OverBudgetError],
        outcomes: Sequence[ReconciliationOutcome] = (),
    ) -> None:
        rejected = ", ".join(str(assignment_id) for assignment_id in failures)
        super().__init__(f"Bookings exceed the budget of assignments: {rejected}")
        self.failures: dict[UUID, OverBudgetError] = dict(failures)
        self.outcomes: tuple[ReconciliationOutcome, ...] = tuple(outcomes)
