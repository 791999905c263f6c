"""Budget guard: reconcile an assignment and reject growth that ends over budget.

The guard locks the stored entries, then samples the assignment status before
and after applying the edits. An edit set is rejected when the status afterwards
is invalid and at least one day gained hours; pure reductions always pass so
over-budget assignments can still be corrected. The before status only feeds the
notification decision.

Rejection raises :class:`OverBudgetError` after the edits were issued. Undoing
them is the job of the surrounding unit of work, which rolls back when its
context exits with an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from timeguard.domain.model import DEFAULT_SEVERITY_SCALE, SeverityScale
from timeguard.domain.timesheet.errors import OverBudgetError
from timeguard.domain.timesheet.notify import decide_notification
from timeguard.domain.timesheet.reconcile import reconcile_entries, validate_proposed_entries

if TYPE_CHECKING:
    from collections.abc import Iterable

    from timeguard.domain.model import (
        Assignment,
        AssignmentStatus,
        DateRange,
        TimesheetEntry,
    )
    from timeguard.domain.ports.status import AssignmentStatusOracle
    from timeguard.domain.ports.unit_of_work import TimesheetRepositories
    from timeguard.domain.timesheet.notify import ManagerNotification
    from timeguard.domain.timesheet.reconcile import ReconciliationChanges

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ReconciliationOutcome:
    """Result of an accepted reconciliation."""

    assignment: Assignment
    date_range: DateRange
    changes: ReconciliationChanges
    before: AssignmentStatus
    after: AssignmentStatus
    notification: ManagerNotification | None = None


@dataclass(slots=True)
class BudgetGuard:
    status_oracle: AssignmentStatusOracle
    severity: SeverityScale = DEFAULT_SEVERITY_SCALE

    def reconcile(
        self,
        repositories: TimesheetRepositories,
        assignment: Assignment,
        proposed: Iterable[TimesheetEntry],
        date_range: DateRange,
    ) -> ReconciliationOutcome:
        """Apply ``proposed`` for ``assignment`` or raise :class:`OverBudgetError`."""

        entries = validate_proposed_entries(assignment, proposed, date_range)

        stored = repositories.entries.entries_in_range(assignment, date_range, lock=True)
        before = self.status_oracle.status_of(assignment)
        changes = reconcile_entries(repositories.entries, assignment, entries, stored)
        after = self.status_oracle.status_of(assignment)

        if after.is_invalid() and changes.any_increase:
            log.warning(
                "Rejected bookings on assignment %s for %s: over budget (%s)",
                assignment.id,
                date_range,
                ", ".join(sorted(after.codes)) or "invalid",
            )
            raise OverBudgetError(assignment, date_range, after)

        notification = None
        if after.codes != before.codes:
            latest = repositories.entries.latest_entry(assignment)
            notification = decide_notification(
                assignment,
                before,
                after,
                booked_on=latest.entry_date if latest is not None else None,
                scale=self.severity,
            )

        return ReconciliationOutcome(
            assignment=assignment,
            date_range=date_range,
            changes=changes,
            before=before,
            after=after,
            notification=notification,
        )
