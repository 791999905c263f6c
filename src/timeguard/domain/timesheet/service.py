"""Transactional entry points for reconciling timesheets."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from timeguard.domain.model import DEFAULT_SEVERITY_SCALE, SeverityScale
from timeguard.domain.timesheet.guard import BudgetGuard
from timeguard.domain.timesheet.notify import deliver_notification
from timeguard.domain.timesheet.week import persist_timesheet_week

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from timeguard.domain.model import (
        Assignment,
        DateRange,
        TimesheetComment,
        TimesheetEntry,
    )
    from timeguard.domain.ports.notification import ManagerNotifier
    from timeguard.domain.ports.status import StatusOracleFactory
    from timeguard.domain.ports.unit_of_work import TimesheetUnitOfWork
    from timeguard.domain.timesheet.guard import ReconciliationOutcome
    from timeguard.domain.timesheet.week import WeekPersistResult

log = logging.getLogger(__name__)


@dataclass(slots=True)
class TimesheetPersistence:
    """Reconcile bookings, one unit of work per assignment."""

    unit_of_work_factory: Callable[[], TimesheetUnitOfWork]
    status_oracle_factory: StatusOracleFactory
    notifier: ManagerNotifier
    severity: SeverityScale = DEFAULT_SEVERITY_SCALE

    def reconcile(
        self,
        assignment: Assignment,
        proposed: Iterable[TimesheetEntry],
        date_range: DateRange,
    ) -> ReconciliationOutcome:
        """Atomically apply ``proposed`` to ``assignment``.

        Raises :class:`~timeguard.domain.timesheet.errors.OverBudgetError` with
        nothing persisted when the edit is rejected. The manager is notified only
        after the transaction committed.
        """

        with self.unit_of_work_factory() as uow:
            guard = BudgetGuard(self.status_oracle_factory(uow), severity=self.severity)
            outcome = guard.reconcile(uow.repositories, assignment, proposed, date_range)
            uow.commit()

        changes = outcome.changes
        log.info(
            "Reconciled assignment %s for %s: inserted=%d, updated=%d, deleted=%d",
            assignment.id,
            date_range,
            len(changes.inserted),
            len(changes.updated),
            len(changes.deleted),
        )
        if outcome.notification is not None:
            deliver_notification(self.notifier, outcome.notification)
        return outcome

    def persist_week(
        self,
        entries: Iterable[TimesheetEntry],
        comment: TimesheetComment | None,
        date_range: DateRange,
    ) -> WeekPersistResult:
        return persist_timesheet_week(
            entries,
            comment,
            date_range,
            reconcile=self.reconcile,
            persist_comment=self._save_comment,
        )

    def _save_comment(self, comment: TimesheetComment) -> None:
        with self.unit_of_work_factory() as uow:
            uow.repositories.comments.save(comment)
            uow.commit()
