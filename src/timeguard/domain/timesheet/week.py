"""Persist a week of bookings spanning several assignments."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from timeguard.domain.timesheet.errors import AggregatedOverBudgetError, OverBudgetError
from timeguard.domain.timesheet.guard import ReconciliationOutcome

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from uuid import UUID

    from timeguard.domain.model import (
        Assignment,
        DateRange,
        TimesheetComment,
        TimesheetEntry,
    )

type AssignmentReconciler = Callable[
    [Assignment, list[TimesheetEntry], DateRange], ReconciliationOutcome
]
type CommentWriter = Callable[[TimesheetComment], None]

log = logging.getLogger(__name__)


@dataclass(slots=True)
class WeekPersistResult:
    """Outcome of a weekly batch whose assignments were all accepted."""

    outcomes: list[ReconciliationOutcome] = field(default_factory=list[ReconciliationOutcome])
    comment_saved: bool = False


def group_by_assignment(
    entries: Iterable[TimesheetEntry],
) -> list[tuple[Assignment, list[TimesheetEntry]]]:
    """Group entries by assignment id, keeping first-seen order."""

    groups: dict[UUID, tuple[Assignment, list[TimesheetEntry]]] = {}
    for entry in entries:
        assignment = entry.assignment
        if assignment.id not in groups:
            groups[assignment.id] = (assignment, [])
        groups[assignment.id][1].append(entry)
    return list(groups.values())


def persist_timesheet_week(
    entries: Iterable[TimesheetEntry],
    comment: TimesheetComment | None,
    date_range: DateRange,
    *,
    reconcile: AssignmentReconciler,
    persist_comment: CommentWriter,
) -> WeekPersistResult:
    """Reconcile each assignment in ``entries`` independently, then save ``comment``.

    ``reconcile`` must run each call in its own transaction so that a rejected
    assignment leaves the others committed. Rejections are collected and raised
    together as :class:`AggregatedOverBudgetError` once every assignment was tried.
    """

    result = WeekPersistResult()
    failures: dict[UUID, OverBudgetError] = {}

    for assignment, assignment_entries in group_by_assignment(entries):
        try:
            outcome = reconcile(assignment, assignment_entries, date_range)
        except OverBudgetError as exc:
            failures[assignment.id] = exc
            continue
        result.outcomes.append(outcome)

    if comment is not None:
        persist_comment(comment)
        result.comment_saved = True

    if failures:
        log.warning(
            "Week %s persisted with %d rejected assignment(s)",
            date_range,
            len(failures),
        )
        raise AggregatedOverBudgetError(failures, result.outcomes)

    log.info("Week %s persisted for %d assignment(s)", date_range, len(result.outcomes))
    return result
