from __future__ import annotations

import logging
from datetime import date

import pytest

from timeguard.domain.model import (
    AssignmentAggregate,
    BudgetKind,
    DateRange,
    SeverityScale,
    StatusCode,
)
from timeguard.domain.timesheet import (
    OverBudgetError,
    TimesheetPersistence,
    decide_notification,
    deliver_notification,
    newly_reached_codes,
)
from tests.helpers.timesheets import (
    FailingNotifier,
    FakeTimesheetEntryRepository,
    FakeTimesheetUnitOfWork,
    RecordingNotifier,
    ScriptedStatusOracle,
    entry,
    make_assignment,
    status,
)

DAY_A = date(2008, 4, 1)
DAY_B = date(2008, 4, 2)


def test_manager_is_mailed_when_assignment_enters_overrun() -> None:
    assignment = make_assignment()
    repository = FakeTimesheetEntryRepository(
        [entry(assignment, DAY_A, 5.0), entry(assignment, DAY_B, 5.0)]
    )
    aggregate = AssignmentAggregate(
        assignment_id=assignment.id,
        booked_hours=44.0,
        allotted_hours=40.0,
        allowed_overrun_hours=8.0,
    )
    oracle = ScriptedStatusOracle(
        status(StatusCode.IN_ALLOTTED),
        status(StatusCode.IN_OVERRUN, aggregate=aggregate),
    )
    notifier = RecordingNotifier()
    persistence = TimesheetPersistence(
        unit_of_work_factory=lambda: FakeTimesheetUnitOfWork(repository),
        status_oracle_factory=lambda _uow: oracle,
        notifier=notifier,
    )

    outcome = persistence.reconcile(
        assignment,
        [entry(assignment, DAY_A, 8.0), entry(assignment, DAY_B, None)],
        DateRange(),
    )

    assert len(repository.updated) == 1
    assert len(repository.deleted) == 1
    assert len(notifier.sent) == 1
    sent = notifier.sent[0]
    assert sent.aggregate is aggregate
    assert sent.manager is assignment.project.manager
    assert sent.booked_on == DAY_A
    assert sent.reached is StatusCode.IN_OVERRUN
    assert outcome.notification is not None


def test_manager_is_not_mailed_again_for_the_same_code() -> None:
    assignment = make_assignment()
    repository = FakeTimesheetEntryRepository([entry(assignment, DAY_A, 5.0)])
    oracle = ScriptedStatusOracle(
        status(StatusCode.IN_OVERRUN),
        status(StatusCode.IN_OVERRUN),
    )
    notifier = RecordingNotifier()
    persistence = TimesheetPersistence(
        unit_of_work_factory=lambda: FakeTimesheetUnitOfWork(repository),
        status_oracle_factory=lambda _uow: oracle,
        notifier=notifier,
    )

    persistence.reconcile(assignment, [entry(assignment, DAY_A, 6.0)], DateRange())

    assert notifier.sent == []


def test_rejected_reconciliation_never_notifies() -> None:
    assignment = make_assignment()
    repository = FakeTimesheetEntryRepository()
    oracle = ScriptedStatusOracle(
        status(StatusCode.IN_ALLOTTED),
        status(StatusCode.OVER_OVERRUN, valid=False),
    )
    notifier = RecordingNotifier()
    persistence = TimesheetPersistence(
        unit_of_work_factory=lambda: FakeTimesheetUnitOfWork(repository),
        status_oracle_factory=lambda _uow: oracle,
        notifier=notifier,
    )

    with pytest.raises(OverBudgetError, match="exceeds its budget"):
        persistence.reconcile(assignment, [entry(assignment, DAY_A, 30.0)], DateRange())

    assert notifier.sent == []


def test_notification_failure_does_not_undo_the_commit(caplog: pytest.LogCaptureFixture) -> None:
    assignment = make_assignment()
    repository = FakeTimesheetEntryRepository()
    oracle = ScriptedStatusOracle(status(StatusCode.IN_ALLOTTED), status(StatusCode.IN_OVERRUN))
    notifier = FailingNotifier()
    uow = FakeTimesheetUnitOfWork(repository)
    persistence = TimesheetPersistence(
        unit_of_work_factory=lambda: uow,
        status_oracle_factory=lambda _uow: oracle,
        notifier=notifier,
    )

    with caplog.at_level(logging.WARNING):
        persistence.reconcile(assignment, [entry(assignment, DAY_A, 9.0)], DateRange())

    assert notifier.attempts == 1
    assert uow.commits == 1
    assert repository.hours_of(assignment) == {DAY_A: 9.0}
    assert "Failed to notify manager" in caplog.text


def test_no_notification_when_flag_is_off() -> None:
    assignment = make_assignment(notify_manager=False)

    decision = decide_notification(
        assignment,
        status(StatusCode.IN_ALLOTTED),
        status(StatusCode.IN_OVERRUN),
        booked_on=DAY_A,
    )

    assert decision is None


def test_no_notification_without_manager() -> None:
    assignment = make_assignment(with_manager=False)

    decision = decide_notification(
        assignment,
        status(StatusCode.IN_ALLOTTED),
        status(StatusCode.OVER_OVERRUN, valid=False),
        booked_on=DAY_A,
    )

    assert decision is None


def test_below_threshold_transition_is_ignored() -> None:
    assignment = make_assignment()

    decision = decide_notification(
        assignment,
        status(StatusCode.BEFORE_START),
        status(StatusCode.IN_ALLOTTED, StatusCode.RUNNING),
        booked_on=DAY_A,
    )

    assert decision is None


def test_most_severe_new_code_is_reported() -> None:
    assignment = make_assignment(budget_kind=BudgetKind.FIXED)

    decision = decide_notification(
        assignment,
        status(StatusCode.IN_ALLOTTED),
        status(StatusCode.IN_OVERRUN, StatusCode.OVER_ALLOTTED, valid=False),
        booked_on=None,
    )

    assert decision is not None
    assert decision.reached is StatusCode.OVER_ALLOTTED
    assert decision.booked_on is None


def test_escalation_from_overrun_to_over_overrun_notifies() -> None:
    before = status(StatusCode.IN_OVERRUN)
    after = status(StatusCode.OVER_OVERRUN, valid=False)

    assert newly_reached_codes(before, after) == frozenset({StatusCode.OVER_OVERRUN})


def test_custom_threshold_changes_what_counts_as_reached() -> None:
    scale = SeverityScale(notify_threshold=StatusCode.OVER_OVERRUN)

    reached = newly_reached_codes(
        status(StatusCode.IN_ALLOTTED),
        status(StatusCode.IN_OVERRUN),
        scale=scale,
    )

    assert reached == frozenset()


def test_deliver_notification_reports_success() -> None:
    assignment = make_assignment()
    decision = decide_notification(
        assignment,
        status(StatusCode.IN_ALLOTTED),
        status(StatusCode.IN_OVERRUN),
        booked_on=DAY_B,
    )
    assert decision is not None
    notifier = RecordingNotifier()

    assert deliver_notification(notifier, decision) is True
    assert deliver_notification(FailingNotifier(), decision) is False
    assert notifier.sent[0].booked_on == DAY_B
