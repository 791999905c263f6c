"""Decide whether a committed reconciliation warrants a manager alert."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from timeguard.domain.model import DEFAULT_SEVERITY_SCALE

if TYPE_CHECKING:
    from datetime import date

    from timeguard.domain.model import (
        Assignment,
        AssignmentAggregate,
        AssignmentStatus,
        SeverityScale,
        StatusCode,
        User,
    )
    from timeguard.domain.ports.notification import ManagerNotifier

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ManagerNotification:
    """Alert payload for the manager of an assignment's project."""

    assignment: Assignment
    manager: User
    reached: StatusCode
    aggregate: AssignmentAggregate | None
    booked_on: date | None


def newly_reached_codes(
    before: AssignmentStatus,
    after: AssignmentStatus,
    *,
    scale: SeverityScale = DEFAULT_SEVERITY_SCALE,
) -> frozenset[StatusCode]:
    """Codes at or above the notification threshold that ``after`` adds to ``before``."""

    return frozenset(
        code
        for code in after.codes - before.codes
        if scale.at_or_above_threshold(code)
    )


def decide_notification(
    assignment: Assignment,
    before: AssignmentStatus,
    after: AssignmentStatus,
    *,
    booked_on: date | None,
    scale: SeverityScale = DEFAULT_SEVERITY_SCALE,
) -> ManagerNotification | None:
    if not assignment.notify_manager:
        return None
    manager = assignment.manager
    if manager is None:
        log.debug("Assignment %s has no project manager to notify", assignment.id)
        return None

    reached = scale.most_severe(newly_reached_codes(before, after, scale=scale))
    if reached is None:
        return None
    return ManagerNotification(
        assignment=assignment,
        manager=manager,
        reached=reached,
        aggregate=after.aggregate,
        booked_on=booked_on,
    )


def deliver_notification(notifier: ManagerNotifier, notification: ManagerNotification) -> bool:
    """Hand ``notification`` to ``notifier``; failures are logged, never raised."""

    try:
        notifier.notify_manager_budget_reached(
            notification.aggregate,
            notification.booked_on,
            notification.manager,
            reached=notification.reached,
        )
    except Exception:  # noqa: BLE001
        log.warning(
            "Failed to notify manager %s about assignment %s",
            notification.manager.id,
            notification.assignment.id,
            exc_info=True,
        )
        return False
    log.info(
        "Notified manager %s: assignment %s reached %s",
        notification.manager.id,
        notification.assignment.id,
        notification.reached,
    )
    return True
