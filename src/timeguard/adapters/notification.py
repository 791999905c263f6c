"""Manager notifier that writes alerts to the application log."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

    from timeguard.domain.model import AssignmentAggregate, StatusCode, User

log = logging.getLogger(__name__)


class LoggingManagerNotifier:
    """Fallback sink used when no mail transport is configured."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or log

    def notify_manager_budget_reached(
        self,
        aggregate: AssignmentAggregate | None,
        booked_on: date | None,
        manager: User,
        *,
        reached: StatusCode,
    ) -> None:
        booked = aggregate.booked_hours if aggregate is not None else None
        remaining = aggregate.hours_remaining if aggregate is not None else None
        self._log.info(
            "Budget alert for %s <%s>: %s reached on %s (booked=%s, remaining=%s)",
            manager.display_name,
            manager.email or "no email",
            reached,
            booked_on,
            booked,
            remaining,
        )


if TYPE_CHECKING:
    from timeguard.domain.ports.notification import ManagerNotifier

    _notifier_check: ManagerNotifier = LoggingManagerNotifier()
