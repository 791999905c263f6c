"""Port for alerting project managers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import date

    from timeguard.domain.model import AssignmentAggregate, StatusCode, User


@runtime_checkable
class ManagerNotifier(Protocol):
    """One-way channel for budget alerts; return values are ignored."""

    def notify_manager_budget_reached(
        self,
        aggregate: AssignmentAggregate | None,
        booked_on: date | None,
        manager: User,
        *,
        reached: StatusCode,
    ) -> None: ...
