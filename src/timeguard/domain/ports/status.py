"""Port for the service that computes an assignment's budget status."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from timeguard.domain.model import Assignment, AssignmentStatus
    from timeguard.domain.ports.unit_of_work import TimesheetUnitOfWork


@runtime_checkable
class AssignmentStatusOracle(Protocol):
    """Report the current budget status of an assignment.

    Implementations must read through the same transaction as the entry
    repository so that bookings made earlier in the unit of work are reflected.
    """

    def status_of(self, assignment: Assignment) -> AssignmentStatus: ...


type StatusOracleFactory = Callable[[TimesheetUnitOfWork], AssignmentStatusOracle]
