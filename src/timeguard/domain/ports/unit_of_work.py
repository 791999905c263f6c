"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from timeguard.domain.ports.persistence import (
        AssignmentRepository,
        ProjectRepository,
        TimesheetCommentRepository,
        TimesheetEntryRepository,
        UserRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection.

    Leaving the context with an exception rolls back everything not yet committed.
    """

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class TimesheetRepositories(RepositoryCollection):
    """Repositories required to reconcile timesheets."""

    entries: TimesheetEntryRepository
    comments: TimesheetCommentRepository


@dataclass(slots=True)
class AdminRepositories(RepositoryCollection):
    """Repositories for maintaining users, projects and assignments."""

    users: UserRepository
    projects: ProjectRepository
    assignments: AssignmentRepository


type TimesheetUnitOfWork = UnitOfWork[TimesheetRepositories]
type AdminUnitOfWork = UnitOfWork[AdminRepositories]
