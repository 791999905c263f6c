"""Ports for persisting timesheet data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from timeguard.domain.model import (
    Assignment,
    DateRange,
    Project,
    TimesheetComment,
    TimesheetEntry,
    User,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class TimesheetEntryRepository(Repository[TimesheetEntry], Protocol):
    """Persistence contract for booked hours."""

    def entries_in_range(
        self,
        assignment: Assignment,
        date_range: DateRange,
        *,
        lock: bool = False,
    ) -> Sequence[TimesheetEntry]: ...

    def update(self, entity: TimesheetEntry) -> None: ...

    def delete(self, entity: TimesheetEntry) -> None: ...

    def latest_entry(self, assignment: Assignment) -> TimesheetEntry | None: ...


@runtime_checkable
class TimesheetCommentRepository(Protocol):
    """Persistence contract for weekly comments."""

    def save(self, comment: TimesheetComment) -> None: ...

    def get(self, user_id: UUID, comment_date: date) -> TimesheetComment | None: ...


@runtime_checkable
class UserRepository(Repository[User], Protocol):
    def get(self, user_id: UUID) -> User | None: ...


@runtime_checkable
class ProjectRepository(Repository[Project], Protocol):
    def get(self, project_id: UUID) -> Project | None: ...


@runtime_checkable
class AssignmentRepository(Repository[Assignment], Protocol):
    def get(self, assignment_id: UUID) -> Assignment | None: ...
