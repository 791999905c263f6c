"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import select

from timeguard.adapters.sqlalchemy.mappings import timesheet_entry_table
from timeguard.domain.model import (
    Assignment,
    Project,
    TimesheetComment,
    TimesheetEntry,
    User,
)

if TYPE_CHECKING:
    from datetime import date
    from uuid import UUID

    from sqlalchemy.orm import Session

    from timeguard.domain.model import DateRange


class SqlAlchemyTimesheetEntryRepository:
    """Entry store; every mutation is flushed so status queries see it."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def entries_in_range(
        self,
        assignment: Assignment,
        date_range: DateRange,
        *,
        lock: bool = False,
    ) -> list[TimesheetEntry]:
        entry_date = timesheet_entry_table.c.entry_date
        stmt = select(TimesheetEntry).where(
            timesheet_entry_table.c.assignment_id == assignment.id
        )
        if date_range.start is not None:
            stmt = stmt.where(entry_date >= date_range.start)
        if date_range.end is not None:
            stmt = stmt.where(entry_date <= date_range.end)
        stmt = stmt.order_by(entry_date)
        if lock:
            stmt = stmt.with_for_update()
        return list(self.session.scalars(stmt).unique())

    def add(self, entity: TimesheetEntry) -> None:
        entity.assignment = self._attached(entity.assignment)
        self.session.add(entity)
        self.session.flush()

    def update(self, entity: TimesheetEntry) -> None:
        self.session.add(entity)
        self.session.flush()

    def delete(self, entity: TimesheetEntry) -> None:
        self.session.delete(entity)
        self.session.flush()

    def latest_entry(self, assignment: Assignment) -> TimesheetEntry | None:
        stmt = (
            select(TimesheetEntry)
            .where(timesheet_entry_table.c.assignment_id == assignment.id)
            .order_by(timesheet_entry_table.c.entry_date.desc())
            .limit(1)
        )
        return self.session.scalars(stmt).unique().one_or_none()

    def _attached(self, assignment: Assignment) -> Assignment:
        if assignment in self.session:
            return assignment
        # load by id; the caller's copy is never written back
        stored = self.session.get(Assignment, assignment.id)
        if stored is None:
            raise ValueError(f"Unknown assignment: {assignment.id}")
        return stored


class SqlAlchemyTimesheetCommentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def save(self, comment: TimesheetComment) -> None:
        self.session.merge(comment)
        self.session.flush()

    def get(self, user_id: UUID, comment_date: date) -> TimesheetComment | None:
        return self.session.get(TimesheetComment, (user_id, comment_date))


class SqlAlchemyEntityRepository[TEntity: (User, Project, Assignment)]:
    """Add/get by primary key for the administrative aggregates."""

    def __init__(self, session: Session, entity_cls: type[TEntity]) -> None:
        self.session = session
        self._entity_cls = entity_cls

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def get(self, entity_id: UUID) -> TEntity | None:
        return self.session.get(self._entity_cls, entity_id)


class SqlAlchemyUserRepository(SqlAlchemyEntityRepository[User]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, User)


class SqlAlchemyProjectRepository(SqlAlchemyEntityRepository[Project]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Project)


class SqlAlchemyAssignmentRepository(SqlAlchemyEntityRepository[Assignment]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Assignment)


if TYPE_CHECKING:
    from timeguard.domain.ports.persistence import (
        AssignmentRepository,
        TimesheetCommentRepository,
        TimesheetEntryRepository,
    )

    _session_stub = cast("Session", object())
    _entry_repo: TimesheetEntryRepository = SqlAlchemyTimesheetEntryRepository(_session_stub)
    _comment_repo: TimesheetCommentRepository = SqlAlchemyTimesheetCommentRepository(
        _session_stub
    )
    _assignment_repo: AssignmentRepository = SqlAlchemyAssignmentRepository(_session_stub)
