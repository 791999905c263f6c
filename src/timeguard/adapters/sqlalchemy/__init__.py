"""SQLAlchemy adapter package for timeguard."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyAssignmentRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyTimesheetCommentRepository,
    SqlAlchemyTimesheetEntryRepository,
    SqlAlchemyUserRepository,
)
from .unit_of_work import (
    SqlAlchemyAdminUnitOfWork,
    SqlAlchemyTimesheetUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyAdminUnitOfWork",
    "SqlAlchemyAssignmentRepository",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyTimesheetCommentRepository",
    "SqlAlchemyTimesheetEntryRepository",
    "SqlAlchemyTimesheetUnitOfWork",
    "SqlAlchemyUserRepository",
    "StartupError",
    "mapper_registry",
    "start_mappers",
    "shutdown",
    "startup",
]
