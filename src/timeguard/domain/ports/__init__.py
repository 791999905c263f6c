"""Domain port definitions for adapters."""

from __future__ import annotations

from .notification import ManagerNotifier
from .persistence import (
    AssignmentRepository,
    ProjectRepository,
    Repository,
    TimesheetCommentRepository,
    TimesheetEntryRepository,
    UserRepository,
)
from .status import AssignmentStatusOracle, StatusOracleFactory
from .unit_of_work import (
    AdminRepositories,
    AdminUnitOfWork,
    RepositoryCollection,
    TimesheetRepositories,
    TimesheetUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "AdminRepositories",
    "AdminUnitOfWork",
    "AssignmentRepository",
    "AssignmentStatusOracle",
    "ManagerNotifier",
    "ProjectRepository",
    "Repository",
    "RepositoryCollection",
    "StatusOracleFactory",
    "TimesheetCommentRepository",
    "TimesheetEntryRepository",
    "TimesheetRepositories",
    "TimesheetUnitOfWork",
    "UnitOfWork",
    "UserRepository",
]
