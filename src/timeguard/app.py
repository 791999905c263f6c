"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from timeguard.adapters.notification import LoggingManagerNotifier
from timeguard.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyAdminUnitOfWork,
    SqlAlchemyTimesheetUnitOfWork,
    is_started,
    startup,
)
from timeguard.config import get_budget_config
from timeguard.domain.model import Assignment, BudgetKind, Project, User
from timeguard.domain.timesheet import TimesheetPersistence

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date
    from uuid import UUID

    from timeguard.domain.ports.notification import ManagerNotifier
    from timeguard.domain.ports.status import StatusOracleFactory
    from timeguard.domain.ports.unit_of_work import AdminUnitOfWork, TimesheetUnitOfWork

    AdminUnitOfWorkFactory = Callable[[], AdminUnitOfWork]


log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def build_timesheet_persistence(
    *,
    status_oracle_factory: StatusOracleFactory,
    notifier: ManagerNotifier | None = None,
    unit_of_work_factory: Callable[[], TimesheetUnitOfWork] | None = None,
) -> TimesheetPersistence:
    """Wire the timesheet service to the configured database and budget settings."""

    if unit_of_work_factory is None:
        _ensure_started()
    budget = get_budget_config()
    log.info(
        "Timesheet persistence ready: notify_threshold=%s, invalid=%s",
        budget.notify_threshold,
        ", ".join(sorted(budget.invalid_codes)),
    )
    return TimesheetPersistence(
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyTimesheetUnitOfWork,
        status_oracle_factory=status_oracle_factory,
        notifier=notifier or LoggingManagerNotifier(),
        severity=budget.severity_scale(),
    )


def create_user(
    *,
    display_name: str,
    email: str | None = None,
    unit_of_work_factory: AdminUnitOfWorkFactory | None = None,
) -> User:
    if unit_of_work_factory is None:
        _ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyAdminUnitOfWork
    user = User(display_name=display_name, email=email)
    with effective_uow() as uow:
        uow.repositories.users.add(user)
        uow.commit()
    log.info("Created user %s", user.id)
    return user


def create_project(
    *,
    name: str,
    code: str | None = None,
    manager_id: UUID | None = None,
    unit_of_work_factory: AdminUnitOfWorkFactory | None = None,
) -> Project:
    if unit_of_work_factory is None:
        _ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyAdminUnitOfWork
    with effective_uow() as uow:
        manager = None
        if manager_id is not None:
            manager = uow.repositories.users.get(manager_id)
            if manager is None:
                raise ValueError(f"Unknown manager: {manager_id}")
        project = Project(name=name, code=code, manager=manager)
        uow.repositories.projects.add(project)
        uow.commit()
    log.info("Created project %s", project.id)
    return project


def create_assignment(  # noqa: PLR0913
    *,
    user_id: UUID,
    project_id: UUID,
    budget_kind: BudgetKind | None = None,
    allotted_hours: float | None = None,
    allowed_overrun_hours: float | None = None,
    notify_manager: bool = False,
    date_start: date | None = None,
    date_end: date | None = None,
    unit_of_work_factory: AdminUnitOfWorkFactory | None = None,
) -> Assignment:
    if unit_of_work_factory is None:
        _ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyAdminUnitOfWork
    with effective_uow() as uow:
        user = uow.repositories.users.get(user_id)
        if user is None:
            raise ValueError(f"Unknown user: {user_id}")
        project = uow.repositories.projects.get(project_id)
        if project is None:
            raise ValueError(f"Unknown project: {project_id}")
        assignment = Assignment(
            user=user,
            project=project,
            budget_kind=budget_kind,
            allotted_hours=allotted_hours,
            allowed_overrun_hours=allowed_overrun_hours,
            notify_manager=notify_manager,
            date_start=date_start,
            date_end=date_end,
        )
        uow.repositories.assignments.add(assignment)
        uow.commit()
    log.info("Created %s assignment %s", budget_kind or "unbudgeted", assignment.id)
    return assignment
