"""SQLAlchemy mapping metadata for the timeguard domain model."""

from __future__ import annotations

import logging
import uuid
from functools import cache

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Enum,
    Float,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from timeguard.domain.model import (
    Assignment,
    BudgetKind,
    Project,
    TimesheetComment,
    TimesheetEntry,
    User,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

user_table = Table(
    "user",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("display_name", String, nullable=False),
    Column("email", String, nullable=True),
)

project_table = Table(
    "project",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("code", String, nullable=True, unique=True),
    Column(
        "manager_id",
        UUIDColumnType,
        ForeignKey("user.id", ondelete="SET NULL"),
        nullable=True,
    ),
)

assignment_table = Table(
    "assignment",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_id", UUIDColumnType, ForeignKey("user.id", ondelete="CASCADE"), nullable=False),
    Column(
        "project_id",
        UUIDColumnType,
        ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("budget_kind", Enum(BudgetKind, native_enum=False), nullable=True),
    Column("allotted_hours", Float, nullable=True),
    Column("allowed_overrun_hours", Float, nullable=True),
    Column("notify_manager", Boolean, nullable=False, default=False),
    Column("date_start", Date, nullable=True),
    Column("date_end", Date, nullable=True),
)

timesheet_entry_table = Table(
    "timesheet_entry",
    mapper_registry.metadata,
    Column(
        "assignment_id",
        UUIDColumnType,
        ForeignKey("assignment.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("entry_date", Date, primary_key=True),
    Column("hours", Float, nullable=True),
    Index("ix_timesheet_entry_date", "entry_date"),
)

timesheet_comment_table = Table(
    "timesheet_comment",
    mapper_registry.metadata,
    Column("user_id", UUIDColumnType, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
    Column("comment_date", Date, primary_key=True),
    Column("text", Text, nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(User, user_table)

    mapper_registry.map_imperatively(
        Project,
        project_table,
        properties={
            "manager": relationship(User, lazy="joined"),
        },
    )

    mapper_registry.map_imperatively(
        Assignment,
        assignment_table,
        properties={
            "user": relationship(User, lazy="joined"),
            "project": relationship(Project, lazy="joined"),
        },
    )

    mapper_registry.map_imperatively(
        TimesheetEntry,
        timesheet_entry_table,
        properties={
            "assignment": relationship(Assignment, lazy="joined"),
        },
    )

    mapper_registry.map_imperatively(TimesheetComment, timesheet_comment_table)

    configure_mappers()
    return mapper_registry
