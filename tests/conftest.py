from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from timeguard.adapters.sqlalchemy import start_mappers
from timeguard.adapters.sqlalchemy.migrations import upgrade_head
from timeguard.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyAdminUnitOfWork,
    SqlAlchemyTimesheetUnitOfWork,
    shutdown,
    startup,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture(autouse=True)
def clear_budget_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TIMEGUARD_NOTIFY_THRESHOLD", raising=False)
    monkeypatch.delenv("TIMEGUARD_INVALID_STATUSES", raising=False)
    monkeypatch.delenv("TIMEGUARD_STATUS_RANKS", raising=False)


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True, expire_on_commit=False)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyTimesheetUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyTimesheetUnitOfWork:
        return SqlAlchemyTimesheetUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def sqlite_admin_unit_of_work(
    sqlite_unit_of_work: Callable[[], SqlAlchemyTimesheetUnitOfWork],
) -> Callable[[], SqlAlchemyAdminUnitOfWork]:
    def factory() -> SqlAlchemyAdminUnitOfWork:
        return SqlAlchemyAdminUnitOfWork()

    return factory
