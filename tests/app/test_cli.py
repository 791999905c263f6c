from __future__ import annotations

from datetime import date
from uuid import UUID, uuid4

import pytest

from timeguard.domain.model import BudgetKind
from timeguard.ui import cli


@pytest.fixture
def started(monkeypatch: pytest.MonkeyPatch) -> list[str | None]:
    uris: list[str | None] = []

    def fake_startup(*, database_uri: str | None = None) -> None:
        uris.append(database_uri)

    monkeypatch.setattr(cli, "startup", fake_startup)
    return uris


class _Created:
    def __init__(self) -> None:
        self.id = uuid4()


def test_init_db_only_starts_adapter(started: list[str | None]) -> None:
    cli.main(["--database-uri", "sqlite:///custom.db", "init-db"])

    assert started == ["sqlite:///custom.db"]


def test_user_create_prints_new_id(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    started: list[str | None],
) -> None:
    captured: dict[str, object] = {}
    created = _Created()

    def fake_create_user(**kwargs: object) -> _Created:
        captured.update(kwargs)
        return created

    monkeypatch.setattr(cli, "create_user", fake_create_user)

    cli.main(["user", "create", "--display-name", "Ada", "--email", "ada@example.com"])

    assert captured == {"display_name": "Ada", "email": "ada@example.com"}
    assert capsys.readouterr().out.strip() == str(created.id)
    assert started == [None]


def test_assignment_create_parses_flags(
    monkeypatch: pytest.MonkeyPatch,
    started: list[str | None],
) -> None:
    captured: dict[str, object] = {}
    user_id = uuid4()
    project_id = uuid4()

    def fake_create_assignment(**kwargs: object) -> _Created:
        captured.update(kwargs)
        return _Created()

    monkeypatch.setattr(cli, "create_assignment", fake_create_assignment)

    cli.main(
        [
            "assignment",
            "create",
            "--user-id",
            str(user_id),
            "--project-id",
            str(project_id),
            "--budget",
            "flex",
            "--allotted-hours",
            "40",
            "--overrun-hours",
            "8.5",
            "--notify-manager",
            "--start",
            "2024-05-01",
        ]
    )

    assert captured["user_id"] == user_id
    assert captured["project_id"] == project_id
    assert captured["budget_kind"] is BudgetKind.FLEX
    assert captured["allotted_hours"] == 40.0
    assert captured["allowed_overrun_hours"] == 8.5
    assert captured["notify_manager"] is True
    assert captured["date_start"] == date(2024, 5, 1)
    assert captured["date_end"] is None


def test_project_create_rejects_malformed_manager_id(started: list[str | None]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["project", "create", "--name", "Portal", "--manager-id", "not-a-uuid"])

    assert excinfo.value.code == 2


def test_unexpected_failure_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_startup(*, database_uri: str | None = None) -> None:
        raise RuntimeError("disk full")

    monkeypatch.setattr(cli, "startup", failing_startup)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["init-db"])

    assert excinfo.value.code == 1


def test_project_create_passes_manager(
    monkeypatch: pytest.MonkeyPatch,
    started: list[str | None],
) -> None:
    captured: dict[str, object] = {}
    manager_id = uuid4()

    def fake_create_project(**kwargs: object) -> _Created:
        captured.update(kwargs)
        return _Created()

    monkeypatch.setattr(cli, "create_project", fake_create_project)

    cli.main(["project", "create", "--name", "Portal", "--manager-id", str(manager_id)])

    assert captured == {"name": "Portal", "code": None, "manager_id": UUID(str(manager_id))}
