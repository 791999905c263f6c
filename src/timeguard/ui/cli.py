from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from timeguard.adapters.sqlalchemy.unit_of_work import startup
from timeguard.app import create_assignment, create_project, create_user
from timeguard.config import configure_logging
from timeguard.domain.model import BudgetKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Administer timeguard data")
    parser.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy database URI (defaults to DATABASE_URI or the data directory)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create or upgrade the database schema")

    user = subparsers.add_parser("user", help="User management commands")
    user_sub = user.add_subparsers(dest="user_command", required=True)
    user_create = user_sub.add_parser("create", help="Create a user")
    user_create.add_argument("--display-name", type=str, required=True)
    user_create.add_argument("--email", type=str, help="Optional email address")

    project = subparsers.add_parser("project", help="Project management commands")
    project_sub = project.add_subparsers(dest="project_command", required=True)
    project_create = project_sub.add_parser("create", help="Create a project")
    project_create.add_argument("--name", type=str, required=True)
    project_create.add_argument("--code", type=str, help="Optional unique project code")
    project_create.add_argument("--manager-id", type=str, help="User id of the project manager")

    assignment = subparsers.add_parser("assignment", help="Assignment management commands")
    assignment_sub = assignment.add_subparsers(dest="assignment_command", required=True)
    assignment_create = assignment_sub.add_parser("create", help="Assign a user to a project")
    assignment_create.add_argument("--user-id", type=str, required=True)
    assignment_create.add_argument("--project-id", type=str, required=True)
    assignment_create.add_argument(
        "--budget",
        choices=[kind.value for kind in BudgetKind],
        help="Budget kind; omit for time-and-material assignments",
    )
    assignment_create.add_argument("--allotted-hours", type=float)
    assignment_create.add_argument("--overrun-hours", type=float)
    assignment_create.add_argument(
        "--notify-manager",
        action="store_true",
        help="Alert the project manager when budget thresholds are reached",
    )
    assignment_create.add_argument("--start", type=str, help="ISO-8601 start date")
    assignment_create.add_argument("--end", type=str, help="ISO-8601 end date")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _parse_iso_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid ISO date: {value}") from exc


def _run(args: argparse.Namespace) -> None:
    if args.command == "init-db":
        log.info("Database schema is up to date")
    elif args.command == "user" and args.user_command == "create":
        user = create_user(display_name=args.display_name, email=args.email)
        print(user.id)  # noqa: T201
    elif args.command == "project" and args.project_command == "create":
        project = create_project(
            name=args.name,
            code=args.code,
            manager_id=_parse_uuid(args.manager_id) if args.manager_id else None,
        )
        print(project.id)  # noqa: T201
    elif args.command == "assignment" and args.assignment_command == "create":
        assignment = create_assignment(
            user_id=_parse_uuid(args.user_id),
            project_id=_parse_uuid(args.project_id),
            budget_kind=BudgetKind(args.budget) if args.budget else None,
            allotted_hours=args.allotted_hours,
            allowed_overrun_hours=args.overrun_hours,
            notify_manager=args.notify_manager,
            date_start=_parse_iso_date(args.start),
            date_end=_parse_iso_date(args.end),
        )
        print(assignment.id)  # noqa: T201
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        startup(database_uri=parsed_args.database_uri)
        _run(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
