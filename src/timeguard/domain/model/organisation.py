"""Users, projects and the assignments linking them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from timeguard.domain.model.entity import Entity
from timeguard.domain.model.enums import BudgetKind

if TYPE_CHECKING:
    from datetime import date


@dataclass(eq=False, kw_only=True)
class User(Entity):
    display_name: str
    email: str | None = None


@dataclass(eq=False, kw_only=True)
class Project(Entity):
    name: str
    code: str | None = None
    manager: User | None = field(default=None, repr=False)


@dataclass(eq=False, kw_only=True)
class Assignment(Entity):
    """A user's budgeted engagement on a project.

    ``allotted_hours`` caps fixed and flex assignments. Flex assignments may run
    over by ``allowed_overrun_hours`` before they are considered over budget.
    Assignments without a ``budget_kind`` are time-and-material and never over
    budget on hours.
    """

    user: User = field(repr=False)
    project: Project = field(repr=False)
    budget_kind: BudgetKind | None = None
    allotted_hours: float | None = None
    allowed_overrun_hours: float | None = None
    notify_manager: bool = False
    date_start: date | None = None
    date_end: date | None = None

    def __post_init__(self) -> None:
        if self.budget_kind is not None and (
            self.allotted_hours is None or self.allotted_hours <= 0
        ):
            raise ValueError(f"{self.budget_kind} assignment requires positive allotted hours")
        if self.budget_kind is BudgetKind.FLEX and (
            self.allowed_overrun_hours is None or self.allowed_overrun_hours < 0
        ):
            raise ValueError("flex assignment requires non-negative allowed overrun hours")
        if self.notify_manager and self.budget_kind is None:
            raise ValueError("manager notification requires a fixed or flex budget")
        if (
            self.date_start is not None
            and self.date_end is not None
            and self.date_start > self.date_end
        ):
            raise ValueError("assignment start date must not be after its end date")

    @property
    def manager(self) -> User | None:
        return self.project.manager

    @property
    def is_budgeted(self) -> bool:
        return self.budget_kind is not None
