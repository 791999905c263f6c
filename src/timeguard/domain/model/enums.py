"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class BudgetKind(StrEnum):
    """How the hours of an assignment are capped."""

    FIXED = "fixed"
    FLEX = "flex"


class StatusCode(StrEnum):
    """Codes an assignment status can carry.

    Budget codes describe booked hours against the allotment; date codes describe
    where today falls relative to the assignment's validity window.
    """

    IN_ALLOTTED = "in_allotted"
    OVER_ALLOTTED = "over_allotted"
    IN_OVERRUN = "in_overrun"
    OVER_OVERRUN = "over_overrun"

    BEFORE_START = "before_start"
    RUNNING = "running"
    AFTER_DEADLINE = "after_deadline"
