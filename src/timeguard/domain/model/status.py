"""Budget status snapshots and the severity scale used to compare them."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from timeguard.domain.model.enums import StatusCode

if TYPE_CHECKING:
    from uuid import UUID


DEFAULT_STATUS_RANKS: Final[Mapping[StatusCode, int]] = MappingProxyType(
    {
        StatusCode.BEFORE_START: 0,
        StatusCode.RUNNING: 0,
        StatusCode.AFTER_DEADLINE: 0,
        StatusCode.IN_ALLOTTED: 0,
        StatusCode.IN_OVERRUN: 1,
        StatusCode.OVER_ALLOTTED: 2,
        StatusCode.OVER_OVERRUN: 2,
    }
)
DEFAULT_NOTIFY_THRESHOLD: Final[StatusCode] = StatusCode.IN_OVERRUN
DEFAULT_INVALID_CODES: Final[frozenset[StatusCode]] = frozenset(
    {StatusCode.OVER_ALLOTTED, StatusCode.OVER_OVERRUN}
)


@dataclass(frozen=True, slots=True)
class SeverityScale:
    """Explicit ordering of status codes.

    Codes missing from ``ranks`` rank lowest. ``notify_threshold`` marks the
    lowest code a manager is alerted about; ``invalid_codes`` are the codes that
    put an assignment over budget.
    """

    ranks: Mapping[StatusCode, int] = field(default_factory=lambda: DEFAULT_STATUS_RANKS)
    notify_threshold: StatusCode = DEFAULT_NOTIFY_THRESHOLD
    invalid_codes: frozenset[StatusCode] = DEFAULT_INVALID_CODES

    def rank(self, code: StatusCode) -> int:
        return self.ranks.get(code, 0)

    def at_or_above_threshold(self, code: StatusCode) -> bool:
        return self.rank(code) >= self.rank(self.notify_threshold)

    def is_invalid(self, codes: Iterable[StatusCode]) -> bool:
        return any(code in self.invalid_codes for code in codes)

    def most_severe(self, codes: Iterable[StatusCode]) -> StatusCode | None:
        ordered = sorted(codes, key=lambda code: (self.rank(code), code.value))
        return ordered[-1] if ordered else None


DEFAULT_SEVERITY_SCALE: Final[SeverityScale] = SeverityScale()


@dataclass(frozen=True, slots=True)
class AssignmentAggregate:
    """Totals of an assignment as reported alongside its status."""

    assignment_id: UUID
    booked_hours: float
    allotted_hours: float | None = None
    allowed_overrun_hours: float | None = None

    @property
    def hours_remaining(self) -> float | None:
        if self.allotted_hours is None:
            return None
        return self.allotted_hours - self.booked_hours


@dataclass(frozen=True, slots=True)
class AssignmentStatus:
    """Point-in-time budget status of an assignment."""

    codes: frozenset[StatusCode] = frozenset()
    valid: bool = True
    aggregate: AssignmentAggregate | None = None

    @classmethod
    def from_codes(
        cls,
        codes: Iterable[StatusCode],
        *,
        aggregate: AssignmentAggregate | None = None,
        scale: SeverityScale = DEFAULT_SEVERITY_SCALE,
    ) -> AssignmentStatus:
        frozen = frozenset(codes)
        return cls(codes=frozen, valid=not scale.is_invalid(frozen), aggregate=aggregate)

    def is_invalid(self) -> bool:
        return not self.valid
