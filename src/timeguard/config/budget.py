"""Budget severity configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from timeguard.domain.model import (
    DEFAULT_INVALID_CODES,
    DEFAULT_NOTIFY_THRESHOLD,
    DEFAULT_STATUS_RANKS,
    SeverityScale,
    StatusCode,
)

from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


@dataclass(frozen=True, slots=True)
class BudgetConfig:
    notify_threshold: StatusCode = DEFAULT_NOTIFY_THRESHOLD
    invalid_codes: frozenset[StatusCode] = DEFAULT_INVALID_CODES
    ranks: Mapping[StatusCode, int] = field(default_factory=lambda: DEFAULT_STATUS_RANKS)

    def severity_scale(self) -> SeverityScale:
        return SeverityScale(
            ranks=self.ranks,
            notify_threshold=self.notify_threshold,
            invalid_codes=self.invalid_codes,
        )


def _parse_status_code(value: str) -> StatusCode:
    normalized = value.strip().lower()
    try:
        return StatusCode(normalized)
    except ValueError as exc:
        known = ", ".join(code.value for code in StatusCode)
        raise ConfigurationError(
            f"Unknown status code '{value}' (expected one of: {known})"
        ) from exc


def _parse_status_codes(values: Iterable[str]) -> frozenset[StatusCode]:
    return frozenset(_parse_status_code(value) for value in values if value.strip())


def _parse_status_ranks(raw: str) -> Mapping[StatusCode, int]:
    """Parse ``code=rank`` pairs; codes not listed keep their default rank."""

    ranks = dict(DEFAULT_STATUS_RANKS)
    for pair in raw.split(","):
        if not pair.strip():
            continue
        code, separator, rank = pair.partition("=")
        if not separator:
            raise ConfigurationError(f"Expected 'code=rank' in status ranks, got '{pair}'")
        try:
            ranks[_parse_status_code(code)] = int(rank.strip())
        except ValueError as exc:
            raise ConfigurationError(
                f"Status rank for '{code.strip()}' must be an integer"
            ) from exc
    return MappingProxyType(ranks)


def get_budget_config() -> BudgetConfig:
    threshold_raw = os.getenv("TIMEGUARD_NOTIFY_THRESHOLD")
    invalid_raw = os.getenv("TIMEGUARD_INVALID_STATUSES")
    ranks_raw = os.getenv("TIMEGUARD_STATUS_RANKS")

    threshold = (
        _parse_status_code(threshold_raw)
        if threshold_raw and threshold_raw.strip()
        else DEFAULT_NOTIFY_THRESHOLD
    )
    invalid_codes = DEFAULT_INVALID_CODES
    if invalid_raw and invalid_raw.strip():
        invalid_codes = _parse_status_codes(invalid_raw.split(","))
    ranks = DEFAULT_STATUS_RANKS
    if ranks_raw and ranks_raw.strip():
        ranks = _parse_status_ranks(ranks_raw)
    return BudgetConfig(notify_threshold=threshold, invalid_codes=invalid_codes, ranks=ranks)
