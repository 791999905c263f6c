from __future__ import annotations

import pytest

from timeguard.config import ConfigurationError, get_budget_config
from timeguard.domain.model import DEFAULT_INVALID_CODES, DEFAULT_STATUS_RANKS, StatusCode


def test_budget_config_defaults() -> None:
    config = get_budget_config()

    assert config.notify_threshold is StatusCode.IN_OVERRUN
    assert config.invalid_codes == DEFAULT_INVALID_CODES


def test_budget_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEGUARD_NOTIFY_THRESHOLD", " OVER_ALLOTTED ")
    monkeypatch.setenv("TIMEGUARD_INVALID_STATUSES", "over_overrun, ,")

    config = get_budget_config()
    scale = config.severity_scale()

    assert config.notify_threshold is StatusCode.OVER_ALLOTTED
    assert config.invalid_codes == {StatusCode.OVER_OVERRUN}
    assert scale.is_invalid({StatusCode.OVER_ALLOTTED}) is False
    assert scale.at_or_above_threshold(StatusCode.IN_OVERRUN) is False


def test_blank_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEGUARD_NOTIFY_THRESHOLD", "  ")
    monkeypatch.setenv("TIMEGUARD_INVALID_STATUSES", "")

    config = get_budget_config()

    assert config.notify_threshold is StatusCode.IN_OVERRUN
    assert config.invalid_codes == DEFAULT_INVALID_CODES


def test_unknown_status_code_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEGUARD_INVALID_STATUSES", "over_allotted,way_over")

    with pytest.raises(ConfigurationError) as exc:
        get_budget_config()

    assert "way_over" in str(exc.value)


def test_status_ranks_override_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEGUARD_STATUS_RANKS", "after_deadline=3, in_overrun=2,")

    scale = get_budget_config().severity_scale()

    assert scale.rank(StatusCode.AFTER_DEADLINE) == 3
    assert scale.rank(StatusCode.IN_OVERRUN) == 2
    assert scale.rank(StatusCode.OVER_ALLOTTED) == 2
    assert scale.at_or_above_threshold(StatusCode.AFTER_DEADLINE)
    assert scale.most_severe([StatusCode.OVER_OVERRUN, StatusCode.AFTER_DEADLINE]) is (
        StatusCode.AFTER_DEADLINE
    )


def test_default_ranks_without_override() -> None:
    assert get_budget_config().ranks == DEFAULT_STATUS_RANKS


@pytest.mark.parametrize("raw", ["in_overrun", "in_overrun=high", "sideways=1"])
def test_malformed_status_ranks_are_rejected(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
) -> None:
    monkeypatch.setenv("TIMEGUARD_STATUS_RANKS", raw)

    with pytest.raises(ConfigurationError):
        get_budget_config()
