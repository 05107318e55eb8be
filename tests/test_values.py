from decimal import Decimal

import pytest

from popstats.common.values import as_flag, as_number, as_text, round_half_away
from tabkit.logger.logger import LOG_LEVEL, get_log_level_from_env


@pytest.mark.parametrize(
    ("value", "expected"),
    [(2.25, 2.3), (-2.25, -2.3), (2.24, 2.2), (Decimal("0.05"), 0.1), (7, 7.0)],
)
def test_round_half_away(value, expected) -> None:
    assert round_half_away(value, 1) == expected


def test_as_number() -> None:
    assert as_number("12.5") == 12.5
    assert as_number(3) == 3.0
    assert as_number(False) is None
    assert as_number("inf") is None
    assert as_number([1]) is None


def test_as_flag() -> None:
    assert as_flag(" Yes ") is True
    assert as_flag("FALSE") is False
    assert as_flag("Yes (during pregnancy)") is None
    assert as_flag(1) is True
    assert as_flag(0) is False
    assert as_flag(2) is None
    assert as_flag(1.0) is None


def test_as_text() -> None:
    assert as_text("  Good ") == "Good"
    assert as_text("   ") is None
    assert as_text(5) is None


def test_log_level_from_env(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert get_log_level_from_env() == LOG_LEVEL.DEBUG
    monkeypatch.setenv("LOG_LEVEL", "40")
    assert get_log_level_from_env() == LOG_LEVEL.ERROR
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert get_log_level_from_env(LOG_LEVEL.WARN) == LOG_LEVEL.WARN
