"""Tests for clock implementations."""

from datetime import datetime, time

from prayer_tracker.services.clock import FixedClock, SystemClock, freeze
from prayer_tracker.services.windows import parse_date_key
from tests.conftest import SteppingClock


def test_fixed_clock_returns_pinned_values() -> None:
    clock = FixedClock.at("2024-03-15", "04:45")

    assert clock.today_key() == "2024-03-15"
    assert clock.now() == time(4, 45)


def test_system_clock_produces_valid_keys() -> None:
    clock = SystemClock(timezone_name="UTC")

    assert parse_date_key(clock.today_key())
    assert isinstance(clock.now(), time)


def test_freeze_reads_the_clock_once() -> None:
    stepping = SteppingClock(
        [datetime(2024, 3, 15, 23, 59, 59), datetime(2024, 3, 16, 0, 0)]
    )

    frozen = freeze(stepping)

    assert stepping.reads == 1
    assert frozen.today_key() == "2024-03-15"
    assert frozen.now() == time(23, 59, 59)
    assert frozen.current() == datetime(2024, 3, 15, 23, 59, 59)


def test_system_clock_current_matches_timezone() -> None:
    current = SystemClock(timezone_name="UTC").current()

    assert current.utcoffset() is not None
    assert current.utcoffset().total_seconds() == 0
