"""Tests for dots/clock.py — day keys and clocks."""

import time
from datetime import date, datetime, timezone, timedelta

import pytest

from dots.clock import FixedClock, SystemClock, answers_key, day_key, days_back
from dots.journal import Journal


def test_day_key_is_iso_date():
    assert day_key(date(2026, 2, 1)) == "2026-02-01"


def test_day_key_same_for_any_time_of_day():
    morning = datetime(2026, 2, 11, 0, 0, 1)
    night = datetime(2026, 2, 11, 23, 59, 59)
    assert day_key(morning) == day_key(night)
    assert answers_key(day_key(morning)) == answers_key(day_key(night)) == "answers_2026-02-11"


def test_answers_key_rejects_non_dates():
    with pytest.raises(ValueError):
        answers_key("Feb 11")


def test_days_back_most_recent_first():
    assert days_back("2026-03-02", 3) == ["2026-03-02", "2026-03-01", "2026-02-28"]


def test_fixed_clock_advance():
    clock = FixedClock("2026-02-28")
    assert clock.today_key() == "2026-02-28"
    assert clock.advance() == "2026-03-01"
    assert clock.today_key() == "2026-03-01"


def test_system_clock_uses_timezone():
    tz = timezone(timedelta(hours=14))
    clock = SystemClock(tz)
    assert clock.today_key() == datetime.now(tz).date().isoformat()


def test_system_clock_local_default():
    assert SystemClock().today_key() == datetime.now().astimezone().date().isoformat()


class _FrozenDatetime(datetime):
    instant = datetime(2026, 7, 1, 16, 0, tzinfo=timezone.utc)

    @classmethod
    def now(cls, tz=None):
        if tz is None:
            return cls.instant.astimezone().replace(tzinfo=None)
        return cls.instant.astimezone(tz)


@pytest.fixture
def new_york_local(monkeypatch):
    """Run with America/New_York as the process-local zone."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset not available")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    monkeypatch.setattr("dots.clock.datetime", _FrozenDatetime)
    yield
    monkeypatch.undo()
    time.tzset()


def test_local_clock_follows_dst_end(new_york_local, workspace):
    (workspace / "config.yaml").write_text("reminder_time: '21:30'\n", encoding="utf-8")
    _FrozenDatetime.instant = datetime(2026, 7, 1, 16, 0, tzinfo=timezone.utc)
    journal = Journal.open(workspace)
    assert journal.day == "2026-07-01"

    # 23:30 EST on Nov 2, after the clocks went back on Nov 1
    _FrozenDatetime.instant = datetime(2026, 11, 3, 4, 30, tzinfo=timezone.utc)
    assert journal.clock.today_key() == "2026-11-02"
    assert journal.check_for_day_change() is True
    assert journal.day == "2026-11-02"
