"""Day keys and clocks.

A DayKey is the canonical ISO calendar date (YYYY-MM-DD) in the user's
timezone. It is always computed from the clock at the moment of use.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Protocol

DayKey = str

ANSWERS_KEY_PREFIX = "answers_"


def day_key(d: date) -> DayKey:
    if isinstance(d, datetime):
        d = d.date()
    return d.isoformat()


def answers_key(day: DayKey) -> str:
    """Store key for one day's answers, e.g. answers_2026-02-11."""
    return f"{ANSWERS_KEY_PREFIX}{date.fromisoformat(day).isoformat()}"


def days_back(as_of: DayKey, count: int) -> list[DayKey]:
    """The *count* days ending at and including *as_of*, most recent first."""
    start = date.fromisoformat(as_of)
    return [day_key(start - timedelta(days=i)) for i in range(count)]


class Clock(Protocol):
    def today_key(self) -> DayKey: ...


class SystemClock:
    """Wall clock in a fixed timezone (None means the system local zone)."""

    def __init__(self, tz: tzinfo | None = None) -> None:
        self.tz = tz

    def now(self) -> datetime:
        if self.tz is None:
            return datetime.now().astimezone()
        return datetime.now(self.tz)

    def today_key(self) -> DayKey:
        return day_key(self.now().date())


class FixedClock:
    """A clock pinned to one day until advanced."""

    def __init__(self, day: DayKey | date) -> None:
        self.day = date.fromisoformat(day) if isinstance(day, str) else day

    def today_key(self) -> DayKey:
        return day_key(self.day)

    def advance(self, days: int = 1) -> DayKey:
        self.day = self.day + timedelta(days=days)
        return self.today_key()
