"""Daily reminder time and the scheduler interface it is handed to."""

from __future__ import annotations

import logging
from datetime import time
from typing import Protocol

from dots.codec import decode_time, encode_time
from dots.errors import DecodeError, EncodeError
from dots.models import DEFAULT_REMINDER_TIME
from dots.store import KeyValueStore

logger = logging.getLogger(__name__)

REMINDER_KEY = "notificationTime"


class NotificationScheduler(Protocol):
    def reschedule(self, at: time) -> None:
        """Replace any pending daily reminder with one firing at *at*."""

    def clear(self) -> None:
        """Drop delivered and pending reminders."""


class NullScheduler:
    """Scheduler that only records what it was asked to do."""

    def __init__(self) -> None:
        self.scheduled: time | None = None
        self.cleared = 0

    def reschedule(self, at: time) -> None:
        logger.info("Daily reminder set for %s", at.strftime("%H:%M"))
        self.scheduled = at

    def clear(self) -> None:
        self.cleared += 1


def get_reminder_time(store: KeyValueStore, default: time = DEFAULT_REMINDER_TIME) -> time:
    blob = store.get(REMINDER_KEY)
    if blob is None:
        return default
    try:
        return decode_time(blob)
    except DecodeError:
        logger.warning("Stored reminder time is unreadable, using %s", default, exc_info=True)
        return default


def set_reminder_time(store: KeyValueStore, at: time) -> bool:
    try:
        store.set(REMINDER_KEY, encode_time(at))
    except (EncodeError, OSError):
        logger.warning("Failed to persist reminder time", exc_info=True)
        return False
    return True
