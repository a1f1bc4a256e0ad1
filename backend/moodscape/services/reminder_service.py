"""Daily reminder check used by the external notification scheduler."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from moodscape.core.config import settings
from moodscape.core.dates import start_of_day
from moodscape.services.mood_store import MoodStore

logger = logging.getLogger(__name__)


@dataclass
class Reminder:
    """Notification the scheduler should show."""

    title: str
    message: str


def check_reminder(store: MoodStore, now: datetime | None = None) -> Reminder | None:
    """Return a reminder when today has no mood record, otherwise None.

    Storage failures propagate so the scheduler can retry instead of nagging.
    """
    today = start_of_day(now)
    if store.has_record_for_day(today):
        logger.debug("Mood already logged for day %s; no reminder", today)
        return None

    logger.info("No mood logged for day %s; reminder due", today)
    return Reminder(title=settings.reminder_title, message=settings.reminder_message)
