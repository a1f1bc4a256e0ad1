"""Insights, reminder and mood option endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from moodscape.core.deps import get_store
from moodscape.core.mood_options import DEFAULT_MOOD_OPTIONS
from moodscape.schemas.insights import MoodInsights, ReminderResponse
from moodscape.schemas.mood import MoodOptionResponse
from moodscape.services.insight_engine import generate_insights
from moodscape.services.mood_store import MoodStore
from moodscape.services.reminder_service import check_reminder

router = APIRouter(tags=["insights"])


@router.get("/insights", response_model=MoodInsights)
def get_insights(store: MoodStore = Depends(get_store)):
    """Trend, weekly pattern and keyword insights over all logged moods."""
    return generate_insights(store.list_records_with_category())


@router.get("/reminder", response_model=ReminderResponse)
def get_reminder(store: MoodStore = Depends(get_store)):
    """Whether today's mood is still missing. Polled by the notification scheduler."""
    reminder = check_reminder(store)
    if reminder is None:
        return ReminderResponse(remind=False)
    return ReminderResponse(remind=True, title=reminder.title, message=reminder.message)


@router.get("/moods/options", response_model=list[MoodOptionResponse])
def list_mood_options():
    return list(DEFAULT_MOOD_OPTIONS)
