"""Insight, reminder and logbook schemas."""

from pydantic import BaseModel


class MoodInsights(BaseModel):
    trend: str
    day_of_week: str
    keyword: str

    model_config = {"frozen": True}


class ReminderResponse(BaseModel):
    remind: bool
    title: str | None = None
    message: str | None = None


class LogbookEntry(BaseModel):
    day_key: int
    date_label: str
    symbol: str
    mood_name: str
    category_name: str | None
    note: str
