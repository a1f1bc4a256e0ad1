"""SQLAlchemy models."""

from __future__ import annotations

from moodscape.models.mood_category import MoodCategory
from moodscape.models.mood_entry import MoodEntry, NoteToken
from moodscape.models.schema_info import SchemaInfo

__all__ = [
    "MoodCategory",
    "MoodEntry",
    "NoteToken",
    "SchemaInfo",
]
