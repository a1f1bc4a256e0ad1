"""Logbook export data.

Supplies the ordered, human-readable rows a document exporter renders. Layout
concerns such as pagination belong to the exporter.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from moodscape.core.dates import to_local_datetime
from moodscape.core.mood_options import mood_name_for
from moodscape.schemas.insights import LogbookEntry
from moodscape.schemas.mood import MoodRecordView

LOGBOOK_TITLE = "Moodscape LogBook"


def filter_recent(views: Iterable[MoodRecordView], days: int | None, now: datetime | None = None) -> list[MoodRecordView]:
    """Keep records dated within the last ``days`` days of ``now``."""
    if days is None:
        return list(views)
    if now is None:
        now = datetime.now()
    cutoff = int((now - timedelta(days=days)).timestamp() * 1000)
    return [v for v in views if v.day_key >= cutoff]


def format_date_label(day_key: int) -> str:
    """E.g. ``Mon, Jan 1, 2024``."""
    moment = to_local_datetime(day_key)
    return f"{moment:%a, %b} {moment.day}, {moment:%Y}"


def build_logbook(views: Iterable[MoodRecordView]) -> list[LogbookEntry]:
    return [
        LogbookEntry(
            day_key=view.day_key,
            date_label=format_date_label(view.day_key),
            symbol=view.symbol,
            mood_name=mood_name_for(view.symbol),
            category_name=view.category_name,
            note=view.note,
        )
        for view in views
    ]


def render_logbook_text(entries: Iterable[LogbookEntry]) -> str:
    lines = [LOGBOOK_TITLE, ""]
    for entry in entries:
        lines.append(entry.date_label)
        lines.append(f"• Mood: {entry.symbol} ({entry.mood_name})")
        if entry.category_name:
            lines.append(f"• Category: {entry.category_name}")
        if entry.note.strip():
            lines.append(f"• Note: {entry.note}")
        lines.append("")
    return "\n".join(lines)
