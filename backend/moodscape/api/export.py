"""Logbook export endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from moodscape.core.deps import get_store
from moodscape.schemas.insights import LogbookEntry
from moodscape.services.export_service import build_logbook, filter_recent, render_logbook_text
from moodscape.services.mood_store import MoodStore

router = APIRouter(prefix="/export", tags=["export"])


def _logbook(store: MoodStore, days: int | None) -> list[LogbookEntry]:
    return build_logbook(filter_recent(store.list_records_with_category(), days))


@router.get("/logbook", response_model=list[LogbookEntry])
def export_logbook(
    days: int | None = Query(default=None, ge=1, description="Only the last N days; omit for all time"),
    store: MoodStore = Depends(get_store),
):
    return _logbook(store, days)


@router.get("/logbook.txt", response_class=PlainTextResponse)
def export_logbook_text(
    days: int | None = Query(default=None, ge=1),
    store: MoodStore = Depends(get_store),
):
    return render_logbook_text(_logbook(store, days))
