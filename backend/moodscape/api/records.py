"""Mood records API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from moodscape.core.deps import get_store
from moodscape.schemas.mood import MoodRecord, MoodRecordCreate, MoodRecordView, RecordExistsResponse
from moodscape.services.mood_store import MoodStore

router = APIRouter(prefix="/records", tags=["records"])


@router.get("", response_model=list[MoodRecordView])
def list_records(store: MoodStore = Depends(get_store)):
    """All records with their category, most recent day first."""
    return store.list_records_with_category()


@router.put("", response_model=MoodRecordView)
def upsert_record(data: MoodRecordCreate, store: MoodStore = Depends(get_store)):
    """Log the mood for a day, replacing any earlier entry for that day."""
    store.upsert_record(data.to_record())
    return store.get_record(data.day_key)


@router.get("/exists", response_model=RecordExistsResponse)
def record_exists(
    day_start: int = Query(description="Local midnight of the day, epoch milliseconds"),
    store: MoodStore = Depends(get_store),
):
    return RecordExistsResponse(day_start=day_start, exists=store.has_record_for_day(day_start))


@router.get("/search", response_model=list[MoodRecord])
def search_records(
    q: str = Query(min_length=1, description="Words that must all appear in the note"),
    store: MoodStore = Depends(get_store),
):
    return store.search_notes(q)


@router.get("/{day_key}", response_model=MoodRecordView)
def get_record(day_key: int, store: MoodStore = Depends(get_store)):
    """Single day's record; NotFound becomes a 404 in the app error handler."""
    return store.get_record(day_key)


@router.delete("/{day_key}", status_code=status.HTTP_204_NO_CONTENT)
def delete_record(day_key: int, store: MoodStore = Depends(get_store)):
    """Delete a day's record. Deleting a missing day succeeds."""
    store.delete_record(day_key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
