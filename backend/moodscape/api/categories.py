"""Mood categories API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from moodscape.core.deps import get_store
from moodscape.schemas.category import Category, CategoryIn
from moodscape.services.mood_store import MoodStore

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[Category])
def list_categories(store: MoodStore = Depends(get_store)):
    """Categories sorted by name."""
    return store.list_categories()


@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(data: CategoryIn, store: MoodStore = Depends(get_store)):
    """Create a category, or replace it when an existing id is given."""
    return store.insert_category(data)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, store: MoodStore = Depends(get_store)):
    """Delete a category. Entries that used it keep their mood but lose the label."""
    store.delete_category_by_id(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
