"""FastAPI dependencies."""

from __future__ import annotations

import threading

from moodscape.db.init_db import init_db
from moodscape.db.session import SessionLocal, engine
from moodscape.services.mood_store import MoodStore

_store: MoodStore | None = None
_store_lock = threading.Lock()


def get_store() -> MoodStore:
    """Return the process-wide mood store, creating the schema on first use."""
    global _store
    if _store is None:
        # Sync dependencies run in a threadpool; only one thread may build the store
        with _store_lock:
            if _store is None:
                init_db(engine)
                _store = MoodStore(SessionLocal)
    return _store
