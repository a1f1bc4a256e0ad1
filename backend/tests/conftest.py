"""Pytest fixtures."""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from moodscape.core.dates import day_key_for
from moodscape.core.deps import get_store
from moodscape.db.init_db import init_db
from moodscape.db.session import build_engine, build_session_factory
from moodscape.main import app
from moodscape.schemas.mood import MoodRecord
from moodscape.services.mood_store import MoodStore

# Monday
BASE_DAY = date(2024, 1, 1)


def day(offset: int) -> int:
    """Day key ``offset`` days after BASE_DAY."""
    return day_key_for(BASE_DAY + timedelta(days=offset))


def make_record(offset: int, score: int = 3, note: str = "", symbol: str = "😐", category_id: int | None = None) -> MoodRecord:
    return MoodRecord(day_key=day(offset), symbol=symbol, note=note, category_id=category_id, score=score)


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite database per test."""
    engine = build_engine(f"sqlite:///{tmp_path / 'moodscape-test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return MoodStore(build_session_factory(engine))


@pytest.fixture
def broken_store(tmp_path):
    """Store whose database file cannot be opened."""
    engine = build_engine(f"sqlite:///{tmp_path / 'missing-dir' / 'moodscape.db'}")
    yield MoodStore(build_session_factory(engine))
    engine.dispose()


@pytest.fixture
def client(store):
    """Test client with overridden store."""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
