"""Mood store: durable storage of mood records and categories.

Writes are serialized through a single store lock and each commits in one
transaction, so readers never see a half-replaced record. Reads open their own
session and only take the lock to redeliver a feed that missed a snapshot.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import partial
from typing import Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from moodscape.core.errors import NotFound, StorageUnavailable
from moodscape.core.text import tokenize
from moodscape.models import MoodCategory, MoodEntry, NoteToken
from moodscape.schemas.category import Category, CategoryIn
from moodscape.schemas.mood import MoodRecord, MoodRecordView

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription(Generic[T]):
    """Live query handle. Receives a fresh snapshot after every committed write."""

    def __init__(self, unsubscribe: Callable[[Subscription[T]], None], callback: Callable[[T], None], name: str) -> None:
        self._unsubscribe = unsubscribe
        self._callback = callback
        self.name = name
        self.active = True

    def deliver(self, snapshot: T) -> None:
        if not self.active:
            return
        try:
            self._callback(snapshot)
        except Exception:
            logger.exception("Subscriber for %s failed; cancelling", self.name)
            self.cancel()

    def cancel(self) -> None:
        """Stop delivery and unregister. Safe to call more than once."""
        self.active = False
        self._unsubscribe(self)


class MoodStore:
    """Keyed storage of mood records plus categories and a note token index.

    When a post-write snapshot cannot be read, the affected feed is marked
    stale and delivered again on the next successful list call or subscribe.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._write_lock = threading.RLock()
        self._record_subscribers: list[Subscription[list[MoodRecordView]]] = []
        self._category_subscribers: list[Subscription[list[Category]]] = []
        self._records_stale = False
        self._categories_stale = False

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Mood store operation failed: %s", exc)
            raise StorageUnavailable(f"Mood storage is unavailable: {exc}") from exc
        finally:
            db.close()

    # Records

    def upsert_record(self, record: MoodRecord) -> None:
        """Insert ``record``, replacing any record for the same day."""
        with self._write_lock:
            with self._session() as db:
                db.merge(
                    MoodEntry(
                        day_key=record.day_key,
                        symbol=record.symbol,
                        note=record.note,
                        category_id=record.category_id,
                        score=record.score,
                    )
                )
                db.execute(delete(NoteToken).where(NoteToken.day_key == record.day_key))
                db.add_all(NoteToken(day_key=record.day_key, token=token) for token in sorted(set(tokenize(record.note))))
                db.commit()
            logger.debug("Upserted mood record for day %s", record.day_key)
            self._publish_records()

    def delete_record(self, day_key: int) -> None:
        """Delete the record for ``day_key``. Deleting an absent day is a no-op."""
        with self._write_lock:
            with self._session() as db:
                db.execute(delete(NoteToken).where(NoteToken.day_key == day_key))
                db.execute(delete(MoodEntry).where(MoodEntry.day_key == day_key))
                db.commit()
            self._publish_records()

    def get_record(self, day_key: int) -> MoodRecordView:
        with self._session() as db:
            row = db.execute(self._views_query().where(MoodEntry.day_key == day_key)).first()
        if row is None:
            raise NotFound(f"No mood record for day {day_key}")
        return self._to_view(*row)

    def list_records_with_category(self) -> list[MoodRecordView]:
        """All records joined with their category, most recent day first."""
        views = self._read_views()
        if self._records_stale:
            with self._write_lock:
                if self._records_stale:
                    self._publish_records()
        return views

    def has_record_for_day(self, day_start: int) -> bool:
        with self._session() as db:
            return db.get(MoodEntry, day_start) is not None

    def search_notes(self, query: str) -> list[MoodRecord]:
        """Records whose note contains every token of ``query`` (case-insensitive)."""
        terms = sorted(set(tokenize(query)))
        if not terms:
            return []

        matching_days = (
            select(NoteToken.day_key)
            .where(NoteToken.token.in_(terms))
            .group_by(NoteToken.day_key)
            .having(func.count(NoteToken.token) == len(terms))
        )
        stmt = select(MoodEntry).where(MoodEntry.day_key.in_(matching_days)).order_by(MoodEntry.day_key.desc())
        with self._session() as db:
            entries = db.execute(stmt).scalars().all()
            return [MoodRecord.model_validate(entry) for entry in entries]

    # Categories

    def insert_category(self, category: CategoryIn | Category) -> Category:
        """Insert a category; an existing id is replaced in place."""
        with self._write_lock:
            with self._session() as db:
                if category.id is None:
                    row = MoodCategory(name=category.name, color=category.color)
                    db.add(row)
                else:
                    row = db.merge(MoodCategory(id=category.id, name=category.name, color=category.color))
                db.commit()
                saved = Category.model_validate(row)
            logger.debug("Saved category id=%s name=%r", saved.id, saved.name)
            self._publish_categories()
            self._publish_records()
        return saved

    def list_categories(self) -> list[Category]:
        categories = self._read_categories()
        if self._categories_stale:
            with self._write_lock:
                if self._categories_stale:
                    self._publish_categories()
        return categories

    def delete_category(self, category: CategoryIn | Category) -> None:
        """Delete by id. Records referencing it keep their dangling category_id."""
        if category.id is not None:
            self.delete_category_by_id(category.id)

    def delete_category_by_id(self, category_id: int) -> None:
        with self._write_lock:
            with self._session() as db:
                db.execute(delete(MoodCategory).where(MoodCategory.id == category_id))
                db.commit()
            self._publish_categories()
            self._publish_records()

    # Subscriptions

    def subscribe_records(self, callback: Callable[[list[MoodRecordView]], None]) -> Subscription[list[MoodRecordView]]:
        """Deliver the current record list now and again after every write."""
        with self._write_lock:
            snapshot = self._read_views()
            subscription = Subscription(partial(self._unsubscribe, self._record_subscribers), callback, name="records")
            self._record_subscribers.append(subscription)
            if self._records_stale:
                self._deliver_all(self._record_subscribers, snapshot)
                self._records_stale = False
            else:
                subscription.deliver(snapshot)
        return subscription

    def subscribe_categories(self, callback: Callable[[list[Category]], None]) -> Subscription[list[Category]]:
        with self._write_lock:
            snapshot = self._read_categories()
            subscription = Subscription(partial(self._unsubscribe, self._category_subscribers), callback, name="categories")
            self._category_subscribers.append(subscription)
            if self._categories_stale:
                self._deliver_all(self._category_subscribers, snapshot)
                self._categories_stale = False
            else:
                subscription.deliver(snapshot)
        return subscription

    def _unsubscribe(self, registry: list[Subscription], subscription: Subscription) -> None:
        with self._write_lock:
            if subscription in registry:
                registry.remove(subscription)
                logger.debug("Subscription to %s cancelled (remaining=%s)", subscription.name, len(registry))

    def _publish_records(self) -> None:
        if not self._record_subscribers:
            self._records_stale = False
            return
        try:
            snapshot = self._read_views()
        except StorageUnavailable:
            self._records_stale = True
            logger.exception("Could not refresh record subscribers; retrying on next read")
            return
        self._records_stale = False
        self._deliver_all(self._record_subscribers, snapshot)

    def _publish_categories(self) -> None:
        if not self._category_subscribers:
            self._categories_stale = False
            return
        try:
            snapshot = self._read_categories()
        except StorageUnavailable:
            self._categories_stale = True
            logger.exception("Could not refresh category subscribers; retrying on next read")
            return
        self._categories_stale = False
        self._deliver_all(self._category_subscribers, snapshot)

    @staticmethod
    def _deliver_all(registry: list[Subscription[T]], snapshot: T) -> None:
        for subscription in list(registry):
            subscription.deliver(snapshot)

    # Helpers

    def _read_views(self) -> list[MoodRecordView]:
        with self._session() as db:
            rows = db.execute(self._views_query().order_by(MoodEntry.day_key.desc())).all()
        return [self._to_view(*row) for row in rows]

    def _read_categories(self) -> list[Category]:
        with self._session() as db:
            rows = db.execute(select(MoodCategory).order_by(MoodCategory.name.asc(), MoodCategory.id.asc())).scalars().all()
            return [Category.model_validate(row) for row in rows]

    @staticmethod
    def _views_query():
        return select(MoodEntry, MoodCategory.name, MoodCategory.color).outerjoin(
            MoodCategory, MoodEntry.category_id == MoodCategory.id
        )

    @staticmethod
    def _to_view(entry: MoodEntry, category_name: str | None, category_color: str | None) -> MoodRecordView:
        return MoodRecordView(
            day_key=entry.day_key,
            symbol=entry.symbol,
            note=entry.note,
            category_id=entry.category_id,
            score=entry.score,
            category_name=category_name,
            category_color=category_color,
        )
