"""Mood entry and note token models."""

from __future__ import annotations

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from moodscape.db.base import Base


class MoodEntry(Base):
    """One mood entry per calendar day, keyed by local midnight in epoch ms."""

    __tablename__ = "mood_records"

    day_key: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    symbol: Mapped[str] = mapped_column(String(32), nullable=False)
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Weak reference: categories can be deleted without touching entries
    category_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)


class NoteToken(Base):
    """Full-text index over entry notes: one row per distinct token per entry."""

    __tablename__ = "mood_note_tokens"

    day_key: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    token: Mapped[str] = mapped_column(String(255), primary_key=True, index=True)
