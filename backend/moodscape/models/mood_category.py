"""User-defined mood category model."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from moodscape.db.base import Base


class MoodCategory(Base):
    __tablename__ = "mood_categories"
    # Ids are never reused after deletion
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[str] = mapped_column(String(16), nullable=False)  # "#FFAA00"
