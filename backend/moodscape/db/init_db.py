"""Schema bootstrap.

Incompatible schema versions are not migrated: the database is dropped and
recreated. Mood data is local and owned by the user, so losing it on a
version bump is an accepted trade-off.
"""

from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from moodscape.db.base import Base
from moodscape.models import SchemaInfo

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2


def _stored_version(engine: Engine) -> int | None:
    with Session(engine) as db:
        info = db.get(SchemaInfo, 1)
        return info.version if info else None


def init_db(engine: Engine) -> None:
    """Create tables, rebuilding them when the stored schema version differs."""
    existing = set(inspect(engine).get_table_names())
    known = set(Base.metadata.tables)

    if existing & known:
        stored = _stored_version(engine) if SchemaInfo.__tablename__ in existing else None
        if stored != SCHEMA_VERSION:
            logger.warning("Schema version %s found, expected %s; rebuilding database", stored, SCHEMA_VERSION)
            Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)

    with Session(engine) as db:
        db.merge(SchemaInfo(id=1, version=SCHEMA_VERSION))
        db.commit()
