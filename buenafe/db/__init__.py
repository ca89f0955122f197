"""
Persistence package: backend selection happens once, in `create_store`.
"""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import create_async_engine

from buenafe.config import Settings
from buenafe.db.base import ExecuteResult, RecordStore, Row
from buenafe.db.normalize import normalize
from buenafe.db.postgres import PostgresStore, to_numeric_placeholders
from buenafe.db.sqlite import SQLiteStore

logger = logging.getLogger(__name__)


def create_store(settings: Settings) -> RecordStore:
    """Build the store for the configured backend (PostgreSQL iff DATABASE_URL is set)."""
    if settings.use_postgres:
        connect_args = {}
        if settings.DATABASE_SSL != "disable":
            connect_args["ssl"] = settings.DATABASE_SSL
        engine = create_async_engine(
            settings.async_database_url,
            echo=False,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        store: RecordStore = PostgresStore(engine)
    else:
        engine = create_async_engine(settings.async_database_url, echo=False)
        store = SQLiteStore(engine)

    logger.info("🚀 Base de datos: %s", settings.database_label)
    return store


__all__ = [
    "create_store",
    "ExecuteResult",
    "RecordStore",
    "Row",
    "SQLiteStore",
    "PostgresStore",
    "normalize",
    "to_numeric_placeholders",
]
