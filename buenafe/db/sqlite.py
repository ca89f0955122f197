"""Embedded backend: a local SQLite file through aiosqlite."""
from __future__ import annotations

from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import DBAPIError

from buenafe.db.base import RecordStore
from buenafe.models.models import PLAYERS_TABLE


class SQLiteStore(RecordStore):
    """
    SQLite keeps identifiers exactly as declared, so rows already carry
    canonical names and `?` is the driver's native placeholder.
    """

    backend = "sqlite"

    @property
    def create_table_sql(self) -> str:
        return f"""
            CREATE TABLE IF NOT EXISTS {PLAYERS_TABLE} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                fullName TEXT,
                dni TEXT,
                phone TEXT,
                email TEXT,
                playerType TEXT,
                teamName TEXT,
                category TEXT,
                jerseyNumber TEXT,
                socioName TEXT,
                socioDni TEXT,
                socioPhone TEXT,
                dniPlayerPath TEXT,
                dniSocioPath TEXT,
                createdAt DATETIME DEFAULT CURRENT_TIMESTAMP
            )
        """

    def _add_column_sql(self, column: str) -> str:
        return f"ALTER TABLE {PLAYERS_TABLE} ADD COLUMN {column} TEXT"

    def _is_duplicate_column(self, exc: DBAPIError) -> bool:
        return "duplicate column" in str(exc.orig).lower()

    def _inserted_id(self, result: CursorResult) -> int:
        return result.lastrowid or 0
