"""Networked backend: PostgreSQL through asyncpg."""
from __future__ import annotations

import itertools
import re

from sqlalchemy.engine import CursorResult

from buenafe.db.base import RecordStore, Row
from buenafe.db.normalize import normalize
from buenafe.models.models import PLAYERS_TABLE

_PLACEHOLDER_RE = re.compile(r"\?")


def to_numeric_placeholders(sql: str) -> str:
    """Rewrite `?` placeholders as asyncpg's `$1`, `$2`, …"""
    counter = itertools.count(1)
    return _PLACEHOLDER_RE.sub(lambda _: f"${next(counter)}", sql)


class PostgresStore(RecordStore):
    """
    Unquoted identifiers are folded to lower case by PostgreSQL, so every
    returned row goes through `normalize`.  Inserts get `RETURNING id`
    appended to report the generated key.
    """

    backend = "postgresql"

    @property
    def create_table_sql(self) -> str:
        return f"""
            CREATE TABLE IF NOT EXISTS {PLAYERS_TABLE} (
                id SERIAL PRIMARY KEY,
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
                createdAt TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """

    def _add_column_sql(self, column: str) -> str:
        return f"ALTER TABLE {PLAYERS_TABLE} ADD COLUMN IF NOT EXISTS {column} TEXT"

    def _prepare(self, sql: str, returning: bool) -> str:
        statement = to_numeric_placeholders(sql)
        if returning:
            statement = statement.rstrip().rstrip(";") + " RETURNING id"
        return statement

    def _convert(self, row: Row) -> Row:
        return normalize(row)

    def _inserted_id(self, result: CursorResult) -> int:
        row = result.first()
        return row[0] if row is not None and row[0] is not None else 0
