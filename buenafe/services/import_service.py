"""
Bulk import pipeline.

Records arrive already mapped to canonical field names (from the admin
panel's JSON upload or from `spreadsheet_service.read_players_xlsx`) and are
inserted one by one, in input order.

The batch is NOT wrapped in a transaction: when an insert fails, the records
before it stay committed, the rest are skipped, and a single BulkImportError
is raised.  Callers must treat a failed import as "an unknown prefix was
stored".
"""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

from buenafe.db import RecordStore
from buenafe.errors import BulkImportError, StoreError
from buenafe.models.models import BULK_FIELDS, GUARANTOR_FIELDS, PLAYERS_TABLE, PlayerType

logger = logging.getLogger(__name__)

_BULK_SQL = (
    f"INSERT INTO {PLAYERS_TABLE} ({', '.join(BULK_FIELDS)}) "
    f"VALUES ({', '.join('?' for _ in BULK_FIELDS)})"
)


def prepare_record(record: Mapping[str, Any]) -> List[Optional[str]]:
    """
    Column values for one bulk record.

    playerType falls back to socio and guarantor fields to NULL when missing
    or empty.  Everything else is stored as given, as text.
    """
    values: List[Optional[str]] = []
    for name in BULK_FIELDS:
        value = record.get(name)
        if name == "playerType":
            value = value or PlayerType.SOCIO
        elif name in GUARANTOR_FIELDS:
            value = value or None
        values.append(_as_text(value))
    return values


async def import_players(store: RecordStore, records: Sequence[Mapping[str, Any]]) -> int:
    """Insert every record sequentially. Returns the number imported."""
    logger.info("📥 Recibida carga masiva de %d jugadores", len(records))

    imported = 0
    for record in records:
        try:
            await store.execute(_BULK_SQL, prepare_record(record))
        except StoreError as exc:
            raise BulkImportError(imported, len(records)) from exc
        imported += 1

    logger.info("✅ Carga masiva completa: %d jugadores", imported)
    return imported


def _as_text(value: Any) -> Optional[str]:
    # Spreadsheet cells come back as numbers (jersey 10, cédula 1234567.0)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
