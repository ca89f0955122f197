"""
Domain constants for the Lista de Buena Fe registration system.

Domain overview
---------------
players — one row per registrant (player + optional guarantor "socio").

Rows travel through the system as plain dicts keyed by the canonical
mixed-case field names below, whatever casing the backend uses on disk.
"""
from __future__ import annotations

# ─────────────────────────── Constants ────────────────────────────────────────

class PlayerType:
    SOCIO     = "socio"       # Club member, base type
    CONYUGE   = "conyuge"     # Spouse of a member
    ADHERENTE = "adherente"   # Associate member, vouched for by a socio


PLAYERS_TABLE = "players"

# Columns written on insert; id and createdAt are generated by the store.
INSERT_FIELDS: tuple[str, ...] = (
    "fullName",
    "dni",
    "phone",
    "email",
    "playerType",
    "teamName",
    "category",
    "jerseyNumber",
    "socioName",
    "socioDni",
    "socioPhone",
    "dniPlayerPath",
    "dniSocioPath",
)

# Columns accepted from a bulk import (no photo references).
BULK_FIELDS: tuple[str, ...] = INSERT_FIELDS[:11]

GUARANTOR_FIELDS: tuple[str, ...] = ("socioName", "socioDni", "socioPhone")

# Optional columns added after the first release; applied additively on startup.
OPTIONAL_COLUMNS: tuple[str, ...] = ("dniPlayerPath", "dniSocioPath")

# PostgreSQL folds unquoted identifiers to lower case.
# lower-case identifier → canonical field name
COLUMN_MAP: dict[str, str] = {
    "fullname":      "fullName",
    "playertype":    "playerType",
    "teamname":      "teamName",
    "jerseynumber":  "jerseyNumber",
    "socioname":     "socioName",
    "sociodni":      "socioDni",
    "sociophone":    "socioPhone",
    "dniplayerpath": "dniPlayerPath",
    "dnisociopath":  "dniSocioPath",
    "createdat":     "createdAt",
}

# Aggregate aliases whose values may come back from PostgreSQL as text.
# Listed explicitly so ordinary columns are never coerced.
NUMERIC_KEYS: frozenset[str] = frozenset({"count", "total", "totalcount"})
