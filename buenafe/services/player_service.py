"""
Player service — all database operations on registrations.

All functions receive a RecordStore parameter and are intentionally
pure async functions (no class coupling) for easy unit testing.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from buenafe.db import RecordStore, Row
from buenafe.models.models import INSERT_FIELDS, PLAYERS_TABLE

_INSERT_SQL = (
    f"INSERT INTO {PLAYERS_TABLE} ({', '.join(INSERT_FIELDS)}) "
    f"VALUES ({', '.join('?' for _ in INSERT_FIELDS)})"
)
_LIST_SQL   = f"SELECT * FROM {PLAYERS_TABLE} ORDER BY createdAt DESC, id DESC"
_GET_SQL    = f"SELECT * FROM {PLAYERS_TABLE} WHERE id = ?"
_DELETE_SQL = f"DELETE FROM {PLAYERS_TABLE} WHERE id = ?"


# ── Write ─────────────────────────────────────────────────────────────────────

async def create_player(store: RecordStore, data: Mapping[str, Any]) -> int:
    """Insert one registration and return its generated id."""
    result = await store.execute(_INSERT_SQL, [data.get(f) for f in INSERT_FIELDS])
    return result.inserted_id


async def delete_player(store: RecordStore, player_id: int) -> int:
    """Hard delete. Returns the number of removed rows (0 for an unknown id)."""
    result = await store.execute(_DELETE_SQL, [player_id])
    return result.rowcount


# ── Read ──────────────────────────────────────────────────────────────────────

async def list_players(store: RecordStore) -> List[Row]:
    """All registrations, newest first."""
    return await store.query_all(_LIST_SQL)


async def get_player(store: RecordStore, player_id: int) -> Optional[Row]:
    return await store.query_one(_GET_SQL, [player_id])


# ── Filtering ─────────────────────────────────────────────────────────────────

def filter_players(
    players: Iterable[Row],
    text: str = "",
    category: str = "",
    team: str = "",
) -> List[Row]:
    """
    Admin-panel filter.

    `text` matches as a case-insensitive substring of "fullName dni teamName";
    `category` and `team` must equal the whole value, ignoring case.
    Empty filters match everything.
    """
    text     = (text or "").lower()
    category = (category or "").lower()
    team     = (team or "").lower()

    result = []
    for p in players:
        haystack = " ".join(str(p.get(k) or "") for k in ("fullName", "dni", "teamName"))
        if text and text not in haystack.lower():
            continue
        if category and str(p.get("category") or "").lower() != category:
            continue
        if team and str(p.get("teamName") or "").lower() != team:
            continue
        result.append(p)
    return result
