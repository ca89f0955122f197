"""
Dashboard statistics.

Metrics computed
----------------
- Total number of registrations
- Registrations per team
- Registrations per category

Grouping is left to the database (`GROUP BY`), so NULL values form one
bucket exactly as the engine defines it.  The three queries are independent
and dispatched concurrently; if any one fails the others are cancelled and
the whole snapshot fails.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List

from buenafe.db import RecordStore
from buenafe.models.models import PLAYERS_TABLE

_BY_TEAM_SQL     = f"SELECT teamName, COUNT(*) AS count FROM {PLAYERS_TABLE} GROUP BY teamName"
_BY_CATEGORY_SQL = f"SELECT category, COUNT(*) AS count FROM {PLAYERS_TABLE} GROUP BY category"
_TOTAL_SQL       = f"SELECT COUNT(*) AS total FROM {PLAYERS_TABLE}"


@dataclass
class StatsSnapshot:
    """Aggregated registration counts for the admin dashboard."""
    total:       int = 0
    by_team:     List[Dict[str, Any]] = field(default_factory=list)
    by_category: List[Dict[str, Any]] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "byTeam":     self.by_team,
            "byCategory": self.by_category,
            "total":      self.total,
        }


async def build_stats(store: RecordStore) -> StatsSnapshot:
    tasks = [
        asyncio.ensure_future(store.query_all(_BY_TEAM_SQL)),
        asyncio.ensure_future(store.query_all(_BY_CATEGORY_SQL)),
        asyncio.ensure_future(store.query_one(_TOTAL_SQL)),
    ]
    try:
        by_team, by_category, total_row = await asyncio.gather(*tasks)
    except Exception:
        # Stop the remaining queries and collect their outcomes before re-raising
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return StatsSnapshot(
        total=int(total_row["total"]) if total_row else 0,
        by_team=by_team,
        by_category=by_category,
    )
