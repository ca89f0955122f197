"""
Column normalization for rows coming back from PostgreSQL.

PostgreSQL folds unquoted identifiers to lower case ("fullname") while the
rest of the system works with canonical names ("fullName").  asyncpg and
other drivers may also hand aggregate counts back as text or Decimal.
Both are fixed here with a static table, so the function stays pure and
idempotent: a canonical row maps onto itself.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from buenafe.models.models import COLUMN_MAP, NUMERIC_KEYS

Number = Union[int, float]


def normalize(row: Optional[Mapping[str, Any]]) -> Optional[dict[str, Any]]:
    """Remap a backend row to canonical field names. `None` passes through."""
    if row is None:
        return None
    mapped: dict[str, Any] = {}
    for key, value in row.items():
        lowered = key.lower()
        if is_aggregate_key(lowered):
            value = to_number(value)
        mapped[COLUMN_MAP.get(lowered, key)] = value
    return mapped


def is_aggregate_key(key: str) -> bool:
    """True for the aggregate aliases in NUMERIC_KEYS, in any case."""
    return key.lower() in NUMERIC_KEYS


def to_number(value: Any) -> Number:
    """Coerce a count-like value ("42", Decimal("42"), 42) to int or float."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return float("nan")
