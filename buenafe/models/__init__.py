from buenafe.models.models import (
    PlayerType,
    PLAYERS_TABLE,
    INSERT_FIELDS,
    BULK_FIELDS,
    GUARANTOR_FIELDS,
    OPTIONAL_COLUMNS,
    COLUMN_MAP,
    NUMERIC_KEYS,
)

__all__ = [
    "PlayerType",
    "PLAYERS_TABLE",
    "INSERT_FIELDS",
    "BULK_FIELDS",
    "GUARANTOR_FIELDS",
    "OPTIONAL_COLUMNS",
    "COLUMN_MAP",
    "NUMERIC_KEYS",
]
