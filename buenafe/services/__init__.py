from buenafe.services.player_service import (
    create_player, delete_player, list_players, get_player, filter_players,
)
from buenafe.services.stats_service import StatsSnapshot, build_stats
from buenafe.services.import_service import import_players, prepare_record
from buenafe.services.spreadsheet_service import (
    XLSX_MEDIA_TYPE, build_players_workbook, export_filename, read_players_xlsx,
)
from buenafe.services.sheets_service import export_to_sheets
from buenafe.services.storage_service import UploadStorage

__all__ = [
    # registrations CRUD
    "create_player", "delete_player", "list_players", "get_player", "filter_players",
    # dashboard
    "StatsSnapshot", "build_stats",
    # bulk import
    "import_players", "prepare_record",
    # spreadsheets
    "XLSX_MEDIA_TYPE", "build_players_workbook", "export_filename", "read_players_xlsx",
    "export_to_sheets",
    # uploads
    "UploadStorage",
]
