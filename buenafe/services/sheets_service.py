"""
Google Sheets export service.

Exports the registration list to a Google Spreadsheet using
gspread-asyncio 2.0.0 (wraps gspread 6.x) for non-blocking I/O.

Sheet layout
------------
One worksheet per category (same grouping as the .xlsx export):
    Row 1:  Column headers (bold, white on blue)
    Row 2…: Registrations sorted by team
"""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

from buenafe.config import Settings
from buenafe.services.spreadsheet_service import (
    EXPORT_HEADERS,
    export_row,
    group_by_category,
    sheet_title,
)

logger = logging.getLogger(__name__)

# ── Colour palette (RGB 0-1 float for Sheets API) ────────────────────────────
COLOUR = {
    "header_bg":  {"red": 0.176, "green": 0.310, "blue": 0.576},
    "header_fg":  {"red": 1.0,   "green": 1.0,   "blue": 1.0},
}


async def export_to_sheets(
    settings: Settings,
    players: Sequence[Mapping[str, Any]],
) -> Optional[str]:
    """
    Write registrations into the configured Google Sheet.
    Returns the spreadsheet URL on success, None if Sheets is not configured.
    """
    if not settings.sheets_enabled:
        logger.warning("Google Sheets export requested but not configured.")
        return None

    import gspread
    import gspread_asyncio
    from google.oauth2.service_account import Credentials

    creds_info = settings.google_credentials
    scopes = [
        "https://spreadsheets.google.com/feeds",
        "https://www.googleapis.com/auth/drive",
    ]

    def _make_credentials():
        return Credentials.from_service_account_info(creds_info, scopes=scopes)

    agcm = gspread_asyncio.AsyncioGspreadClientManager(_make_credentials)
    agc  = await agcm.authorize()

    spreadsheet = await agc.open_by_key(settings.GOOGLE_SPREADSHEET_ID)

    format_requests: list[dict] = []
    used: set = set()

    for category, members in group_by_category(players).items():
        title = sheet_title(category, used)

        # Create or clear the worksheet
        try:
            worksheet = await spreadsheet.worksheet(title)
            await worksheet.clear()
        except gspread.exceptions.WorksheetNotFound:
            worksheet = await spreadsheet.add_worksheet(
                title=title, rows=max(len(members) + 10, 100), cols=len(EXPORT_HEADERS)
            )

        rows: List[List[str]] = [EXPORT_HEADERS] + [export_row(p) for p in members]
        # gspread 6.x: update(values, range_name), arguments swapped vs 5.x
        await worksheet.update(rows, "A1")

        # In gspread-asyncio 2.0.0 the underlying sync object is at .ws
        format_requests.append(
            _fmt_range(worksheet.ws.id, 1, 1, 1, len(EXPORT_HEADERS),
                       bg=COLOUR["header_bg"], fg=COLOUR["header_fg"], bold=True)
        )

    # ── Apply formatting (best-effort) ────────────────────────────────────────
    if format_requests:
        try:
            await spreadsheet.batch_update({"requests": format_requests})
        except gspread.exceptions.APIError as fmt_err:
            logger.warning("Could not apply formatting: %s", fmt_err)

    return f"https://docs.google.com/spreadsheets/d/{settings.GOOGLE_SPREADSHEET_ID}"


# ── Helpers ───────────────────────────────────────────────────────────────────

def _fmt_range(
    sheet_id: int,
    start_row: int,
    start_col: int,
    end_row: int,
    end_col: int,
    bg: Optional[dict] = None,
    fg: Optional[dict] = None,
    bold: bool = False,
) -> dict:
    """Build a Sheets API repeatCell request dict."""
    fmt: dict = {}
    if bg:
        fmt["backgroundColor"] = bg
    if fg or bold:
        fmt["textFormat"] = {}
        if fg:
            fmt["textFormat"]["foregroundColor"] = fg
        if bold:
            fmt["textFormat"]["bold"] = True

    return {
        "repeatCell": {
            "range": {
                "sheetId":          sheet_id,
                "startRowIndex":    start_row - 1,
                "endRowIndex":      end_row,
                "startColumnIndex": start_col - 1,
                "endColumnIndex":   end_col,
            },
            "cell": {"userEnteredFormat": fmt},
            "fields": "userEnteredFormat(backgroundColor,textFormat)",
        }
    }
