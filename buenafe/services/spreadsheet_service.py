"""
Excel (.xlsx) import / export of the registration list, using openpyxl.

Export layout
-------------
One worksheet per category (first-seen order), rows sorted by team.
Row 1:   column headers (bold)
Row 2…:  one registration per row

Import layout
-------------
First worksheet, row 1 holds the headers.  Spanish, English and canonical
header names are accepted (see IMPORT_ALIASES).
"""
from __future__ import annotations

import re
import zipfile
from datetime import datetime
from io import BytesIO
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from buenafe.errors import SpreadsheetError
from buenafe.models.models import PlayerType

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

EXPORT_HEADERS: List[str] = [
    "FECHA",
    "EQUIPO",
    "NOMBRE COMPLETO",
    "CÉDULA",
    "TELÉFONO",
    "EMAIL",
    "CAMISETA",
    "TIPO",
    "SOCIO GARANTE",
    "CI SOCIO",
]
COLUMN_WIDTHS: List[int] = [12, 25, 35, 15, 15, 25, 10, 12, 25, 15]

# canonical field → accepted header names, first non-empty wins
IMPORT_ALIASES: Dict[str, Sequence[str]] = {
    "fullName":     ("NOMBRE COMPLETO", "NAME", "fullName"),
    "dni":          ("CÉDULA", "DNI", "dni"),
    "phone":        ("TELÉFONO", "PHONE", "phone"),
    "email":        ("EMAIL", "email"),
    "teamName":     ("EQUIPO", "TEAM", "teamName"),
    "category":     ("CATEGORÍA", "CATEGORY", "category"),
    "playerType":   ("TIPO", "TYPE", "playerType"),
    "jerseyNumber": ("CAMISETA", "NUMBER", "jerseyNumber"),
}

_SHEET_TITLE_INVALID = re.compile(r"[\[\]:*?/\\]")
_SHEET_TITLE_MAX     = 31


# ── Export ────────────────────────────────────────────────────────────────────

def group_by_category(players: Iterable[Mapping[str, Any]]) -> Dict[str, List[Mapping[str, Any]]]:
    """Category → players sorted by team. Keeps first-seen category order."""
    groups: Dict[str, List[Mapping[str, Any]]] = {}
    for p in players:
        groups.setdefault(p.get("category") or "", []).append(p)
    for cat, members in groups.items():
        groups[cat] = sorted(members, key=lambda p: str(p.get("teamName") or "").lower())
    return groups


def sheet_title(category: str, used: set) -> str:
    """Upper-cased, sheet-safe, unique worksheet title."""
    base = _SHEET_TITLE_INVALID.sub("", category.upper()).strip() or "SIN CATEGORIA"
    base = base[:_SHEET_TITLE_MAX]
    title, n = base, 2
    while title in used:
        suffix = f" ({n})"
        title = base[:_SHEET_TITLE_MAX - len(suffix)] + suffix
        n += 1
    used.add(title)
    return title


def export_row(p: Mapping[str, Any]) -> List[str]:
    team = str(p.get("teamName") or "").replace("_", " ").upper()
    return [
        _format_date(p.get("createdAt")),
        team,
        str(p.get("fullName") or "").upper(),
        str(p.get("dni") or ""),
        str(p.get("phone") or ""),
        str(p.get("email") or ""),
        str(p.get("jerseyNumber") or "N/A"),
        str(p.get("playerType") or "").upper(),
        str(p.get("socioName") or "N/A"),
        str(p.get("socioDni") or "N/A"),
    ]


def build_players_workbook(players: Sequence[Mapping[str, Any]]) -> bytes:
    """Render registrations as an .xlsx file. `players` must not be empty."""
    if not players:
        raise ValueError("no players to export")

    wb = Workbook()
    wb.remove(wb.active)
    used: set = set()

    for category, members in group_by_category(players).items():
        ws = wb.create_sheet(sheet_title(category, used))
        ws.append(EXPORT_HEADERS)
        for cell in ws[1]:
            cell.font = Font(bold=True)
        for p in members:
            ws.append(export_row(p))
        for idx, width in enumerate(COLUMN_WIDTHS, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = width

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def export_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"LISTA_BUENA_FE_AFEMEC_{now.year}.xlsx"


# ── Import ────────────────────────────────────────────────────────────────────

def map_import_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Map one spreadsheet row (header → cell) onto canonical fields."""
    def pick(field: str) -> Any:
        for header in IMPORT_ALIASES[field]:
            value = row.get(header)
            if value is not None and value != "":
                return value
        return None

    return {
        "fullName":     pick("fullName"),
        "dni":          pick("dni"),
        "phone":        pick("phone") or "",
        "email":        pick("email") or "",
        "teamName":     pick("teamName"),
        "category":     str(pick("category") or "").lower(),
        "playerType":   str(pick("playerType") or PlayerType.SOCIO).lower(),
        "jerseyNumber": pick("jerseyNumber") or "",
    }


def read_players_xlsx(data: bytes) -> List[Dict[str, Any]]:
    """Parse the first worksheet of an .xlsx file into canonical records."""
    try:
        wb = load_workbook(BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise SpreadsheetError("No se pudo leer el archivo Excel") from exc

    try:
        rows = wb.worksheets[0].iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return []
        keys = [str(h).strip() if h is not None else "" for h in header]

        records = []
        for values in rows:
            if all(v is None or str(v).strip() == "" for v in values):
                continue
            records.append(map_import_row(dict(zip(keys, values))))
        return records
    finally:
        wb.close()


# ── Helpers ───────────────────────────────────────────────────────────────────

def _format_date(value: Any) -> str:
    """dd/mm/yyyy from a datetime (PostgreSQL) or timestamp text (SQLite)."""
    if value is None:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    return value.strftime("%d/%m/%Y")
