"""
Admin export — .xlsx download and Google Sheets push.
Both honour the same filters as the player list.
"""
import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from buenafe.config import Settings
from buenafe.db import RecordStore
from buenafe.errors import StoreError
from buenafe.middlewares import get_settings, get_store, require_admin
from buenafe.services import (
    XLSX_MEDIA_TYPE, build_players_workbook, export_filename, export_to_sheets,
    filter_players, list_players,
)

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


async def _filtered_players(store: RecordStore, q: str, category: str, team: str) -> list:
    try:
        players = await list_players(store)
    except StoreError as exc:
        logger.exception("Error leyendo jugadores para exportar: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error interno del servidor",
        ) from exc

    players = filter_players(players, q, category, team)
    if not players:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No hay datos para exportar")
    return players


@router.get("/players/export")
async def export_excel(
    q: str = "",
    category: str = "",
    team: str = "",
    store: RecordStore = Depends(get_store),
) -> Response:
    players = await _filtered_players(store, q, category, team)
    content = await asyncio.to_thread(build_players_workbook, players)
    filename = export_filename()
    logger.info("📤 Exportando %d jugadores a %s", len(players), filename)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/players/export/sheets")
async def export_sheets(
    q: str = "",
    category: str = "",
    team: str = "",
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> dict:
    if not settings.sheets_enabled:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Google Sheets no está configurado",
        )

    players = await _filtered_players(store, q, category, team)
    try:
        url = await export_to_sheets(settings, players)
    except Exception as exc:
        logger.exception("Sheets export failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Error exportando a Google Sheets",
        ) from exc

    return {"success": True, "url": url}
