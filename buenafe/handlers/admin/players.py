"""
Admin registration management — list, bulk import, spreadsheet import, delete.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from buenafe.db import RecordStore, Row
from buenafe.errors import BulkImportError, SpreadsheetError, StoreError
from buenafe.middlewares import get_store, require_admin
from buenafe.services import (
    delete_player, filter_players, import_players, list_players, read_players_xlsx,
)
from buenafe.validators import BulkImportPayload

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


# ── Listing ───────────────────────────────────────────────────────────────────

@router.get("/players")
async def get_players(
    q: str = "",
    category: str = "",
    team: str = "",
    store: RecordStore = Depends(get_store),
) -> List[Row]:
    try:
        players = await list_players(store)
    except StoreError as exc:
        logger.exception("Error listando jugadores: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error interno del servidor",
        ) from exc

    if q or category or team:
        players = filter_players(players, q, category, team)
    return players


# ── Bulk import ───────────────────────────────────────────────────────────────

@router.post("/players/bulk")
async def bulk_import(
    payload: BulkImportPayload,
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    return await _run_import(store, payload.players)


@router.post("/players/import")
async def import_spreadsheet(
    file: UploadFile = File(...),
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    data = await file.read()
    try:
        records = read_players_xlsx(data)
    except SpreadsheetError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    if not records:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="El archivo está vacío")

    logger.info("📄 Excel %s: %d filas", file.filename, len(records))
    return await _run_import(store, records)


async def _run_import(store: RecordStore, records: List[Dict[str, Any]]) -> Dict[str, Any]:
    try:
        count = await import_players(store, records)
    except BulkImportError as exc:
        # The committed prefix stays in the database
        logger.exception(
            "Error en carga masiva: %d de %d jugadores guardados antes del fallo",
            exc.imported, exc.total,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al procesar la carga masiva",
        ) from exc

    return {
        "success": True,
        "message": f"{count} jugadores importados correctamente.",
        "count":   count,
    }


# ── Delete ────────────────────────────────────────────────────────────────────

@router.delete("/players/{player_id}")
async def remove_player(
    player_id: int,
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    try:
        removed = await delete_player(store, player_id)
    except StoreError as exc:
        logger.exception("Error eliminando: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error interno del servidor",
        ) from exc

    logger.info("🗑 Jugador %d eliminado (%d filas)", player_id, removed)
    return {"success": True, "message": "Jugador eliminado"}
