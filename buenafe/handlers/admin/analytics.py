"""Admin dashboard statistics."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from buenafe.db import RecordStore
from buenafe.errors import StoreError
from buenafe.middlewares import get_store, require_admin
from buenafe.services import build_stats

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/stats")
async def get_stats(store: RecordStore = Depends(get_store)) -> dict:
    try:
        snapshot = await build_stats(store)
    except StoreError as exc:
        logger.exception("Error calculando estadísticas: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error calculando estadísticas",
        ) from exc
    return snapshot.as_dict()
