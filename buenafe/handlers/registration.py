"""
Public inscription endpoint.

Accepts the registration form (multipart with optional ID photos,
url-encoded, or JSON), stores the photos, and inserts the registration.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from buenafe.db import RecordStore
from buenafe.errors import StoreError, UnsupportedUploadError
from buenafe.middlewares import get_store, get_uploads
from buenafe.services import UploadStorage, create_player
from buenafe.validators import RegistrationData, first_error_message

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["inscripcion"])

PLAYER_FILE_FIELD = "dniPlayerFile"
SOCIO_FILE_FIELD  = "dniSocioFile"


@router.post("/inscripcion")
async def inscripcion(
    request: Request,
    store: RecordStore = Depends(get_store),
    uploads: UploadStorage = Depends(get_uploads),
) -> Dict[str, Any]:
    fields, files = await _read_payload(request)
    logger.info("📥 Recibida petición de inscripción: %s", fields.get("fullName"))

    try:
        data = RegistrationData.model_validate(fields)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=first_error_message(exc))

    try:
        dni_player_path = await uploads.save(files.get(PLAYER_FILE_FIELD))
        dni_socio_path  = await uploads.save(files.get(SOCIO_FILE_FIELD))
    except UnsupportedUploadError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    try:
        player_id = await create_player(store, data.to_row(dni_player_path, dni_socio_path))
    except StoreError as exc:
        logger.exception("Error servidor: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error interno del servidor",
        ) from exc

    logger.info("✅ Jugador inscrito exitosamente: %s", data.full_name)
    return {"success": True, "message": "Inscripción guardada exitosamente.", "id": player_id}


async def _read_payload(request: Request) -> Tuple[Dict[str, Any], Dict[str, UploadFile]]:
    """Split the request body into text fields and file parts."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except json.JSONDecodeError:
            body = None
        if not isinstance(body, dict):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Datos inválidos")
        return body, {}

    form = await request.form()
    fields: Dict[str, Any] = {}
    files: Dict[str, UploadFile] = {}
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            files.setdefault(key, value)
        else:
            fields[key] = value
    return fields, files
