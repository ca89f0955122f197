"""Admin login — exchanges the panel password for a bearer token."""
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from buenafe.middlewares import AdminAuthProvider, get_auth
from buenafe.validators import LoginData

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/login")
async def login(
    data: LoginData,
    auth: AdminAuthProvider = Depends(get_auth),
) -> Dict[str, Any]:
    token = auth.login(data.password)
    if token is None:
        logger.warning("Intento de acceso al panel con contraseña incorrecta")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Contraseña incorrecta")
    return {"success": True, "token": token}
