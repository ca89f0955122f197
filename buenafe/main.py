"""
Lista de Buena Fe — tournament player registration service.
Entry point: builds the app context, registers routers + error handlers,
handles startup schema bootstrap and graceful shutdown.
"""
from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from buenafe.config import Settings
from buenafe.db import create_store
from buenafe.errors import StoreError
from buenafe.middlewares import AdminAuthProvider, SharedSecretAuth
from buenafe.services import UploadStorage

# ── Handlers ──────────────────────────────────────────────────────────────────
from buenafe.handlers.registration import router as registration_router
from buenafe.handlers.admin.auth import router as admin_auth_router
from buenafe.handlers.admin.players import router as admin_players_router
from buenafe.handlers.admin.analytics import router as admin_analytics_router
from buenafe.handlers.admin.export import router as admin_export_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    try:
        await app.state.store.ensure_schema()
    except StoreError as e:
        logger.critical(
            "❌ Cannot connect to database!\n"
            "   Database: %s\n"
            "   Error: %s\n\n"
            "   → Hosted: check DATABASE_URL (PostgreSQL)\n"
            "   → Locally: unset DATABASE_URL to use the SQLite file",
            settings.database_label,
            e,
        )
        raise
    try:
        yield
    finally:
        logger.info("Shutting down…")
        await app.state.store.dispose()
        logger.info("Shutdown complete.")


# ── Error handlers ────────────────────────────────────────────────────────────

async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Petición inválida %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Datos inválidos"},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Error interno del servidor"},
    )


def create_app(
    settings: Optional[Settings] = None,
    auth: Optional[AdminAuthProvider] = None,
) -> FastAPI:
    """
    Build the application.  The backend is chosen here, once, and kept with
    the rest of the app context on `app.state`.
    """
    settings = settings or Settings()

    app = FastAPI(title="Lista de Buena Fe", lifespan=lifespan)
    app.state.settings = settings
    app.state.store    = create_store(settings)
    app.state.auth     = auth or SharedSecretAuth(settings.ADMIN_PASSWORD)
    app.state.uploads  = UploadStorage(settings.UPLOAD_DIR)

    # ── Global error handlers: every failure answers {success, message} ───────
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(registration_router)
    app.include_router(admin_auth_router)
    app.include_router(admin_players_router)
    app.include_router(admin_analytics_router)
    app.include_router(admin_export_router)

    app.mount(
        app.state.uploads.url_prefix,
        StaticFiles(directory=app.state.uploads.directory),
        name="uploads",
    )
    return app


def main() -> None:
    settings = Settings()
    logger.info("Starting Lista de Buena Fe…")
    app = create_app(settings)
    logger.info("🚀 Servidor corriendo en http://localhost:%d", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
