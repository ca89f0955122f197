"""
Shared pytest fixtures for Lista de Buena Fe tests.

Every test gets its own Settings pointing at a fresh SQLite file and upload
directory under `tmp_path`; DATABASE_URL is forced off so a developer's
environment never routes tests to PostgreSQL.
"""
from __future__ import annotations

from typing import Any, AsyncGenerator, Dict

# ── Third-party ───────────────────────────────────────────────────────────────
import httpx
import pytest

# ── App imports ───────────────────────────────────────────────────────────────
from buenafe.config import Settings
from buenafe.db import RecordStore, create_store
from buenafe.main import create_app

ADMIN_PASSWORD = "admin123"


# ── Settings / DB fixtures ────────────────────────────────────────────────────

@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=None,
        SQLITE_PATH=str(tmp_path / "test.db"),
        UPLOAD_DIR=str(tmp_path / "uploads"),
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        GOOGLE_CREDENTIALS_JSON=None,
        GOOGLE_SPREADSHEET_ID=None,
    )


@pytest.fixture
async def store(settings) -> AsyncGenerator[RecordStore, None]:
    """
    Yield a SQLite-backed store on an isolated database file.
    The engine is always disposed on teardown, even if the test raises.
    """
    store = create_store(settings)
    try:
        yield store
    finally:
        await store.dispose()


# ── HTTP fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
async def client(settings) -> AsyncGenerator[httpx.AsyncClient, None]:
    """In-process HTTP client against a freshly built app."""
    app = create_app(settings)
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        await app.state.store.dispose()


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_PASSWORD}"}


# ── Data helpers ──────────────────────────────────────────────────────────────

@pytest.fixture
def make_player():
    """Factory fixture — returns a callable that builds a registration dict."""
    def _make(**overrides: Any) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "fullName":     "Ana Gomez",
            "dni":          "1234567",
            "phone":        "0991234567",
            "email":        "ana@example.com",
            "playerType":   "socio",
            "teamName":     "halcones",
            "category":     "mayores",
            "jerseyNumber": "10",
        }
        data.update(overrides)
        return data

    return _make
