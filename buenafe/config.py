"""
Central configuration via pydantic-settings.
All secrets are read from environment variables / .env file.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Database ──────────────────────────────────────────────────────────────
    # Presence of DATABASE_URL selects PostgreSQL; otherwise the local SQLite file.
    DATABASE_URL: Optional[str] = None
    DATABASE_SSL: str = "require"
    SQLITE_PATH:  str = "afemec.db"

    # ── Admin panel ───────────────────────────────────────────────────────────
    ADMIN_PASSWORD: str = "admin123"

    # ── Uploads ───────────────────────────────────────────────────────────────
    UPLOAD_DIR: str = "UPLOAD"

    # ── HTTP server ───────────────────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # ── Google Sheets (optional) ──────────────────────────────────────────────
    GOOGLE_CREDENTIALS_JSON: Optional[str] = None
    GOOGLE_SPREADSHEET_ID:   Optional[str] = None

    # ─────────────────────────────────────────────────────────────────────────

    @property
    def use_postgres(self) -> bool:
        return bool(self.DATABASE_URL)

    @property
    def async_database_url(self) -> str:
        """
        Railway injects DATABASE_URL as 'postgresql://...'
        SQLAlchemy async requires 'postgresql+asyncpg://...'
        This property fixes the prefix automatically.
        Without DATABASE_URL the embedded SQLite file is used.
        """
        url = self.DATABASE_URL
        if not url:
            return f"sqlite+aiosqlite:///{Path(self.SQLITE_PATH).as_posix()}"
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @property
    def database_label(self) -> str:
        """Database location without credentials, safe for logs."""
        if not self.use_postgres:
            return f"SQLite ({self.SQLITE_PATH})"
        return "PostgreSQL (" + self.async_database_url.split("@")[-1] + ")"

    @property
    def google_credentials(self) -> dict:
        """Deserialize Google service-account credentials."""
        if self.GOOGLE_CREDENTIALS_JSON:
            return json.loads(self.GOOGLE_CREDENTIALS_JSON)
        return {}

    @property
    def sheets_enabled(self) -> bool:
        return bool(self.GOOGLE_CREDENTIALS_JSON and self.GOOGLE_SPREADSHEET_ID)
