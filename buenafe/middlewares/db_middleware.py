"""
Application-context dependencies.

The store, upload storage and settings are built once by the app factory
and kept on `app.state`; handlers receive them through these dependencies.
"""
from fastapi import Request

from buenafe.config import Settings
from buenafe.db import RecordStore
from buenafe.services.storage_service import UploadStorage


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_uploads(request: Request) -> UploadStorage:
    return request.app.state.uploads


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
