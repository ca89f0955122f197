"""
ID photo storage.

Photos are written to a local directory that the app serves under
`/UPLOAD/`; only the resulting path string is stored with the registration.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import Path
from typing import Optional, Union

from starlette.datastructures import UploadFile

from buenafe.errors import UnsupportedUploadError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({"jpg", "jpeg", "png"})
URL_PREFIX = "/UPLOAD"


class UploadStorage:
    def __init__(self, directory: Union[str, Path], url_prefix: str = URL_PREFIX) -> None:
        self.directory  = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")
        self.directory.mkdir(parents=True, exist_ok=True)

    async def save(self, upload: Optional[UploadFile]) -> Optional[str]:
        """
        Store an uploaded photo and return its public path.
        Empty file parts (no file chosen in the form) return None.
        """
        if upload is None or not upload.filename:
            return None

        ext = Path(upload.filename).suffix.lower().lstrip(".")
        if ext not in ALLOWED_EXTENSIONS:
            raise UnsupportedUploadError(
                "Formato de archivo no permitido (jpg, jpeg, png)"
            )

        data = await upload.read()
        name = f"{uuid.uuid4().hex}.{ext}"
        await asyncio.to_thread((self.directory / name).write_bytes, data)
        logger.info("🖼 Foto guardada: %s (%d bytes)", name, len(data))
        return f"{self.url_prefix}/{name}"
