"""
Exceptions raised below the HTTP layer.

Handlers translate them into `{success: false, message}` payloads; the
original cause is logged and never sent to the client.
"""
from __future__ import annotations


class StoreError(Exception):
    """A statement failed against the configured backend."""


class BulkImportError(Exception):
    """
    A bulk import stopped partway through.

    `imported` records were committed before the failure and stay stored.
    """

    def __init__(self, imported: int, total: int) -> None:
        super().__init__(f"bulk import failed after {imported}/{total} records")
        self.imported = imported
        self.total    = total


class UnsupportedUploadError(ValueError):
    """An uploaded ID photo is not one of the accepted image formats."""


class SpreadsheetError(ValueError):
    """An uploaded spreadsheet could not be read."""
