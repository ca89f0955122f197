"""
Input validation for HTTP payloads — Pydantic v2 models.

Used to validate client-supplied data before writing to the database.
Keeps validation logic out of handler code and makes it trivially testable.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from buenafe.models.models import PlayerType


class RegistrationData(BaseModel):
    """
    Inscription form payload, addressed by its camelCase field names.

    Blank strings are treated as missing and numbers become text.
    `player_type` defaults to socio when missing and is otherwise kept
    verbatim. Only values that are not text or numbers are rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    full_name:     Optional[str] = None
    dni:           Optional[str] = None
    phone:         Optional[str] = None
    email:         Optional[str] = None
    player_type:   Optional[str] = None
    team_name:     Optional[str] = None
    category:      Optional[str] = None
    jersey_number: Optional[str] = None
    socio_name:    Optional[str] = None
    socio_dni:     Optional[str] = None
    socio_phone:   Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return v
        if isinstance(v, (int, float)):
            return str(v)
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @model_validator(mode="after")
    def default_player_type(self) -> "RegistrationData":
        # Stored as sent; the guarantor fields are the form's concern
        if self.player_type is None:
            self.player_type = PlayerType.SOCIO
        return self

    def to_row(
        self,
        dni_player_path: Optional[str] = None,
        dni_socio_path: Optional[str] = None,
    ) -> dict[str, Optional[str]]:
        """Canonical column → value mapping ready for insertion."""
        row = self.model_dump(by_alias=True)
        row["dniPlayerPath"] = dni_player_path
        row["dniSocioPath"]  = dni_socio_path
        return row


class LoginData(BaseModel):
    """Admin login body: `{password}`."""

    password: Optional[str] = None


class BulkImportPayload(BaseModel):
    """
    Bulk import body: `{players: [...]}`.

    Only the shape is checked here; per-record defaults are applied by the
    import pipeline.
    """

    players: list[dict[str, Any]]


def first_error_message(exc: ValidationError) -> str:
    """Human-readable message of the first validation error."""
    errors = exc.errors()
    if not errors:
        return "Datos inválidos"
    msg = errors[0].get("msg", "Datos inválidos")
    return msg.removeprefix("Value error, ")
