"""
Admin authorization.

Routes depend on the AdminAuthProvider interface only; the shared-secret
implementation below can be swapped for a real credential/session scheme
without touching route code.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from fastapi import HTTPException, Request, status


class AdminAuthProvider(ABC):
    """Issues and checks admin tokens."""

    @abstractmethod
    def login(self, password: Optional[str]) -> Optional[str]:
        """Return a token for valid credentials, None otherwise."""

    @abstractmethod
    def verify(self, authorization: Optional[str]) -> bool:
        """Check a raw `Authorization` header value."""


class SharedSecretAuth(AdminAuthProvider):
    """
    Single hardcoded secret: the password doubles as the bearer token.
    Not a signed or expiring credential.
    """

    def __init__(self, secret: str) -> None:
        self._secret = secret

    def login(self, password: Optional[str]) -> Optional[str]:
        if password == self._secret:
            return self._secret
        return None

    def verify(self, authorization: Optional[str]) -> bool:
        return authorization == f"Bearer {self._secret}"


# ── Dependencies ──────────────────────────────────────────────────────────────

def get_auth(request: Request) -> AdminAuthProvider:
    return request.app.state.auth


def require_admin(request: Request) -> None:
    """Router-level dependency: rejects requests without the admin bearer token."""
    if not get_auth(request).verify(request.headers.get("authorization")):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No autorizado")
