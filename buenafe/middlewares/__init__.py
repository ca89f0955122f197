from buenafe.middlewares.db_middleware import get_store, get_uploads, get_settings
from buenafe.middlewares.auth_middleware import (
    AdminAuthProvider, SharedSecretAuth, get_auth, require_admin,
)

__all__ = [
    "get_store", "get_uploads", "get_settings",
    "AdminAuthProvider", "SharedSecretAuth", "get_auth", "require_admin",
]
