# Re-export security primitives from a single namespace.
from .auth import require_api_key, require_bearer, AuthPrincipal
from .authz import GLOBAL, is_global_admin, require_global_admin

__all__ = [
    "require_api_key", "require_bearer", "AuthPrincipal",
    "GLOBAL", "is_global_admin", "require_global_admin",
]
