# oauthvault/security/authz.py
from fastapi import HTTPException

# Super-role: may manage identity providers
GLOBAL = "GLOBAL_ADMIN"

def _as_set(principal) -> set[str]:
    return set(principal.roles or [])

def is_global_admin(principal) -> bool:
    return principal is not None and GLOBAL in _as_set(principal)

def require_global_admin(principal) -> None:
    """Anything short of GLOBAL_ADMIN -> 403 Forbidden."""
    if not is_global_admin(principal):
        raise HTTPException(status_code=403, detail="You must be a global admin to perform this action")
