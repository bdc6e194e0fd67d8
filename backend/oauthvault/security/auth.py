# oauthvault/security/auth.py
import os
import logging
import re
from dataclasses import dataclass
from typing import Optional, Any, Dict
from fastapi import Header, HTTPException
import jwt  # PyJWT

from .authz import GLOBAL

logger = logging.getLogger(__name__)

API_KEY = os.getenv("API_KEY", "")

JWT_ALG         = os.getenv("JWT_ALG", "HS256")
JWT_SIGNING_KEY = os.getenv("JWT_SIGNING_KEY", "")
JWT_AUDIENCE    = os.getenv("JWT_AUDIENCE", "oauthvault")
ISSUER          = os.getenv("ISSUER", "")

@dataclass
class AuthPrincipal:
    """Represents an authenticated principal."""
    id: str
    subject: Optional[str] = None
    issuer: Optional[str] = None
    roles: Optional[list[str]] = None

def _unauth(detail: str):
    logger.warning("Auth failed: %s", detail)
    raise HTTPException(status_code=401, detail="Unauthorized")

def _require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> AuthPrincipal:
    """Operator API key; holders administer the whole system."""
    if not API_KEY:
        _unauth("API_KEY not configured")
    if not x_api_key:
        _unauth("Missing X-API-Key header")
    if x_api_key != API_KEY:
        _unauth("Invalid API key")
    return AuthPrincipal(id="api-key", subject="api-key", issuer="local", roles=[GLOBAL])

_SPLIT_RE = re.compile(r"[,\s]+")

def _to_list(v: Any) -> list[str]:
    """Coerce common representations to list[str]."""
    if v is None:
        return []
    if isinstance(v, (list, tuple)):
        return [str(x) for x in v if str(x).strip()]
    if isinstance(v, str):
        return [p for p in _SPLIT_RE.split(v.strip()) if p]
    return [str(v)] if str(v).strip() else []

def _extract_roles(payload: Dict[str, Any]) -> list[str]:
    roles: list[str] = []
    roles += _to_list(payload.get("roles"))
    roles += _to_list(payload.get("groups"))
    # Keycloak style
    realm = payload.get("realm_access") or {}
    if isinstance(realm, dict):
        roles += _to_list(realm.get("roles"))
    return list(dict.fromkeys(roles))

def _require_bearer(authorization: str | None = Header(default=None)) -> AuthPrincipal:
    """Validate a Bearer JWT and build AuthPrincipal from its roles."""
    if not authorization:
        _unauth("Missing Authorization header")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        _unauth("Malformed Authorization header")

    token = parts[1]
    try:
        payload = jwt.decode(
            token,
            JWT_SIGNING_KEY,
            algorithms=[JWT_ALG],
            audience=JWT_AUDIENCE,
            issuer=ISSUER or None,
            leeway=30,
            options={"require": ["exp", "iat", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        _unauth("Token expired")
    except jwt.InvalidAudienceError:
        _unauth("Bad audience")
    except jwt.InvalidIssuerError:
        _unauth("Bad issuer")
    except jwt.InvalidSignatureError:
        _unauth("Bad signature")
    except jwt.PyJWTError as e:
        _unauth(f"JWT error: {e}")
    return AuthPrincipal(
        id=payload["sub"],
        subject=payload.get("sub"),
        issuer=payload.get("iss"),
        roles=_extract_roles(payload),
    )

require_api_key = _require_api_key
require_bearer  = _require_bearer

__all__ = ["require_api_key", "require_bearer", "AuthPrincipal"]
