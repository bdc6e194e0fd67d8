# oauthvault/deps.py
import os
from fastapi import Depends

from oauthvault.errors import ConfigurationError
from oauthvault.security.auth import AuthPrincipal, require_api_key, require_bearer
from oauthvault.security.authz import require_global_admin

# Resolve auth mode once and expose the proper dependency for routers.
AUTH_TYPE = os.getenv("AUTH_TYPE", "API_KEY").strip().upper()
if AUTH_TYPE == "API_KEY":
    AUTH_DEP = require_api_key
elif AUTH_TYPE == "BEARER":
    AUTH_DEP = require_bearer
else:
    raise ConfigurationError(f"Invalid AUTH_TYPE '{AUTH_TYPE}'. Expected 'API_KEY' or 'BEARER'.")


def require_admin(principal: AuthPrincipal = Depends(AUTH_DEP)) -> AuthPrincipal:
    require_global_admin(principal)
    return principal
