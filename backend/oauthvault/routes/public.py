# oauthvault/routes/public.py
from fastapi import APIRouter

from oauthvault import providers
from oauthvault.models import PublicOAuthProvider

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/providers", response_model=list[PublicOAuthProvider])
def enabled_oauth_providers():
    """Enabled providers for the login page. No credentials, no endpoints."""
    return providers.list_enabled_public()
