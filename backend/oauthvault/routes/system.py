# oauthvault/routes/system.py
"""Admin API for OAuth providers. Every route requires a global admin."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import JSONResponse
from psycopg.errors import UniqueViolation

from oauthvault import providers
from oauthvault.deps import require_admin
from oauthvault.models import (
    OAuthProviderCreate,
    OAuthProviderOut,
    OAuthProviderUpdate,
    ToggleIn,
)
from oauthvault.security.auth import AuthPrincipal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/system/oauth-providers", tags=["system"])


def _duplicate_provider_id() -> JSONResponse:
    return JSONResponse(
        status_code=409,
        content={
            "error": "A provider with this Provider ID already exists",
            "errors": {"provider_id": ["Provider ID must be unique"]},
        },
    )


def _out(row: dict) -> OAuthProviderOut:
    # Write responses never echo the secret back
    return OAuthProviderOut(**{**row, "client_secret": None})


@router.get("", response_model=list[OAuthProviderOut])
def list_oauth_providers(
    mask: bool = Query(default=False, description="Mask decrypted secrets for display"),
    _: AuthPrincipal = Depends(require_admin),
):
    """All providers with client secrets decrypted; unreadable ones show a placeholder."""
    out = [OAuthProviderOut(**providers.with_decrypted_secret(r)) for r in providers.list_providers()]
    if mask:
        out = [p.masked() for p in out]
    return out


@router.post("", response_model=OAuthProviderOut, status_code=201)
def create_oauth_provider(
    payload: OAuthProviderCreate,
    principal: AuthPrincipal = Depends(require_admin),
):
    if providers.find_by_provider_id(payload.provider_id):
        return _duplicate_provider_id()
    try:
        row = providers.create_provider(payload)
    except UniqueViolation:
        # Lost a race with a concurrent create of the same provider_id
        logger.info("Concurrent create of OAuth provider %s rejected", payload.provider_id)
        return _duplicate_provider_id()
    logger.info("OAuth provider %s created by %s", payload.provider_id, principal.id)
    return _out(row)


@router.put("/{provider_pk}", response_model=OAuthProviderOut)
def update_oauth_provider(
    provider_pk: int,
    payload: OAuthProviderUpdate,
    principal: AuthPrincipal = Depends(require_admin),
):
    row = providers.update_provider(provider_pk, payload)
    if not row:
        raise HTTPException(404, "Provider not found")
    logger.info("OAuth provider id=%s updated by %s", provider_pk, principal.id)
    return _out(row)


@router.delete("/{provider_pk}", status_code=204)
def delete_oauth_provider(
    provider_pk: int,
    principal: AuthPrincipal = Depends(require_admin),
):
    if not providers.delete_provider(provider_pk):
        raise HTTPException(404, "Provider not found")
    logger.info("OAuth provider id=%s deleted by %s", provider_pk, principal.id)
    return Response(status_code=204)


@router.patch("/{provider_pk}/enabled", response_model=OAuthProviderOut)
def toggle_oauth_provider(
    provider_pk: int,
    payload: ToggleIn,
    principal: AuthPrincipal = Depends(require_admin),
):
    row = providers.set_enabled(provider_pk, payload.enabled)
    if not row:
        raise HTTPException(404, "Provider not found")
    logger.info(
        "OAuth provider id=%s %s by %s",
        provider_pk, "enabled" if payload.enabled else "disabled", principal.id,
    )
    return _out(row)
