# oauthvault/providers.py
"""
Storage for OAuth identity-provider configurations.

client_secret is encrypted before it reaches the database and is only
decrypted on the way out, either best-effort (admin listing) or strictly
(configs handed to the authentication layer).
"""
import logging

from .crypto import decrypt, encrypt, safe_decrypt
from .db import qall, qexec, qrow, qrow_commit
from .errors import DecryptionError
from .masking import DECRYPTION_FAILED
from .models import OAuthProviderCreate, OAuthProviderUpdate

logger = logging.getLogger(__name__)

COLUMNS = (
    "id, name, provider_id, client_id, client_secret, authorization_url, "
    "token_url, user_info_url, scopes, enabled, created_at, updated_at"
)


def list_providers() -> list[dict]:
    return qall(f"select {COLUMNS} from oauth_providers order by name, id")


def find_by_provider_id(provider_id: str) -> dict | None:
    return qrow(
        f"select {COLUMNS} from oauth_providers where provider_id = %s limit 1",
        (provider_id,),
    )


def create_provider(data: OAuthProviderCreate) -> dict:
    row = qrow_commit(
        f"""
        insert into oauth_providers(
            name, provider_id, client_id, client_secret, authorization_url,
            token_url, user_info_url, scopes, enabled)
        values (%s, %s, %s, %s, %s, %s, %s, %s, %s)
        returning {COLUMNS}
        """,
        (
            data.name,
            data.provider_id,
            data.client_id,
            encrypt(data.client_secret),
            data.authorization_url,
            data.token_url,
            data.user_info_url,
            data.scopes,
            data.enabled,
        ),
    )
    logger.info("Created OAuth provider %s (id=%s)", data.provider_id, row["id"])
    return row


def update_provider(provider_pk: int, data: OAuthProviderUpdate) -> dict | None:
    """Update a provider; the stored secret is kept unless a new one is given."""
    envelope = encrypt(data.client_secret) if data.client_secret else None
    row = qrow_commit(
        f"""
        update oauth_providers set
            name = %s,
            client_id = %s,
            client_secret = coalesce(%s, client_secret),
            authorization_url = %s,
            token_url = %s,
            user_info_url = %s,
            scopes = %s,
            enabled = %s,
            updated_at = now()
        where id = %s
        returning {COLUMNS}
        """,
        (
            data.name,
            data.client_id,
            envelope,
            data.authorization_url,
            data.token_url,
            data.user_info_url,
            data.scopes,
            data.enabled,
            provider_pk,
        ),
    )
    if row:
        logger.info(
            "Updated OAuth provider id=%s (secret %s)",
            provider_pk, "rotated" if envelope else "unchanged",
        )
    return row


def delete_provider(provider_pk: int) -> bool:
    deleted = qexec("delete from oauth_providers where id = %s", (provider_pk,)) > 0
    if deleted:
        logger.info("Deleted OAuth provider id=%s", provider_pk)
    return deleted


def set_enabled(provider_pk: int, enabled: bool) -> dict | None:
    return qrow_commit(
        f"update oauth_providers set enabled = %s, updated_at = now() "
        f"where id = %s returning {COLUMNS}",
        (enabled, provider_pk),
    )


def list_enabled_public() -> list[dict]:
    return qall(
        "select id, provider_id, name from oauth_providers where enabled order by name, id"
    )


def with_decrypted_secret(row: dict) -> dict:
    """Copy of row with client_secret decrypted, or a placeholder if unreadable."""
    secret = safe_decrypt(row["client_secret"])
    if secret is None:
        logger.warning("client_secret of OAuth provider id=%s is unreadable", row["id"])
        secret = DECRYPTION_FAILED
    return {**row, "client_secret": secret}


def enabled_provider_configs() -> list[dict]:
    """
    Enabled providers with plaintext secrets, for wiring into the OAuth client.

    A provider whose secret does not decrypt is left out rather than
    configured with garbage credentials.
    """
    configs = []
    for row in qall(f"select {COLUMNS} from oauth_providers where enabled order by id"):
        try:
            secret = decrypt(row["client_secret"])
        except DecryptionError:
            logger.error("Skipping OAuth provider %s: client_secret is unreadable", row["provider_id"])
            continue
        configs.append({
            "provider_id": row["provider_id"],
            "client_id": row["client_id"],
            "client_secret": secret,
            "authorization_url": row["authorization_url"],
            "token_url": row["token_url"],
            "user_info_url": row["user_info_url"],
            "scopes": row["scopes"].split(),
        })
    return configs
