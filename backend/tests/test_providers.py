import logging
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from oauthvault import crypto, db, providers
from oauthvault.masking import DECRYPTION_FAILED
from oauthvault.models import OAuthProviderCreate, OAuthProviderUpdate

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

FIELDS = {
    "name": "Acme SSO",
    "client_id": "acme-client",
    "authorization_url": "https://sso.acme.test/oauth/authorize",
    "token_url": "https://sso.acme.test/oauth/token",
    "scopes": "openid email",
}


def _row(pk=1, provider_id="acme", secret="s3cr3t", enabled=True, envelope=None):
    return {
        "id": pk,
        "provider_id": provider_id,
        "client_secret": envelope if envelope is not None else crypto.encrypt(secret),
        "user_info_url": None,
        "enabled": enabled,
        "created_at": NOW,
        "updated_at": NOW,
        **FIELDS,
    }


@patch("oauthvault.providers.qrow_commit")
def test_create_stores_encrypted_secret(mock_write):
    mock_write.return_value = _row()
    data = OAuthProviderCreate(**FIELDS, provider_id="acme", client_secret="s3cr3t")

    row = providers.create_provider(data)

    assert row["id"] == 1
    params = mock_write.call_args.args[1]
    stored = params[3]
    assert "s3cr3t" not in params
    assert stored != "s3cr3t"
    assert crypto.decrypt(stored) == "s3cr3t"


@patch("oauthvault.providers.qrow_commit")
def test_update_without_secret_keeps_stored_one(mock_write):
    mock_write.return_value = _row()
    providers.update_provider(1, OAuthProviderUpdate(**FIELDS, client_secret=""))

    sql, params = mock_write.call_args.args
    assert "coalesce(%s, client_secret)" in sql
    assert params[2] is None
    assert params[-1] == 1


@patch("oauthvault.providers.qrow_commit")
def test_update_with_secret_reencrypts(mock_write):
    mock_write.return_value = _row()
    providers.update_provider(1, OAuthProviderUpdate(**FIELDS, client_secret="rotated"))

    envelope = mock_write.call_args.args[1][2]
    assert crypto.decrypt(envelope) == "rotated"


@patch("oauthvault.providers.qrow_commit", return_value=None)
def test_update_missing_returns_none(_):
    assert providers.update_provider(99, OAuthProviderUpdate(**FIELDS)) is None


@patch("oauthvault.providers.qexec")
def test_delete(mock_exec):
    mock_exec.return_value = 1
    assert providers.delete_provider(1) is True
    mock_exec.return_value = 0
    assert providers.delete_provider(2) is False


def test_unreadable_secret_logs_once_with_record_id(caplog):
    with caplog.at_level(logging.DEBUG):
        providers.with_decrypted_secret(_row(pk=5, envelope="tampered=="))
    warnings = [r for r in caplog.records if r.name.startswith("oauthvault") and r.levelno >= logging.WARNING]
    assert len(warnings) == 1
    assert "id=5" in warnings[0].getMessage()


def test_with_decrypted_secret():
    good = providers.with_decrypted_secret(_row(secret="plain"))
    bad = providers.with_decrypted_secret(_row(envelope="tampered=="))
    assert good["client_secret"] == "plain"
    assert bad["client_secret"] == DECRYPTION_FAILED
    assert bad["provider_id"] == "acme"


@patch("oauthvault.providers.qall")
def test_enabled_provider_configs_skips_unreadable(mock_all):
    mock_all.return_value = [
        _row(1, "acme", "one"),
        _row(2, "broken", envelope="AAAA"),
        _row(3, "corp", "three"),
    ]

    configs = providers.enabled_provider_configs()

    assert [c["provider_id"] for c in configs] == ["acme", "corp"]
    assert configs[0]["client_secret"] == "one"
    assert configs[0]["scopes"] == ["openid", "email"]
    assert "where enabled" in mock_all.call_args.args[0]


@patch("oauthvault.db.pool")
def test_qrow_commit_commits(mock_pool):
    mock_conn = MagicMock()
    mock_cur = MagicMock()
    mock_pool.connection.return_value.__enter__.return_value = mock_conn
    mock_conn.cursor.return_value.__enter__.return_value = mock_cur
    mock_cur.fetchone.return_value = {"id": 7}

    assert db.qrow_commit("insert ... returning id", ("x",)) == {"id": 7}
    mock_cur.execute.assert_called_once_with("insert ... returning id", ("x",))
    mock_conn.commit.assert_called_once()


@patch("oauthvault.db.pool")
def test_qexec_returns_rowcount(mock_pool):
    mock_conn = MagicMock()
    mock_cur = MagicMock()
    mock_pool.connection.return_value.__enter__.return_value = mock_conn
    mock_conn.cursor.return_value.__enter__.return_value = mock_cur
    mock_cur.rowcount = 1

    assert db.qexec("delete from oauth_providers where id = %s", (1,)) == 1
    mock_cur.execute.assert_called_once_with("delete from oauth_providers where id = %s", (1,))
    mock_conn.commit.assert_called_once()
