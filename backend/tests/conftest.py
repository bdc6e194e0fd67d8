import os

# Must be in place before oauthvault modules read the environment
os.environ.setdefault("ENCRYPTION_KEY", "ab" * 32)
os.environ.setdefault("API_KEY", "test-api-key")
os.environ.setdefault("AUTH_TYPE", "API_KEY")

import pytest

from oauthvault import config, crypto


@pytest.fixture(autouse=True)
def _fresh_key_cache():
    config.get_encryption_key.cache_clear()
    crypto.get_codec.cache_clear()
    yield
    config.get_encryption_key.cache_clear()
    crypto.get_codec.cache_clear()


@pytest.fixture
def zero_key():
    return "00" * 32
