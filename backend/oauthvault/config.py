# oauthvault/config.py
"""
Process configuration read from environment variables.

ENCRYPTION_KEY is validated once; a bad key is fatal at startup.
"""
import logging
import os
import re
from functools import lru_cache

from .errors import ConfigurationError

# 32 bytes (256 bit) as lowercase hex. Generate with: openssl rand -hex 32
_HEX64_RE = re.compile(r"^[0-9a-f]{64}$")

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()


def validate_encryption_key(value: str | None) -> str:
    if not value:
        raise ConfigurationError("ENCRYPTION_KEY is not set (32-byte hex key required)")
    if len(value) != 64:
        raise ConfigurationError("ENCRYPTION_KEY must be exactly 64 hex characters (32 bytes)")
    if not _HEX64_RE.match(value):
        raise ConfigurationError(
            "ENCRYPTION_KEY must be a valid hex string (generate with: openssl rand -hex 32)"
        )
    return value


@lru_cache(maxsize=1)
def get_encryption_key() -> str:
    return validate_encryption_key(os.getenv("ENCRYPTION_KEY"))


def cors_origins() -> list[str]:
    return [o.strip() for o in CORS_ORIGINS.split(",") if o.strip()]


def log_level() -> int:
    level = logging.getLevelName(LOG_LEVEL)
    return level if isinstance(level, int) else logging.INFO
