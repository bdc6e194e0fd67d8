# oauthvault/crypto.py
"""
AES-256-GCM envelopes for secrets stored in the database.

Envelope layout (before base64): nonce(12) || ciphertext || tag(16).
No key id, version or associated data: one key for the whole deployment.
"""
import base64
import binascii
import logging
import re
import secrets
from functools import lru_cache

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .config import get_encryption_key
from .errors import ConfigurationError, DecryptionError, EncryptionError

logger = logging.getLogger(__name__)

NONCE_LENGTH = 12   # 96-bit nonce for AES-GCM
TAG_LENGTH = 16     # 128-bit tag, appended by AESGCM.encrypt
KEY_LENGTH = 32     # AES-256

_KEY_RE = re.compile(r"[0-9a-f]{%d}" % (KEY_LENGTH * 2))


def import_key(key_hex: str) -> AESGCM:
    """Turn a 64-char lowercase hex string into an AES-256-GCM handle."""
    if not isinstance(key_hex, str) or not _KEY_RE.fullmatch(key_hex):
        raise ConfigurationError("Invalid encryption key format")
    return AESGCM(bytes.fromhex(key_hex))


class SecretCodec:
    """Encrypts short strings into base64 envelopes and back."""

    __slots__ = ("_aead",)

    def __init__(self, key_hex: str):
        self._aead = import_key(key_hex)

    def __repr__(self) -> str:
        return "SecretCodec(alg='AES256-GCM')"

    def encrypt(self, plaintext: str) -> str:
        try:
            data = plaintext.encode("utf-8")
            nonce = secrets.token_bytes(NONCE_LENGTH)
            ct = self._aead.encrypt(nonce, data, None)
        except Exception as e:
            raise EncryptionError("Encryption failed") from e
        return base64.b64encode(nonce + ct).decode("ascii")

    def decrypt(self, envelope: str) -> str:
        try:
            raw = base64.b64decode(envelope, validate=True)
            if len(raw) < NONCE_LENGTH + TAG_LENGTH:
                raise ValueError("envelope too short")
            pt = self._aead.decrypt(raw[:NONCE_LENGTH], raw[NONCE_LENGTH:], None)
            return pt.decode("utf-8")
        except (InvalidTag, binascii.Error, ValueError, TypeError):
            pass
        # Raised outside the except block so no cause is chained
        raise DecryptionError("Decryption failed")

    def safe_decrypt(self, envelope: str) -> str | None:
        """Like decrypt(), but returns None instead of raising."""
        try:
            return self.decrypt(envelope)
        except DecryptionError:
            logger.debug("Stored secret could not be decrypted")
            return None


@lru_cache(maxsize=1)
def get_codec() -> SecretCodec:
    """Process-wide codec built from ENCRYPTION_KEY on first use."""
    return SecretCodec(get_encryption_key())


def encrypt(plaintext: str) -> str:
    return get_codec().encrypt(plaintext)


def decrypt(envelope: str) -> str:
    """Raises DecryptionError; a malformed ENCRYPTION_KEY raises ConfigurationError instead."""
    return get_codec().decrypt(envelope)


def safe_decrypt(envelope: str) -> str | None:
    try:
        codec = get_codec()
    except ConfigurationError:
        logger.error("Encryption key is not configured; cannot decrypt")
        return None
    return codec.safe_decrypt(envelope)
