# oauthvault/errors.py


class ConfigurationError(RuntimeError):
    """Key material or other process configuration is malformed."""


class EncryptionError(Exception):
    """Encrypting a secret failed."""


class DecryptionError(Exception):
    """
    Decrypting an envelope failed.

    Malformed input, tampering and a wrong key all surface as this one
    error with the same message.
    """
