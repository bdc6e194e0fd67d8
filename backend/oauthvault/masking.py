# Shown instead of a stored secret that could not be decrypted
DECRYPTION_FAILED = "*** DECRYPTION FAILED ***"


def mask_secret(value: str) -> str:
    """Keep the first and last two characters of long values, star the rest."""
    if value == DECRYPTION_FAILED:
        return value
    if len(value) > 6:
        return f"{value[:2]}{'*' * (len(value) - 4)}{value[-2:]}"
    return "*" * len(value)
