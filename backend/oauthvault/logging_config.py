import logging
import sys

_HANDLER_NAME = "oauthvault"


def setup_logging(level=logging.INFO):
    """Configure root logger for the backend app."""
    root = logging.getLogger()
    root.setLevel(level)

    # uvicorn --reload and tests may call this more than once
    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        "%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)

    # silence noisy libraries
    logging.getLogger("psycopg").setLevel(logging.WARNING)
    logging.getLogger("psycopg.pool").setLevel(logging.WARNING)
    logging.getLogger("cryptography").setLevel(logging.WARNING)
