"""
Logging setup shared by the client modules and the read-through service.
"""

import logging
import sys

from wearsearch_client.core.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

_configured = False


def setup_logging(level: str = None) -> None:
    """Configure the root logger once. Later calls only adjust the level."""
    global _configured
    settings = get_settings()
    resolved = (level or settings.LOG_LEVEL or "INFO").upper()
    if settings.DEBUG:
        resolved = "DEBUG"

    root = logging.getLogger()
    root.setLevel(resolved)

    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)
        _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
