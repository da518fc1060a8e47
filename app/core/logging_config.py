"""
Logging setup for the API process.

Modules log through ``logging.getLogger(__name__)``; this only wires the
root handler and quiets noisy third-party loggers.
"""
import logging
import sys

from app.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_configured = False


def setup_logging(level: str = None) -> None:
    """Configure root logging once per process."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level or settings.log_level)

    # boto and passlib are chatty at INFO
    for name in ("botocore", "boto3", "s3transfer", "passlib"):
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
