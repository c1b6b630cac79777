import logging
import sys

from app.core.config import settings


def configure_logging():
    logger = logging.getLogger()
    if logger.handlers:
        return
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    handler.setFormatter(formatter)
    logger.setLevel(logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO))
    logger.addHandler(handler)
