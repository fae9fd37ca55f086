"""Logging configuration: console plus rotating files under LOG_DIR."""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from medgate.core.config import LOG_DIR as _LOG_DIR, LOG_LEVEL

LOG_DIR = Path(_LOG_DIR)
LOG_DIR.mkdir(parents=True, exist_ok=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _rotating_handler(filename: str, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(LOG_DIR / filename, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logger(name: str = "medgate", level: str = LOG_LEVEL) -> logging.Logger:
    """Attach console, app.log and errors.log handlers once per logger."""
    configured = logging.getLogger(name)
    configured.setLevel(level)
    if configured.handlers:
        return configured

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    configured.addHandler(console_handler)
    configured.addHandler(_rotating_handler("app.log", logging.DEBUG, formatter))
    # Errors also go to their own file
    configured.addHandler(_rotating_handler("errors.log", logging.ERROR, formatter))
    return configured


logger = configure_logger()

# Upstream client and server loggers stay quiet unless something breaks
logging.getLogger("uvicorn").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
