import logging
import sys
from pathlib import Path
from typing import Dict, Any, List

from dashboard.config import get_settings


def _logger(handlers: List[str], level: str) -> Dict[str, Any]:
    return {"handlers": handlers, "level": level, "propagate": False}


def configure_logging() -> Dict[str, Any]:
    """Build the dictConfig for the API process.

    Console output is plain text. When ``LOG_DIR`` is set, a rotating JSON
    log is written there as well, with the request fields as top-level keys.

    Returns:
        Dict: Logging configuration dictionary
    """
    settings = get_settings()
    handlers = ["console"]

    log_config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "rename_fields": {"levelname": "level", "asctime": "timestamp"},
            },
        },
        "handlers": {
            "console": {
                "level": settings.LOG_LEVEL,
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": sys.stdout,
            },
        },
    }

    if settings.LOG_DIR:
        log_path = Path(settings.LOG_DIR)
        log_path.mkdir(parents=True, exist_ok=True)
        log_config["handlers"]["file"] = {
            "level": settings.LOG_LEVEL,
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json",
            "filename": str(log_path / "dashboard.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "encoding": "utf-8",
        }
        handlers.append("file")

    log_config["loggers"] = {
        "dashboard": _logger(handlers, settings.LOG_LEVEL),
        "uvicorn": _logger(handlers, settings.LOG_LEVEL),
        # aiohttp logs every connection problem we already report ourselves
        "aiohttp.client": _logger(handlers, "WARNING"),
    }
    return log_config


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``dashboard`` namespace, e.g. ``get_logger("crud.event")``."""
    return logging.getLogger(f"dashboard.{name}")
