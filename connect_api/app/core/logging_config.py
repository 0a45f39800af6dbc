"""
Logging configuration for the application.

``setup_logging`` installs a console handler (plus a file handler when
``LOG_FILE`` is set) on the root logger through ``dictConfig``.  Every
module logs through ``logging.getLogger(__name__)``.  Uvicorn's own
loggers propagate to the root so access and service records share one
format.
"""

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_logging_config(level: str = "INFO", logfile: Optional[str] = None) -> Dict[str, Any]:
    """Return the ``dictConfig`` mapping for the given level and log file."""
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"

    handlers: Dict[str, Dict[str, Any]] = {
        "console": {"class": "logging.StreamHandler", "formatter": "default"},
    }
    if logfile:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": str(Path(logfile).resolve()),
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT}},
        "handlers": handlers,
        "root": {"level": level, "handlers": list(handlers)},
        "loggers": {
            "uvicorn": {"handlers": [], "propagate": True},
            "uvicorn.access": {"handlers": [], "propagate": True},
        },
    }


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure logging once per process.

    Does nothing when the root logger already has handlers, e.g. when
    ``create_app`` runs again or a test runner captures logs.
    """
    if logging.getLogger().handlers:
        return
    logging.config.dictConfig(build_logging_config(level, logfile))
