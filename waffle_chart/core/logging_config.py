"""Centralized logging configuration for waffle_chart.

Console logging is human-readable by default; JSON output (python-json-logger)
is available for log shipping, and an optional rotating JSON file handler can
be attached for longer diagnostic sessions.
"""

import copy
import logging
import logging.config
from pathlib import Path
from typing import Any


LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        },
        "console": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "waffle_chart": {
            "level": "DEBUG",
            "handlers": ["console"],
            "propagate": False,
        },
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console"],
    },
}


def setup_logging(
    json_output: bool = False,
    log_level: str = "INFO",
    log_file: Path | None = None,
) -> None:
    """Configure logging for the application.

    Args:
        json_output: If True, use the JSON formatter for console output
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path for a rotating JSON log file
    """
    config = copy.deepcopy(LOGGING_CONFIG)

    if json_output:
        config["handlers"]["console"]["formatter"] = "json"

    if log_level:
        config["handlers"]["console"]["level"] = log_level.upper()
        config["loggers"]["waffle_chart"]["level"] = log_level.upper()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        config["handlers"]["json_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "json",
            "filename": str(log_file),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
        }
        config["loggers"]["waffle_chart"]["handlers"].append("json_file")

    logging.config.dictConfig(config)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Example:
        logger = get_logger(__name__)
        logger.info("Layout chosen", extra={"rows": 2, "columns": 3})
    """
    return logging.getLogger(name)
