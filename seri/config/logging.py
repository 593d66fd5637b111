"""
Logging Configuration
====================

Structured logging for the compiler and its drivers.

Importing this module only points structlog at the standard library, so
the compiler core can be used as a library without touching the host's
handlers. The drivers (CLI, HTTP API, MCP server) own their process and
call setup_logging() to install handlers: a console handler on stderr,
which keeps compiled output on stdout clean, and rotating files when
log_file is set.
"""

import logging
import logging.config
import sys
from typing import Any, Dict, Iterable, List, Optional

import structlog
from structlog.types import Processor

from .settings import Settings, get_settings

# Third-party loggers each driver routes to the console
DRIVER_LOGGERS: Dict[str, str] = {
    "uvicorn": "INFO",
    "fastapi": "INFO",
    "mcp": "WARNING",
}

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def configure_structlog(settings: Optional[Settings] = None) -> None:
    """Route structlog through stdlib logging with the renderer of the environment."""
    settings = settings or get_settings()

    processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.environment == "production":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _rotating_file(filename: str, level: str) -> Dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": "detailed",
        "filename": filename,
        "maxBytes": LOG_FILE_MAX_BYTES,
        "backupCount": LOG_FILE_BACKUPS,
    }


def get_logging_config(
    settings: Settings, driver_loggers: Optional[Iterable[str]] = None
) -> Dict[str, Any]:
    """
    Build the dictConfig for a driver process.

    Args:
        settings: Settings providing level, environment and log file
        driver_loggers: Names from DRIVER_LOGGERS to attach to the console;
            all of them when omitted

    Returns:
        Configuration dictionary for logging.config.dictConfig
    """
    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": settings.log_level,
            "formatter": "json" if settings.environment == "production" else "standard",
            "stream": sys.stderr,
        },
    }
    if settings.log_file is not None and settings.environment != "testing":
        handlers["file"] = _rotating_file(str(settings.log_file), settings.log_level)
        handlers["error_file"] = _rotating_file(
            str(settings.log_file.with_suffix(".error.log")), "ERROR"
        )

    names = DRIVER_LOGGERS if driver_loggers is None else driver_loggers
    loggers: Dict[str, Any] = {
        "": {"level": settings.log_level, "handlers": list(handlers), "propagate": False},
    }
    for name in names:
        loggers[name] = {
            "level": DRIVER_LOGGERS[name],
            "handlers": ["console"],
            "propagate": False,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
        },
        "handlers": handlers,
        "loggers": loggers,
    }


def setup_logging(driver_loggers: Optional[Iterable[str]] = None) -> None:
    """Install handlers for a driver process. Safe to call more than once."""
    settings = get_settings()
    if settings.log_file is not None and settings.environment != "testing":
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    configure_structlog(settings)
    logging.config.dictConfig(get_logging_config(settings, driver_loggers))


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


configure_structlog()
