"""
Structured logging configuration for the declarative validator.

The library only creates loggers; applications call ``setup_logging`` (or
``setup_logging_from_config``) to attach handlers.
"""

import logging
import logging.config
import json
import sys
from datetime import datetime, timezone
from typing import Optional
from pathlib import Path


class StructuredFormatter(logging.Formatter):
    """Custom formatter that outputs structured JSON logs."""

    def __init__(self, service_name: str = "declarative-validator", version: str = "0.3.0"):
        super().__init__()
        self.service_name = service_name
        self.version = version

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "version": self.version,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Context attached by log_with_context
        context = getattr(record, "context", None)
        if context:
            log_entry.update(context)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = record.stack_info

        return json.dumps(log_entry, default=str)


def setup_logging(
    log_level: str = "WARNING",
    service_name: str = "declarative-validator",
    version: str = "0.3.0",
    enable_file_logging: bool = False,
    log_file_path: Optional[str] = None
) -> None:
    """
    Setup structured logging configuration for the ``declarative_validator`` loggers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        service_name: Name of the service for log entries
        version: Version of the service
        enable_file_logging: Whether to enable file logging
        log_file_path: Path to log file (defaults to logs/declarative_validator.log)
    """
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": StructuredFormatter,
                "service_name": service_name,
                "version": version
            },
            "simple": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "structured",
                "stream": sys.stderr
            }
        },
        "loggers": {
            "declarative_validator": {
                "level": log_level,
                "handlers": ["console"],
                "propagate": False
            }
        }
    }

    if enable_file_logging:
        if log_file_path is None:
            log_file_path = str(Path("logs") / "declarative_validator.log")
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": log_level,
            "formatter": "structured",
            "filename": log_file_path,
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
            "encoding": "utf8"
        }
        config["loggers"]["declarative_validator"]["handlers"].append("file")

    logging.config.dictConfig(config)


def setup_logging_from_config() -> None:
    """Setup logging from the ``logging`` section of the global configuration."""
    from . import __version__
    from .config_manager import get_config_manager

    logging_config = get_config_manager().config.logging
    setup_logging(
        log_level=logging_config.level,
        version=__version__,
        enable_file_logging=logging_config.enable_file_logging,
        log_file_path=logging_config.log_file_path,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: str, message: str, **context) -> None:
    """
    Log a message with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        **context: Additional context fields to include in log
    """
    levelno = getattr(logging, level.upper())
    if not logger.isEnabledFor(levelno):
        return

    logger.log(levelno, message, extra={"context": context}, stacklevel=2)
