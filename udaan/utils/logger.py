import logging
import json
import os
import sys
from pathlib import Path
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

from udaan.utils.context import get_correlation_id


# Extra fields copied into structured entries when passed via logger.info("msg", extra={...})
STRUCTURED_EXTRAS = (
    "method", "path", "status", "duration_ms", "client_ip", "error", "error_type",
    "source", "task", "titles", "record_id", "user_id", "attempt", "keys", "cache",
)


class CorrelationFilter(logging.Filter):
    """Attach the current request's correlation ID to every record"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = get_correlation_id()
        return True


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter with correlation ID injection"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if getattr(record, "correlation_id", None):
            entry["correlation_id"] = record.correlation_id

        for key in STRUCTURED_EXTRAS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)

        # Add source location for errors
        if record.levelno >= logging.WARNING:
            entry["location"] = f"{record.filename}:{record.lineno}"

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(entry, default=str)


class SimpleFormatter(logging.Formatter):
    """Human-readable formatter for local development"""

    def __init__(self):
        super().__init__(
            '%(asctime)s - %(levelname)s - [%(name)s] %(message)s',
            datefmt='%H:%M:%S'
        )


def setup_logger(name: str = "udaan", level: str = None) -> logging.Logger:
    """
    Setup application logger.

    JSON lines on stdout when LOG_FORMAT=json (production log drains),
    readable lines plus a rotating JSON file otherwise.
    """
    logger = logging.getLogger(name)

    # Don't add handlers if they already exist
    if logger.handlers:
        return logger

    level = level or os.getenv("LOG_LEVEL", "INFO")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    is_production = os.getenv("LOG_FORMAT") == "json"

    # Handler-level filter so records from child loggers get it too
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.addFilter(CorrelationFilter())
    console_handler.setFormatter(StructuredFormatter() if is_production else SimpleFormatter())
    logger.addHandler(console_handler)

    if not is_production and os.getenv("LOG_TO_FILE", "false").lower() == "true":
        try:
            log_dir = Path("logs")
            log_dir.mkdir(exist_ok=True)

            file_handler = RotatingFileHandler(
                log_dir / "udaan.log",
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.addFilter(CorrelationFilter())
            file_handler.setFormatter(StructuredFormatter())
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not setup file logging: {e}")

    return logger


# Create default logger instance
logger = setup_logger()


def get_logger(name: str = None) -> logging.Logger:
    """Get logger instance; named loggers are children of the app logger"""
    if name:
        return logger.getChild(name)
    return logger
