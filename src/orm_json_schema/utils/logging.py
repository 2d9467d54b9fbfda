"""Structured logging framework using structlog.

This module provides centralized logging configuration with:
- ISO-8601 timestamps
- JSON rendering for structured logs
- Context binding support
- Dual output (stdout + optional file logging)

Configuration is loaded from orm_json_schema.config.settings:
- ORM_SCHEMA_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL. Default: INFO
- ORM_SCHEMA_LOG_TO_FILE: Enable file logging. Default: disabled
- ORM_SCHEMA_LOG_FILE_DIR: Directory for log files. Default: logs/

Usage:
    >>> from orm_json_schema.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.warning("unsupported_column_type", column_type="geometry")
"""

import logging
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.types import Processor

from orm_json_schema.config import get_settings


def _get_log_level() -> int:
    """Get log level from settings.

    Returns:
        Logging level constant (e.g., logging.INFO, logging.DEBUG)
    """
    return getattr(logging, get_settings().log_level, logging.INFO)


def _get_log_file_path() -> Path:
    """Get the log file path with date-based naming."""
    log_dir = Path(get_settings().log_file_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # Format: orm-json-schema-YYYYMMDD.log
    date_str = datetime.now().strftime("%Y%m%d")
    return log_dir / f"orm-json-schema-{date_str}.log"


def _configure_structlog() -> None:
    """Configure structlog with JSON rendering.

    Sets up:
    - ISO-8601 timestamps
    - Logger name
    - Log level
    - JSON renderer
    - Dual output (stdout + optional file)
    """
    level = _get_log_level()

    logging.basicConfig(format="%(message)s", level=level, handlers=[])

    stdout_handler = logging.StreamHandler()
    stdout_handler.setLevel(level)
    logging.root.addHandler(stdout_handler)

    if get_settings().log_to_file:
        file_handler = TimedRotatingFileHandler(
            filename=str(_get_log_file_path()),
            when="midnight",
            interval=1,
            backupCount=30,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        logging.root.addHandler(file_handler)

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog on module import
_configure_structlog()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        A structlog BoundLogger configured with JSON rendering

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("schema_set_built", models=3)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Example:
        >>> logger = bind_context(model="User", step="associations")
        >>> logger.debug("association_resolved", accessor="posts")
    """
    return structlog.get_logger().bind(**kwargs)
