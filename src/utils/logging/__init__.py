"""
Structured logging configuration for the table override layer

Provides JSON-formatted or colored console logging with contextual fields.

Usage:
    from utils.logging import configure_from_env, get_logger

    # Setup logging (call once at application startup)
    configure_from_env()

    logger = get_logger(__name__)
    logger.info("Applied override", extra={"table_name": "rhnpackage"})
"""

from .config import configure_from_env, get_logger, setup_logging, shutdown_logging
from .formatters import ConsoleFormatter, JSONFormatter
from .handlers import ContextLogger

__all__ = [
    "setup_logging",
    "get_logger",
    "configure_from_env",
    "shutdown_logging",
    "JSONFormatter",
    "ConsoleFormatter",
    "ContextLogger",
]
