"""
Logger wrapper carrying fixed context.

Provides ContextLogger, which attaches the same fields (for example the
table being processed) to every message it emits.
"""

import logging
from typing import Any


class ContextLogger:
    """
    Logger wrapper that adds contextual fields to all log messages

    Usage:
        logger = ContextLogger(__name__, table_name="rhnerrata")
        logger.warning("Pinned index missing", index="rhn_errata_adv_org_uq")
        # Output includes both table_name and index
    """

    def __init__(self, name: str, **context):
        """
        Initialize context logger

        Args:
            name: Logger name
            **context: Fields to include in all logs
        """
        self.logger = logging.getLogger(name)
        self.context = context

    def _log(self, level: int, msg: str, *args, exc_info=None, **kwargs) -> None:
        self.logger.log(
            level,
            msg,
            *args,
            exc_info=exc_info,
            extra={**self.context, **kwargs},
        )

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, exc_info=None, **kwargs) -> None:
        self._log(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def update_context(self, **context) -> None:
        """Add or replace context fields"""
        self.context.update(context)

    def get_context(self) -> dict[str, Any]:
        """Return a copy of the current context"""
        return self.context.copy()
