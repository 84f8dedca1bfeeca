"""Structured logging for the Blockstack client.

Each call takes a message plus keyword context (operation, status_code, url,
...). The context is attached to the record as attributes and appended to the
rendered line as ``key=value`` pairs, so the console handler and any handler
the application installs see the same fields.
"""
import logging
import sys
from functools import lru_cache
from typing import Any, Dict, Union

ExcInfo = Union[bool, BaseException]


class ContextFormatter(logging.Formatter):
    """Formatter that appends a record's ``context`` dict to the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context: Dict[str, Any] = getattr(record, "context", None) or {}
        if not context:
            return line
        rendered = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        head, sep, tail = line.partition("\n")
        return f"{head} [{rendered}]{sep}{tail}"


class BlockstackLogger:
    """Logger that carries keyword context on every record."""

    def __init__(self, name: str, level: int = logging.INFO):
        """Initialize logger with given name and level.

        Args:
            name: Logger name (will be prefixed with 'blockstack.')
            level: Logging level (default: INFO)
        """
        self.logger = logging.getLogger(f"blockstack.{name}")
        self.logger.setLevel(level)

        # Only add handler if none exists (avoid duplicate handlers)
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(level)
            handler.setFormatter(ContextFormatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(handler)

    @staticmethod
    def _extra(context: Dict[str, Any]) -> Dict[str, Any]:
        # Fields are set both individually (record.operation) and as one dict
        return {**context, "context": context}

    def debug(self, msg: str, **context):
        self.logger.debug(msg, extra=self._extra(context))

    def info(self, msg: str, **context):
        self.logger.info(msg, extra=self._extra(context))

    def warning(self, msg: str, exc_info: ExcInfo = False, **context):
        """Log a warning.

        Args:
            msg: Message to log
            exc_info: True, or the exception whose traceback to include
            **context: Fields attached to the record
        """
        self.logger.warning(msg, exc_info=exc_info, extra=self._extra(context))

    def error(self, msg: str, exc_info: ExcInfo = False, **context):
        """Log an error; see ``warning``."""
        self.logger.error(msg, exc_info=exc_info, extra=self._extra(context))


@lru_cache(maxsize=None)
def get_logger(name: str, level: int = logging.INFO) -> BlockstackLogger:
    """Get or create the logger for a module (cached per name).

    Example:
        >>> logger = get_logger('client')
        >>> logger.warning("search returned HTTP 429", operation="search", status_code=429)
    """
    return BlockstackLogger(name, level)


def set_log_level(level: int):
    """Set log level for all Blockstack loggers and their handlers."""
    logging.getLogger("blockstack").setLevel(level)
    for child in list(logging.Logger.manager.loggerDict):
        if child.startswith("blockstack."):
            child_logger = logging.getLogger(child)
            child_logger.setLevel(level)
            for handler in child_logger.handlers:
                handler.setLevel(level)
