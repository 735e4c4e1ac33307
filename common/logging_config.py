import logging
import os
import sys
from typing import Optional


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ControlCharacterFilter(logging.Filter):
    """Filter that escapes newlines in user-supplied values (node names, queries)."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Escape line breaks in the message and its arguments."""
        if isinstance(record.msg, str):
            record.msg = self._escape(record.msg)

        if hasattr(record, 'args') and record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._escape(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._escape(arg) for arg in record.args)

        return True

    def _escape(self, value):
        if isinstance(value, str):
            return value.replace('\r', '\\r').replace('\n', '\\n')
        return value


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration for a component.

    Module loggers created with get_logger(__name__) inside the component's
    package propagate to the logger configured here.

    Args:
        component_name: Name of the component (e.g., 'catalog', 'cli')
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or INFO

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO')

    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handler.setFormatter(formatter)
    handler.addFilter(ControlCharacterFilter())

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
