"""
Logging utilities for safe structured logging.

Keeps ``extra`` payloads printable regardless of what callers pass
(chunk lists, entity maps, UUIDs) and bounds error text stored in the
database.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

MAX_STORED_ERROR_LENGTH = 2000


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Convert any value to a bounded string for log context.

    Collections are summarised by size rather than dumped.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            val_str = value
        elif isinstance(value, (list, tuple, set)):
            val_str = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def truncate_error(message: str, limit: int = MAX_STORED_ERROR_LENGTH) -> str:
    """
    Bound an error message to fit ``last_error``/``error_message`` columns.

    Args:
        message: Error text
        limit: Maximum stored length

    Returns:
        str: Message cut to ``limit`` characters
    """
    return message[:limit] if len(message) > limit else message


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs attached as ``extra``
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    logger.log(level, message, extra=safe_context)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception with traceback and structured context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context.update(
        {
            "error_type": type(exc).__name__,
            "error_msg": safe_log_value(str(exc)),
        }
    )
    logger.error(message, exc_info=exc, extra=safe_context)
