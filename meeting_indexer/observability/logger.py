"""
Logger configuration.

Provides a stdout logger with ISO timestamps for the pipeline, the
vectorization worker and the services.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

# Third-party loggers that flood INFO with per-request noise
_NOISY_LOGGERS = ("urllib3", "botocore", "httpx", "sqlalchemy.engine")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging with timestamped, named output on stdout.

    Safe to call more than once; existing root handlers are replaced.

    Args:
        level: Root log level name (DEBUG, INFO, WARNING, ...)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get configured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        logging.Logger: Configured logger instance
    """
    return logging.getLogger(name)
