"""Logging setup for the request_store logger hierarchy.

Library modules only create loggers with `logging.getLogger(__name__)`. Applications that
want request_store output without configuring logging themselves can call
`configure_request_store_logging()`; it touches the "request_store" logger only and leaves
the root logger and every other library alone.
"""

import logging
from typing import Optional, TextIO, Union

from request_store.settings import Settings

PACKAGE_LOGGER_NAME = "request_store"

LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"

# Used when LOG_LEVEL is not set
DEFAULT_LOG_LEVEL = "WARNING"

_LOCAL_HANDLER_FLAG = "_request_store_local"


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = Settings().get_log_level(default=DEFAULT_LOG_LEVEL)
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Invalid log level '{level}'")
    return resolved


def _local_handler(package_logger: logging.Logger) -> Optional[logging.StreamHandler]:
    for handler in package_logger.handlers:
        if getattr(handler, _LOCAL_HANDLER_FLAG, False):
            return handler
    return None


def configure_request_store_logging(
    level: Optional[Union[int, str]] = None,
    *,
    stream: Optional[TextIO] = None,
    propagate: bool = False,
) -> logging.Logger:
    """
    Send request_store log records to a stream.

    Safe to call repeatedly: the handler installed by the first call is reused, with its
    stream swapped when a new one is given.

    Args:
        level: Level name or number. Defaults to LOG_LEVEL, then WARNING.
        stream: Destination for the handler; stderr when omitted.
        propagate: Whether records also reach the root logger's handlers.

    Returns:
        The "request_store" logger.

    Raises:
        ValueError: If the level is not a known logging level.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(_resolve_level(level))
    package_logger.propagate = propagate

    handler = _local_handler(package_logger)
    if handler is None:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(handler, _LOCAL_HANDLER_FLAG, True)
        package_logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)

    return package_logger
