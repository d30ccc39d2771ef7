"""Logging helpers that keep configuration consistent across modules."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional, Union

ROOT_LOGGER_NAME = "chat_markup"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_library_logging(
    *,
    level: Union[int, str] = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    handlers: Optional[Iterable[logging.Handler]] = None,
) -> logging.Logger:
    """Return the package logger configured with the common format."""

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(_coerce_level(level))
    logger.handlers.clear()

    if handlers:
        for handler in handlers:
            handler.setFormatter(logging.Formatter(fmt))
            logger.addHandler(handler)
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def configure_from(config: Any, *, handlers: Optional[Iterable[logging.Handler]] = None) -> logging.Logger:
    """Apply the ``log_level`` of a loaded ``MarkupConfig`` to the package logger."""

    return configure_library_logging(level=config.log_level, handlers=handlers)


def get_logger(name: str) -> logging.Logger:
    """Shortcut that returns a namespaced child logger."""

    parent = logging.getLogger(ROOT_LOGGER_NAME)
    return parent.getChild(name)


@contextmanager
def timed(
    logger: logging.Logger,
    action: str,
    *,
    level: int = logging.DEBUG,
    extra: Optional[Dict[str, Any]] = None,
) -> Iterator[None]:
    """
    Log elapsed time around an action.

    Usage:
        with timed(logger, "render-transcript", extra={"messages": 40}):
            presenter.present_all(messages)
    """
    start = time.monotonic()
    try:
        yield
    except Exception:
        elapsed = time.monotonic() - start
        msg = f"{action} failed after {elapsed:.3f}s"
        if extra:
            logger.exception("%s | extra=%r", msg, extra)
        else:
            logger.exception(msg)
        raise
    else:
        elapsed = time.monotonic() - start
        msg = f"{action} completed in {elapsed:.3f}s"
        if extra:
            logger.log(level, "%s | extra=%r", msg, extra)
        else:
            logger.log(level, msg)


__all__ = ["ROOT_LOGGER_NAME", "configure_from", "configure_library_logging", "get_logger", "timed"]
