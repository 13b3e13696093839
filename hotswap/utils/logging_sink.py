"""Process-wide logging sink used by the bridge.

The hosting process installs a sink once during startup. Until then every
log call lands on an inert ``NullSink``, so call sites never check for a
missing sink.
"""

from __future__ import annotations
import logging
from typing import Optional, Union

from hotswap.models import LoggingSink

logger = logging.getLogger(__name__)


class NullSink:
    """Sink that discards everything."""

    def log(self, level: int, message: str, cause: Optional[BaseException] = None) -> None:
        return None

    def is_loggable(self, level: int) -> bool:
        return False


class LoggerSink:
    """Adapts a stdlib ``logging.Logger`` to the ``LoggingSink`` protocol."""

    def __init__(self, target: logging.Logger):
        self.logger = target

    def log(self, level: int, message: str, cause: Optional[BaseException] = None) -> None:
        if cause is None:
            self.logger.log(level, message)
        else:
            self.logger.log(level, message, exc_info=cause)

    def is_loggable(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def __repr__(self) -> str:
        return f"<LoggerSink: {self.logger.name}>"


_NULL_SINK = NullSink()
_sink: LoggingSink = _NULL_SINK


def install_logger(sink: Union[LoggingSink, logging.Logger, None]) -> LoggingSink:
    """Install the process-wide sink and return it.

    Accepts a ``LoggingSink`` or a ``logging.Logger`` (wrapped in
    ``LoggerSink``). ``None`` puts the inert sink back. Meant to be called
    during single-threaded startup; a later call replaces the earlier sink.
    """
    global _sink
    if sink is None:
        _sink = _NULL_SINK
    elif isinstance(sink, logging.Logger):
        _sink = LoggerSink(sink)
    elif isinstance(sink, LoggingSink):
        _sink = sink
    else:
        raise TypeError(f"Cannot install {type(sink).__name__} as a logging sink")
    return _sink


def current_sink() -> LoggingSink:
    return _sink


def is_enabled(level: int) -> bool:
    """Ask the installed sink whether ``level`` is loggable. Never raises."""
    try:
        return bool(_sink.is_loggable(level))
    except Exception:
        logger.warning("Logging sink %r failed in is_loggable", _sink, exc_info=True)
        return False


def emit(level: int, message: str, cause: Optional[BaseException] = None) -> None:
    """Send one record to the installed sink. Never raises."""
    try:
        _sink.log(level, message, cause)
    except Exception:
        logger.warning("Logging sink %r failed to log %r", _sink, message, exc_info=True)


def trace(s1: object, *more: object) -> None:
    """Log one to four fragments, space separated, at DEBUG.

    Every fragment passed is rendered, ``None`` included.
    """
    if len(more) > 3:
        raise TypeError(f"trace() takes 1 to 4 fragments, got {len(more) + 1}")
    if not is_enabled(logging.DEBUG):
        return
    try:
        message = " ".join(str(s) for s in (s1, *more))
    except Exception:
        logger.warning("Could not format trace fragments", exc_info=True)
        return
    emit(logging.DEBUG, message)
