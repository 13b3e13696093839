import logging
import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .logging_sink import LoggerSink, install_logger

logger = logging.getLogger(__name__)

LOG_LEVEL_VAR = "HOTSWAP_LOG_LEVEL"
LOGGER_NAME_VAR = "HOTSWAP_LOGGER"
DEFAULT_LOGGER_NAME = "hotswap"


def load_env() -> None:
    """Load environment variables from a .env file found from the working directory.

    Variables already set in the environment win over the file.
    """
    load_dotenv(find_dotenv(usecwd=True))


def install_logger_from_env() -> Optional[LoggerSink]:
    """Install a ``LoggerSink`` driven by ``HOTSWAP_LOG_LEVEL`` / ``HOTSWAP_LOGGER``.

    Returns the installed sink, or None when no level is configured (the
    current sink is then left alone).
    """
    load_env()
    level_name = os.getenv(LOG_LEVEL_VAR, "").strip()
    if not level_name:
        return None

    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {level_name!r} in {LOG_LEVEL_VAR}")

    target = logging.getLogger(os.getenv(LOGGER_NAME_VAR) or DEFAULT_LOGGER_NAME)
    target.setLevel(level)
    sink = LoggerSink(target)
    install_logger(sink)
    logger.debug("Installed bridge logging sink %r at %s", sink, logging.getLevelName(level))
    return sink
