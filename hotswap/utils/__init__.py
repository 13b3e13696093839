"""Logging sink and environment helpers"""
from .logging_sink import LoggerSink, NullSink, install_logger, trace
from .env import install_logger_from_env, load_env

__all__ = [
    "LoggerSink",
    "NullSink",
    "install_logger",
    "trace",
    "install_logger_from_env",
    "load_env",
]
