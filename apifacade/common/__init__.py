"""Common 层：日志系统与异常基类。"""

from .exceptions import ConfigError, FacadeError, NotInitializedError
from .logging import LoggerMixin, logger, setup_logging

__all__ = [
    "ConfigError",
    "FacadeError",
    "LoggerMixin",
    "NotInitializedError",
    "logger",
    "setup_logging",
]
