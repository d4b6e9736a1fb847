"""
基础设施层：日志、异常、配置、本地存储。
"""

from .exceptions import (
    PortalException,
    ConfigError,
    ValidationError,
    RequestError,
    GuardRejection,
    StorageError,
    handle_errors,
    handle_async_errors,
)
from .logging import LoggerManager, get_logger, set_log_level
from .config import PortalSettings, get_settings, reset_settings
from .storage import LocalStorage, TOKEN_KEY, USER_KEY

__all__ = [
    "PortalException",
    "ConfigError",
    "ValidationError",
    "RequestError",
    "GuardRejection",
    "StorageError",
    "handle_errors",
    "handle_async_errors",
    "LoggerManager",
    "get_logger",
    "set_log_level",
    "PortalSettings",
    "get_settings",
    "reset_settings",
    "LocalStorage",
    "TOKEN_KEY",
    "USER_KEY",
]
