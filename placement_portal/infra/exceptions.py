"""
基础设施层 - 异常模块

定义标准异常类和错误处理机制。
"""

from typing import Any, Dict, Optional
from functools import wraps


class PortalException(Exception):
    """招聘门户基础异常类"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "UNKNOWN_ERROR"
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ConfigError(PortalException):
    """配置相关错误"""
    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, "CONFIG_ERROR", {"config_key": config_key, **kwargs})


class ValidationError(PortalException):
    """数据验证错误（服务端返回的数据不符合预期结构）"""
    def __init__(self, message: str, field: Optional[str] = None, value: Any = None, **kwargs) -> None:
        super().__init__(message, "VALIDATION_ERROR", {"field": field, "value": value, **kwargs})


class RequestError(PortalException):
    """API 请求失败：网络/解析错误或服务端返回的业务错误"""

    DEFAULT_MESSAGE = "Request failed"

    def __init__(
        self,
        message: str = DEFAULT_MESSAGE,
        status_code: Optional[int] = None,
        path: Optional[str] = None,
        **kwargs
    ) -> None:
        super().__init__(message, "REQUEST_ERROR", {"status_code": status_code, "path": path, **kwargs})
        self.status_code = status_code


class GuardRejection(PortalException):
    """客户端守卫拒绝：在发送任何请求之前短路"""
    def __init__(self, message: str, action: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, "GUARD_REJECTED", {"action": action, **kwargs})


class StorageError(PortalException):
    """本地持久化存储错误"""
    def __init__(self, message: str, file_path: Optional[str] = None, operation: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, "STORAGE_ERROR", {"file_path": file_path, "operation": operation, **kwargs})


# =============================================================================
# 错误处理装饰器
# =============================================================================

def handle_errors(logger=None):
    """
    统一错误处理装饰器

    Args:
        logger: 日志记录器，如果不提供则使用默认日志器
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            _logger = logger
            if _logger is None:
                from .logging import get_logger
                _logger = get_logger(__name__)
            try:
                return func(*args, **kwargs)
            except PortalException as e:
                _logger.error(f"业务异常 [{e.error_code}]: {e.message}", extra={"details": e.details})
                raise
            except Exception as e:
                error = PortalException(f"未知错误: {str(e)}", "SYSTEM_ERROR")
                _logger.error(f"未处理异常: {str(e)}", exc_info=True)
                raise error from e
        return wrapper
    return decorator


def handle_async_errors(logger=None):
    """
    异步版本的统一错误处理装饰器
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            _logger = logger
            if _logger is None:
                from .logging import get_logger
                _logger = get_logger(__name__)
            try:
                return await func(*args, **kwargs)
            except PortalException as e:
                _logger.error(f"异步业务异常 [{e.error_code}]: {e.message}", extra={"details": e.details})
                raise
            except Exception as e:
                error = PortalException(f"异步未知错误: {str(e)}", "SYSTEM_ERROR")
                _logger.error(f"异步未处理异常: {str(e)}", exc_info=True)
                raise error from e
        return wrapper
    return decorator

