"""异常基类定义。

包内所有异常都继承自 FacadeError，且只会在构造阶段抛出；
请求阶段的失败一律转换为响应信封（Envelope）。
"""

from __future__ import annotations


class FacadeError(Exception):
    """异常基类。
    
    Attributes:
        message: 错误消息
        code: 错误代码
    """
    
    def __init__(self, message: str, code: str = "FACADE_ERROR") -> None:
        super().__init__(message)
        self.message = message
        self.code = code
    
    def __repr__(self) -> str:
        """字符串表示。"""
        return f"<{self.__class__.__name__} code={self.code} message={self.message}>"


class NotInitializedError(FacadeError):
    """默认门面尚未初始化。"""
    
    def __init__(
        self,
        message: str = "No api app created!, try creating one using init() in the root file",
    ) -> None:
        super().__init__(message, code="NOT_INITIALIZED")


class ConfigError(FacadeError):
    """配置无效。"""
    
    def __init__(self, message: str) -> None:
        super().__init__(message, code="INVALID_CONFIG")


__all__ = [
    "ConfigError",
    "FacadeError",
    "NotInitializedError",
]
