"""日志管理器 - 统一的日志配置。

提供：
- 统一的日志配置（控制台 + 可选文件滚动）
- 类专用日志器混入

注意：本包作为库使用时不会主动移除 loguru 的默认输出（stderr），
只有显式调用 setup_logging 时才会重新配置输出。
"""

from __future__ import annotations

import sys

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(
    log_level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "00:00",
    retention_days: int = 7,
) -> None:
    """设置日志配置。
    
    Args:
        log_level: 日志级别（DEBUG/INFO/WARNING/ERROR/CRITICAL）
        log_file: 日志文件路径（可选，不传则只输出到 stderr）
        rotation: 文件滚动策略（默认：每天 00:00）
        retention_days: 日志保留天数
    """
    log_level = log_level.upper()
    
    logger.remove()
    
    # 错误流输出
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=log_level,
        colorize=True,
    )
    
    if log_file:
        logger.add(
            log_file,
            rotation=rotation,
            retention=f"{retention_days} days",
            level=log_level,
            format=FILE_FORMAT,
            encoding="utf-8",
            enqueue=True,  # 异步写入
        )
    
    logger.debug(f"日志系统初始化完成，级别: {log_level}")


class LoggerMixin:
    """日志混入类。
    
    使用示例:
        class MyFacade(LoggerMixin):
            def do_something(self):
                self.logger.info("执行操作")
    """
    
    @property
    def logger(self):
        """获取类专用的日志器。"""
        class_name = self.__class__.__name__
        module_name = self.__class__.__module__
        return logger.bind(name=f"{module_name}.{class_name}")


__all__ = [
    "LoggerMixin",
    "logger",
    "setup_logging",
]
