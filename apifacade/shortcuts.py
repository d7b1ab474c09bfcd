"""模块级快捷函数。

"配置一次，多处调用"：在入口文件调用 init() 创建默认门面，之后在任意位置
直接使用 get/post/put/patch/delete。

使用示例:
    import apifacade

    apifacade.init("https://api.example.com", {"timeout": 10})

    envelope = await apifacade.get("/items", {"page": 1})

未调用 init() 时，动词函数不会抛出异常，也不会返回信封，而是记录一条
错误日志并返回 NotInitialized。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from apifacade.common.exceptions import NotInitializedError
from apifacade.common.logging import logger
from apifacade.config import ClientConfig, RequestConfig
from apifacade.envelope import Envelope
from apifacade.facade import QueryData, RequestFacade

_default_facade: RequestFacade | None = None


@dataclass(frozen=True)
class NotInitialized:
    """默认门面未初始化时动词函数的返回值。"""

    error: NotInitializedError = field(default_factory=NotInitializedError)

    @property
    def message(self) -> str:
        return self.error.message

    def __bool__(self) -> bool:
        return False


def init(
    base_url: str,
    config: ClientConfig | dict[str, Any] | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """创建默认门面，应在入口文件中调用一次。

    Args:
        base_url: 基础URL（如 "https://api.example.com"）
        config: 客户端配置覆盖项（headers、timeout、with_credentials 等）
        transport: 自定义传输层（可选）

    Raises:
        ConfigError: 配置无效
    """
    global _default_facade
    facade = RequestFacade.create(base_url, config, transport=transport)
    if _default_facade is not None:
        logger.warning(f"默认门面已存在，将被替换: {_default_facade!r} -> {facade!r}")
    _default_facade = facade


def get_facade() -> RequestFacade:
    """获取默认门面。

    Raises:
        NotInitializedError: 尚未调用 init()
    """
    if _default_facade is None:
        raise NotInitializedError()
    return _default_facade


async def shutdown() -> None:
    """关闭并移除默认门面。"""
    global _default_facade
    facade, _default_facade = _default_facade, None
    if facade is not None:
        await facade.aclose()


def _not_initialized() -> NotInitialized:
    result = NotInitialized()
    logger.error(result.message)
    return result


async def get(
    route: str,
    data: QueryData | None = None,
    config: RequestConfig | dict[str, Any] | None = None,
) -> Envelope | NotInitialized:
    """GET请求，data 会被转换为查询字符串。"""
    if _default_facade is None:
        return _not_initialized()
    return await _default_facade.get(route, data, config)


async def post(
    route: str,
    data: Any = None,
    config: RequestConfig | dict[str, Any] | None = None,
) -> Envelope | NotInitialized:
    """POST请求。"""
    if _default_facade is None:
        return _not_initialized()
    return await _default_facade.post(route, data, config)


async def put(
    route: str,
    data: Any = None,
    config: RequestConfig | dict[str, Any] | None = None,
) -> Envelope | NotInitialized:
    """PUT请求。"""
    if _default_facade is None:
        return _not_initialized()
    return await _default_facade.put(route, data, config)


async def patch(
    route: str,
    data: Any = None,
    config: RequestConfig | dict[str, Any] | None = None,
) -> Envelope | NotInitialized:
    """PATCH请求。"""
    if _default_facade is None:
        return _not_initialized()
    return await _default_facade.patch(route, data, config)


async def delete(
    route: str,
    config: RequestConfig | dict[str, Any] | None = None,
) -> Envelope | NotInitialized:
    """DELETE请求。"""
    if _default_facade is None:
        return _not_initialized()
    return await _default_facade.delete(route, config)


__all__ = [
    "NotInitialized",
    "delete",
    "get",
    "get_facade",
    "init",
    "patch",
    "post",
    "put",
    "shutdown",
]
