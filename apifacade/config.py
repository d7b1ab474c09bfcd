"""门面配置（Pydantic）。

ClientConfig 对应 init() 时的全局配置，RequestConfig 对应单次请求的覆盖项。
两者都接受 dict，未知字段会被拒绝。
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from apifacade.common.exceptions import ConfigError

ResponseType = Literal["json", "text", "bytes"]

ConfigT = TypeVar("ConfigT", bound=BaseModel)


class ClientConfig(BaseModel):
    """HTTP客户端配置。"""
    
    model_config = ConfigDict(extra="forbid")
    
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="默认请求头",
    )
    params: dict[str, str | int | float] = Field(
        default_factory=dict,
        description="默认查询参数",
    )
    timeout: float | None = Field(
        default=30.0,
        description="超时时间（秒），None 表示不限制",
    )
    with_credentials: bool = Field(
        default=False,
        description="未指定时请求是否携带 Cookie 与认证信息",
    )
    cookies: dict[str, str] = Field(
        default_factory=dict,
        description="初始 Cookie",
    )
    auth: tuple[str, str] | None = Field(
        default=None,
        description="Basic 认证（用户名, 密码）",
    )
    follow_redirects: bool = Field(
        default=True,
        description="是否跟随重定向",
    )
    verify: bool = Field(
        default=True,
        description="是否校验 TLS 证书",
    )
    max_connections: int = Field(
        default=100,
        description="最大连接数",
    )
    max_keepalive_connections: int = Field(
        default=20,
        description="最大保活连接数",
    )
    keepalive_expiry: float = Field(
        default=5.0,
        description="保活连接过期时间（秒）",
    )


class RequestConfig(BaseModel):
    """单次请求配置。
    
    值为 None 的字段沿用客户端配置。
    """
    
    model_config = ConfigDict(extra="forbid")
    
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="附加请求头",
    )
    params: dict[str, str | int | float] = Field(
        default_factory=dict,
        description="附加查询参数",
    )
    timeout: float | None = Field(
        default=None,
        description="本次请求超时时间（秒）",
    )
    with_credentials: bool | None = Field(
        default=None,
        description="本次请求是否携带 Cookie 与认证信息",
    )
    follow_redirects: bool | None = Field(
        default=None,
        description="本次请求是否跟随重定向",
    )
    response_type: ResponseType = Field(
        default="json",
        description="响应体解码方式",
    )


def coerce_config(model: type[ConfigT], value: ConfigT | dict[str, Any] | None) -> ConfigT:
    """把 None / dict / 模型实例统一转换为配置模型。
    
    Raises:
        ConfigError: 配置校验失败
    """
    if value is None:
        return model()
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        raise ConfigError(f"无效的{model.__name__}: {exc}") from exc


__all__ = [
    "ClientConfig",
    "RequestConfig",
    "ResponseType",
    "coerce_config",
]
