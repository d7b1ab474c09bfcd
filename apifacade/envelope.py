"""响应信封与结果分类。

所有动词函数的返回值都是 Envelope，形如::

    {"headers": {...}, "status": 200, "message": "Success", "body": ...}

classify() 把一次传输结果划分为四类 Outcome，build_envelope() 按类别
填充信封字段。
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import httpx
from pydantic import BaseModel, Field, PrivateAttr

from apifacade.config import ResponseType

SUCCESS_MESSAGE = "Success"
SERVER_ERROR_MESSAGE = "Something went wrong. Please try again later."
UNKNOWN_ERROR_MESSAGE = "Unknown error"


class Outcome(str, Enum):
    """传输结果分类。"""
    
    SUCCESS = "success"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    NETWORK_ERROR = "network_error"


class Envelope(BaseModel):
    """统一响应信封。
    
    Attributes:
        headers: 响应头（失败时为空）
        status: HTTP状态码，未收到响应时为 0
        message: "Success" 或错误描述
        body: 成功时为解码后的响应体；失败时为服务端错误体或 {}；5xx 时为 None
    """
    
    headers: dict[str, str] = Field(default_factory=dict)
    status: int = 0
    message: str = UNKNOWN_ERROR_MESSAGE
    body: Any = None
    
    _kind: Outcome = PrivateAttr(default=Outcome.NETWORK_ERROR)
    
    @property
    def kind(self) -> Outcome:
        """信封对应的结果分类。"""
        return self._kind
    
    @property
    def ok(self) -> bool:
        """是否成功。"""
        return self._kind is Outcome.SUCCESS
    
    def __repr__(self) -> str:
        return f"<Envelope kind={self._kind.value} status={self.status} message={self.message!r}>"


def classify(response: httpx.Response | None) -> Outcome:
    """根据响应划分结果类别。
    
    Args:
        response: 收到的响应；传输层失败时为 None
        
    Returns:
        Outcome: 结果分类
    """
    if response is None:
        return Outcome.NETWORK_ERROR
    if response.status_code >= 500:
        return Outcome.SERVER_ERROR
    if response.status_code >= 400:
        return Outcome.CLIENT_ERROR
    return Outcome.SUCCESS


def decode_body(response: httpx.Response, response_type: ResponseType = "json") -> Any:
    """解码响应体。
    
    json 模式下解析失败会回退为文本，空响应体解码为空字符串。
    """
    if response_type == "bytes":
        return response.content
    if response_type == "text" or not response.content:
        return response.text
    try:
        return response.json()
    except ValueError:
        return response.text


def _is_empty_payload(payload: Any) -> bool:
    """空字符串、None、False、0 视为没有错误体；空列表、空字典保留原样。"""
    if payload is None or payload is False:
        return True
    if isinstance(payload, (str, bytes)):
        return not payload
    return isinstance(payload, (int, float)) and payload == 0


def _error_message(error: BaseException | None) -> str | None:
    if error is None:
        return None
    return str(error) or None


def build_envelope(
    response: httpx.Response | None,
    error: BaseException | None = None,
    response_type: ResponseType = "json",
) -> Envelope:
    """把一次传输结果转换为信封。
    
    Args:
        response: 收到的响应；未收到响应时为 None
        error: 传输层异常（可选）
        response_type: 成功响应的解码方式（错误体总是按 JSON 解析）
        
    Returns:
        Envelope: 响应信封
    """
    kind = classify(response)
    
    if kind is Outcome.SUCCESS:
        envelope = Envelope(
            headers=dict(response.headers),
            status=response.status_code,
            message=SUCCESS_MESSAGE,
            body=decode_body(response, response_type),
        )
    elif kind is Outcome.SERVER_ERROR:
        # 服务端错误细节不返回给调用方
        envelope = Envelope(
            headers={},
            status=response.status_code,
            message=SERVER_ERROR_MESSAGE,
            body=None,
        )
    elif kind is Outcome.CLIENT_ERROR:
        # 错误体总是按 JSON 解析，以便读取服务端 message 字段
        payload = decode_body(response, "json")
        server_message = payload.get("message") if isinstance(payload, dict) else None
        envelope = Envelope(
            headers={},
            status=response.status_code,
            message=(
                str(server_message)
                if server_message
                else f"Request failed with status code {response.status_code}"
            ),
            body={} if _is_empty_payload(payload) else payload,
        )
    else:
        envelope = Envelope(
            headers={},
            status=0,
            message=_error_message(error) or UNKNOWN_ERROR_MESSAGE,
            body={},
        )
    
    envelope._kind = kind
    return envelope


__all__ = [
    "SERVER_ERROR_MESSAGE",
    "SUCCESS_MESSAGE",
    "UNKNOWN_ERROR_MESSAGE",
    "Envelope",
    "Outcome",
    "build_envelope",
    "classify",
    "decode_body",
]
