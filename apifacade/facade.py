"""请求门面 - 基于 httpx 的统一响应封装。

特性：
- 依赖注入：包装一个显式创建的 httpx.AsyncClient
- 五个动词方法（GET/POST/PUT/PATCH/DELETE）
- 统一响应信封，动词方法永不抛出异常
- 凭据策略：按请求决定是否携带 Cookie 与认证信息

传输、TLS、连接池均由 httpx 负责，本层不做重试。
"""

from __future__ import annotations

from collections.abc import Mapping
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any

import httpx

from apifacade.common.logging import LoggerMixin
from apifacade.config import ClientConfig, RequestConfig, coerce_config
from apifacade.envelope import Envelope, Outcome, build_envelope

QueryData = Mapping[str, str | int | float]

# 请求失败时日志中保留的服务端响应长度
_LOGGED_BODY_LIMIT = 500


class _RejectAllPolicy(DefaultCookiePolicy):
    """客户端自带的 Cookie 罐不保存任何 Cookie，凭据统一由门面管理。"""

    def set_ok(self, cookie, request) -> bool:
        return False


def _origin(url: httpx.URL) -> tuple[str, str, int | None]:
    return url.scheme, url.host, url.port


def _body_kwargs(data: Any) -> dict[str, Any]:
    """选择请求体的编码方式。"""
    if data is None:
        return {}
    if isinstance(data, (bytes, bytearray, str)):
        return {"content": data}
    return {"json": data}


class RequestFacade(LoggerMixin):
    """请求门面。

    使用示例:
        # 自行创建客户端
        facade = RequestFacade.create(
            "https://api.example.com",
            {"headers": {"X-App": "demo"}, "timeout": 10},
        )
        envelope = await facade.get("/items", {"page": 1})
        if envelope.ok:
            print(envelope.body)

        # 注入已有客户端
        facade = RequestFacade(httpx.AsyncClient(base_url="https://api.example.com"))
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        with_credentials: bool = False,
        cookies: dict[str, str] | None = None,
    ) -> None:
        """初始化门面。

        客户端原有的 Cookie 会被移入门面自己的凭据罐，客户端的 Cookie 罐
        此后不再保存任何 Cookie；只有携带凭据的请求才会发送或更新凭据罐。

        Args:
            client: httpx 异步客户端
            with_credentials: 请求未指定凭据策略时的默认值
            cookies: 初始 Cookie（不传则沿用客户端已有的 Cookie）
        """
        self._client = client
        self._with_credentials = with_credentials
        self._cookies = httpx.Cookies(client.cookies)
        if cookies:
            self._cookies.update(cookies)
        client.cookies = CookieJar(policy=_RejectAllPolicy())

    @classmethod
    def create(
        cls,
        base_url: str,
        config: ClientConfig | dict[str, Any] | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> RequestFacade:
        """根据配置创建门面及其客户端。

        Args:
            base_url: 基础URL（如 "https://api.example.com"）
            config: 客户端配置
            transport: 自定义传输层（可选，测试时可传入 httpx.MockTransport）

        Returns:
            RequestFacade: 门面实例

        Raises:
            ConfigError: 配置无效
        """
        client_config = coerce_config(ClientConfig, config)
        client = httpx.AsyncClient(
            base_url=base_url,
            headers=client_config.headers,
            params=client_config.params,
            auth=client_config.auth,
            timeout=httpx.Timeout(client_config.timeout),
            follow_redirects=client_config.follow_redirects,
            verify=client_config.verify,
            limits=httpx.Limits(
                max_connections=client_config.max_connections,
                max_keepalive_connections=client_config.max_keepalive_connections,
                keepalive_expiry=client_config.keepalive_expiry,
            ),
            transport=transport,
        )
        return cls(
            client,
            with_credentials=client_config.with_credentials,
            cookies=client_config.cookies,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """底层 httpx 客户端。"""
        return self._client

    @property
    def cookies(self) -> httpx.Cookies:
        """凭据 Cookie 罐。"""
        return self._cookies

    async def get(
        self,
        route: str,
        data: QueryData | None = None,
        config: RequestConfig | dict[str, Any] | None = None,
    ) -> Envelope:
        """GET请求，data 作为查询参数。"""
        return await self._send("GET", route, config, query=data)

    async def post(
        self,
        route: str,
        data: Any = None,
        config: RequestConfig | dict[str, Any] | None = None,
    ) -> Envelope:
        """POST请求，默认携带凭据。"""
        return await self._send("POST", route, config, body=data, with_credentials=True)

    async def put(
        self,
        route: str,
        data: Any = None,
        config: RequestConfig | dict[str, Any] | None = None,
    ) -> Envelope:
        """PUT请求（整体替换）。"""
        return await self._send("PUT", route, config, body=data)

    async def patch(
        self,
        route: str,
        data: Any = None,
        config: RequestConfig | dict[str, Any] | None = None,
    ) -> Envelope:
        """PATCH请求（部分更新），默认携带凭据。"""
        return await self._send("PATCH", route, config, body=data, with_credentials=True)

    async def delete(
        self,
        route: str,
        config: RequestConfig | dict[str, Any] | None = None,
    ) -> Envelope:
        """DELETE请求，无请求体，默认携带凭据。"""
        return await self._send("DELETE", route, config, with_credentials=True)

    def _resolve_credentials(
        self,
        config: RequestConfig | dict[str, Any] | None,
        request_config: RequestConfig,
        verb_default: bool | None,
    ) -> bool:
        # 调用方未传配置时使用动词默认值，否则未指定的字段沿用客户端配置
        if config is None and verb_default is not None:
            return verb_default
        if request_config.with_credentials is not None:
            return request_config.with_credentials
        return self._with_credentials

    async def _send_once(
        self,
        request: httpx.Request,
        send_credentials: bool,
        with_auth: bool,
    ) -> httpx.Response:
        request.headers.pop("Cookie", None)
        if send_credentials:
            self._cookies.set_cookie_header(request)

        response = await self._client.send(
            request,
            auth=httpx.USE_CLIENT_DEFAULT if with_auth else None,
            follow_redirects=False,
        )
        if send_credentials:
            self._cookies.extract_cookies(response)
        return response

    async def _send_following(
        self,
        request: httpx.Request,
        send_credentials: bool,
        follow_redirects: bool,
    ) -> httpx.Response:
        """逐跳发送请求，每一跳都按凭据策略重新决定 Cookie。"""
        origin = _origin(request.url)
        response = await self._send_once(request, send_credentials, send_credentials)
        redirects = 0
        while follow_redirects and response.next_request is not None:
            if redirects >= self._client.max_redirects:
                raise httpx.TooManyRedirects(
                    "Exceeded maximum allowed redirects.",
                    request=response.next_request,
                )
            redirects += 1
            next_request = response.next_request
            await response.aclose()
            # 跨源跳转不再携带认证信息
            with_auth = send_credentials and _origin(next_request.url) == origin
            response = await self._send_once(next_request, send_credentials, with_auth)
        return response

    async def _send(
        self,
        method: str,
        route: str,
        config: RequestConfig | dict[str, Any] | None,
        *,
        query: QueryData | None = None,
        body: Any = None,
        with_credentials: bool | None = None,
    ) -> Envelope:
        """发送请求并转换为信封。

        Args:
            method: HTTP方法
            route: 路由（相对 base_url）
            config: 单次请求配置
            query: 查询参数
            body: 请求体
            with_credentials: 调用方未传配置时的凭据策略（None 表示沿用客户端配置）

        Returns:
            Envelope: 响应信封
        """
        try:
            request_config = coerce_config(RequestConfig, config)
            send_credentials = self._resolve_credentials(config, request_config, with_credentials)

            # 路由自带的查询参数 < 客户端参数 < 请求配置参数 < data
            url = httpx.URL(route)
            params = (
                self._client.params
                .merge(url.params)
                .merge(request_config.params)
                .merge(query or {})
            )
            request = self._client.build_request(
                method,
                url.copy_with(query=None),
                params=params or None,
                headers=request_config.headers or None,
                timeout=(
                    httpx.Timeout(request_config.timeout)
                    if request_config.timeout is not None
                    else httpx.USE_CLIENT_DEFAULT
                ),
                **_body_kwargs(body),
            )
            follow_redirects = (
                request_config.follow_redirects
                if request_config.follow_redirects is not None
                else self._client.follow_redirects
            )
            response = await self._send_following(request, send_credentials, follow_redirects)
        except httpx.HTTPError as exc:
            self.logger.warning(
                f"HTTP请求失败: {method} {route} | "
                f"错误: {type(exc).__name__}: {exc}"
            )
            return build_envelope(None, exc)
        except Exception as exc:
            self.logger.exception(
                f"HTTP请求异常: {method} {route} | "
                f"错误: {type(exc).__name__}: {exc}"
            )
            return build_envelope(None, exc)

        envelope = build_envelope(response, response_type=request_config.response_type)
        if envelope.kind is Outcome.SERVER_ERROR:
            self.logger.error(
                f"服务端错误: {method} {response.url} | "
                f"状态码: {response.status_code} | "
                f"响应: {response.text[:_LOGGED_BODY_LIMIT]}"
            )
        elif envelope.kind is Outcome.CLIENT_ERROR:
            self.logger.debug(
                f"客户端错误: {method} {response.url} | "
                f"状态码: {response.status_code} | 消息: {envelope.message}"
            )
        return envelope

    async def aclose(self) -> None:
        """关闭底层客户端。"""
        await self._client.aclose()
        self.logger.debug("HTTP客户端已关闭")

    async def __aenter__(self) -> RequestFacade:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"<RequestFacade base_url={self._client.base_url}>"


__all__ = [
    "QueryData",
    "RequestFacade",
]
