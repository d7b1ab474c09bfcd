"""测试公共夹具。"""

from __future__ import annotations

from collections.abc import Callable

import httpx
from loguru import logger
import pytest

from apifacade.facade import RequestFacade

BASE_URL = "https://api.example.com"


class RecordingHandler:
    """记录收到的请求，并委托给响应函数。"""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self.respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def log_records():
    """收集 loguru 日志记录。"""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
async def make_facade():
    """按响应函数创建使用 MockTransport 的门面，测试结束后关闭。"""
    created: list[RequestFacade] = []

    def factory(respond, config=None):
        handler = RecordingHandler(respond)
        facade = RequestFacade.create(BASE_URL, config, transport=httpx.MockTransport(handler))
        created.append(facade)
        return facade, handler

    yield factory

    for facade in created:
        await facade.aclose()
