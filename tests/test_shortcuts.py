"""模块级快捷函数测试。"""

from __future__ import annotations

import sys

import httpx
from loguru import logger
import pytest

import apifacade
from apifacade import shortcuts
from apifacade.common.exceptions import ConfigError, NotInitializedError
from apifacade.common.logging import setup_logging
from apifacade.envelope import Envelope

from .conftest import BASE_URL


@pytest.fixture(autouse=True)
async def reset_default_facade(monkeypatch):
    monkeypatch.setattr(shortcuts, "_default_facade", None)
    yield
    await shortcuts.shutdown()


def mock_transport():
    return httpx.MockTransport(
        lambda request: httpx.Response(200, json={"path": request.url.path, "query": str(request.url.query, "ascii")})
    )


VERB_CALLS = [
    ("get", ("/items",)),
    ("post", ("/items", {"name": "foo"})),
    ("put", ("/items/1", {"name": "foo"})),
    ("patch", ("/items/1", {"name": "foo"})),
    ("delete", ("/items/1",)),
]


@pytest.mark.parametrize(("verb", "args"), VERB_CALLS)
async def test_verbs_before_init_return_not_initialized(verb, args, log_records):
    result = await getattr(apifacade, verb)(*args)

    assert isinstance(result, shortcuts.NotInitialized)
    assert not isinstance(result, Envelope)
    assert not result
    assert isinstance(result.error, NotInitializedError)
    errors = [r for r in log_records if r["level"].name == "ERROR"]
    assert errors
    assert "init()" in errors[-1]["message"]


async def test_uninitialized_diagnostic_reaches_stderr(capsys):
    try:
        setup_logging("INFO")

        result = await apifacade.post("/items", {"name": "foo"})

        assert not result
        err = capsys.readouterr().err
        assert "ERROR" in err
        assert "No api app created!" in err
    finally:
        logger.remove()
        logger.add(sys.__stderr__)


async def test_get_facade_before_init_raises():
    with pytest.raises(NotInitializedError):
        shortcuts.get_facade()


async def test_init_then_call():
    apifacade.init(BASE_URL, {"headers": {"X-App": "demo"}}, transport=mock_transport())

    envelope = await apifacade.get("/items", {"a": 1, "b": "x"})

    assert isinstance(envelope, Envelope)
    assert envelope.message == "Success"
    assert envelope.body == {"path": "/items", "query": "a=1&b=x"}
    assert shortcuts.get_facade().client.headers["x-app"] == "demo"


async def test_all_verbs_after_init():
    apifacade.init(BASE_URL, transport=mock_transport())

    for verb, args in VERB_CALLS:
        envelope = await getattr(apifacade, verb)(*args)
        assert envelope.ok, verb


async def test_keyword_arguments():
    apifacade.init(BASE_URL, transport=mock_transport())

    envelope = await apifacade.get(route="/items", data={"page": 3}, config={"timeout": 5})

    assert envelope.body["query"] == "page=3"


async def test_reinit_replaces_and_warns(log_records):
    apifacade.init(BASE_URL, transport=mock_transport())
    first = shortcuts.get_facade()

    apifacade.init("https://other.example.com", transport=mock_transport())

    assert shortcuts.get_facade() is not first
    assert any(r["level"].name == "WARNING" for r in log_records)
    await first.aclose()


async def test_init_with_invalid_config_raises():
    with pytest.raises(ConfigError):
        apifacade.init(BASE_URL, {"baseURL": BASE_URL})

    with pytest.raises(NotInitializedError):
        shortcuts.get_facade()


async def test_shutdown_clears_default():
    apifacade.init(BASE_URL, transport=mock_transport())
    client = shortcuts.get_facade().client

    await apifacade.shutdown()

    assert client.is_closed
    assert not await apifacade.get("/items")
