"""Tests for the HTTP executors, run against in-process transports."""

from urllib.parse import parse_qsl, urlsplit

import httpx
import pytest
import requests

from binance_account.errors import (
    DeserializationError,
    HttpConnectionError,
    MissingCredentialsError,
    TransportError,
    TransportTimeoutError,
)
from binance_account.executors import (
    AiohttpHttpExecutor,
    HttpxHttpExecutor,
    RequestsHttpExecutor,
)
from binance_account.executors.interface import API_KEY_HEADER

SIGNED_QUERY = "recvWindow=5000&symbol=BTCUSDT&timestamp=1&signature=abc123"
FIREWALL_PAGE = b"<html>403 Forbidden</html>"


def httpx_executor(handler) -> HttpxHttpExecutor:
    executor = HttpxHttpExecutor(api_url="https://api.test", api_key="FOO")
    executor.client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return executor


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "executor_type", [HttpxHttpExecutor, AiohttpHttpExecutor, RequestsHttpExecutor]
)
async def test_executor_requires_api_key(executor_type):
    executor = executor_type(api_url="https://api.test")

    with pytest.raises(MissingCredentialsError):
        await executor.send_signed_request("GET", "/api/v3/account", SIGNED_QUERY)

    await executor.close()


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "POST", "DELETE"])
async def test_httpx_sends_query_and_api_key(method):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    executor = httpx_executor(handler)
    response = await executor.send_signed_request(
        method, "/api/v3/order", SIGNED_QUERY
    )
    await executor.close()

    assert response.status == 200
    assert response.body == {"ok": True}
    request = seen[0]
    assert request.method == method
    assert request.url.path == "/api/v3/order"
    assert request.url.query.decode() == SIGNED_QUERY
    assert request.headers[API_KEY_HEADER] == "FOO"
    assert request.headers["User-Agent"].startswith("BinanceAccountPythonSDK/")
    assert request.content == b""


@pytest.mark.asyncio
async def test_httpx_error_status_is_returned():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"code": -1121, "msg": "Invalid symbol."})

    executor = httpx_executor(handler)
    response = await executor.send_signed_request("GET", "/api/v3/order", SIGNED_QUERY)

    assert response.status == 400
    assert response.body["code"] == -1121


@pytest.mark.asyncio
async def test_httpx_invalid_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>")

    executor = httpx_executor(handler)

    with pytest.raises(DeserializationError) as exc_info:
        await executor.send_signed_request("GET", "/api/v3/account", SIGNED_QUERY)

    assert exc_info.value.status == 200


@pytest.mark.asyncio
async def test_httpx_non_json_error_body_is_kept_as_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, content=FIREWALL_PAGE)

    executor = httpx_executor(handler)
    response = await executor.send_signed_request(
        "GET", "/api/v3/account", SIGNED_QUERY
    )

    assert response.status == 403
    assert response.body == {"msg": FIREWALL_PAGE.decode()}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exception, error_type",
    [
        (httpx.ConnectTimeout("timed out"), TransportTimeoutError),
        (httpx.ReadTimeout("timed out"), TransportTimeoutError),
        (httpx.ConnectError("refused"), HttpConnectionError),
        (httpx.ReadError("reset"), HttpConnectionError),
        (httpx.UnsupportedProtocol("nope"), TransportError),
    ],
)
async def test_httpx_transport_errors(exception, error_type):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exception

    executor = httpx_executor(handler)

    with pytest.raises(error_type) as exc_info:
        await executor.send_signed_request("GET", "/api/v3/account", SIGNED_QUERY)

    # the signed query never ends up in error messages
    assert "signature" not in str(exc_info.value)


class FakeRequestsResponse:
    def __init__(self, status_code: int, content: bytes):
        self.status_code = status_code
        self.content = content
        self.headers = {"Content-Type": "application/json"}


@pytest.mark.asyncio
async def test_requests_sends_query_and_api_key(monkeypatch):
    executor = RequestsHttpExecutor(api_url="https://api.test", api_key="FOO")
    calls = []

    def fake_request(method, url, headers=None, timeout=None):
        calls.append((method, url, headers))
        return FakeRequestsResponse(200, b"{}")

    monkeypatch.setattr(executor.session, "request", fake_request)

    response = await executor.send_signed_request(
        "DELETE", "/api/v3/order", SIGNED_QUERY
    )
    await executor.close()

    assert response.status == 200
    assert response.body == {}
    method, url, headers = calls[0]
    assert method == "DELETE"
    parts = urlsplit(url)
    assert parts.path == "/api/v3/order"
    assert parts.query == SIGNED_QUERY
    assert dict(parse_qsl(parts.query))["signature"] == "abc123"
    assert headers[API_KEY_HEADER] == "FOO"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exception, error_type",
    [
        (requests.Timeout("timed out"), TransportTimeoutError),
        (requests.ConnectionError("refused"), HttpConnectionError),
        (requests.TooManyRedirects("loop"), TransportError),
    ],
)
async def test_requests_transport_errors(monkeypatch, exception, error_type):
    executor = RequestsHttpExecutor(api_url="https://api.test", api_key="FOO")

    def fake_request(*args, **kwargs):
        raise exception

    monkeypatch.setattr(executor.session, "request", fake_request)

    with pytest.raises(error_type):
        await executor.send_signed_request("GET", "/api/v3/account", SIGNED_QUERY)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, content, body",
    [
        (403, FIREWALL_PAGE, {"msg": FIREWALL_PAGE.decode()}),
        (503, b"  ", {}),
        (400, b'{"code": -1100, "msg": "Illegal characters"}', None),
    ],
)
async def test_requests_error_bodies(monkeypatch, status, content, body):
    executor = RequestsHttpExecutor(api_url="https://api.test", api_key="FOO")
    monkeypatch.setattr(
        executor.session,
        "request",
        lambda *args, **kwargs: FakeRequestsResponse(status, content),
    )

    response = await executor.send_signed_request(
        "GET", "/api/v3/account", SIGNED_QUERY
    )

    assert response.status == status
    if body is None:
        assert response.body["code"] == -1100
    else:
        assert response.body == body


@pytest.mark.asyncio
async def test_requests_non_json_success_body(monkeypatch):
    executor = RequestsHttpExecutor(api_url="https://api.test", api_key="FOO")
    monkeypatch.setattr(
        executor.session,
        "request",
        lambda *args, **kwargs: FakeRequestsResponse(200, b"<html>"),
    )

    with pytest.raises(DeserializationError) as exc_info:
        await executor.send_signed_request("GET", "/api/v3/account", SIGNED_QUERY)

    assert exc_info.value.status == 200


class FakeAiohttpResponse:
    def __init__(self, status: int, content: bytes):
        self.status = status
        self.content = content
        self.headers = {"Content-Type": "text/html"}

    async def read(self) -> bytes:
        return self.content

    async def __aenter__(self) -> "FakeAiohttpResponse":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None


class FakeAiohttpSession:
    def __init__(self, status: int, content: bytes):
        self.status = status
        self.content = content
        self.closed = False
        self.calls = []

    def request(self, method, url, headers=None):
        self.calls.append((method, url, headers))
        return FakeAiohttpResponse(self.status, self.content)

    async def close(self) -> None:
        self.closed = True


def aiohttp_executor(status: int, content: bytes) -> AiohttpHttpExecutor:
    executor = AiohttpHttpExecutor(api_url="https://api.test", api_key="FOO")
    executor._session = FakeAiohttpSession(status, content)  # type: ignore
    return executor


@pytest.mark.asyncio
async def test_aiohttp_sends_encoded_query_and_api_key():
    executor = aiohttp_executor(200, b'{"ok": true}')
    session = executor._session

    response = await executor.send_signed_request(
        "POST", "/api/v3/order", SIGNED_QUERY
    )
    await executor.close()

    assert response.status == 200
    assert response.body == {"ok": True}
    method, url, headers = session.calls[0]
    assert method == "POST"
    assert str(url) == f"https://api.test/api/v3/order?{SIGNED_QUERY}"
    assert headers[API_KEY_HEADER] == "FOO"
    assert session.closed


@pytest.mark.asyncio
async def test_aiohttp_non_json_error_body_is_kept_as_message():
    executor = aiohttp_executor(403, FIREWALL_PAGE)

    response = await executor.send_signed_request(
        "GET", "/api/v3/account", SIGNED_QUERY
    )

    assert response.status == 403
    assert response.body == {"msg": FIREWALL_PAGE.decode()}


@pytest.mark.asyncio
async def test_aiohttp_non_json_success_body():
    executor = aiohttp_executor(200, b"not json")

    with pytest.raises(DeserializationError) as exc_info:
        await executor.send_signed_request("GET", "/api/v3/account", SIGNED_QUERY)

    assert exc_info.value.status == 200
