"""Tests for HTTP status mapping and JSON requests."""

import httpx
import pytest

from cookly.fridge.network import ApiError, NetworkError, error_for_status, request_json


@pytest.mark.parametrize(
    "status, expected",
    [
        (200, None),
        (204, None),
        (299, None),
        (401, NetworkError.UNAUTHORIZED),
        (408, NetworkError.REQUEST_TIMEOUT),
        (409, NetworkError.CONFLICT),
        (413, NetworkError.PAYLOAD_TOO_LARGE),
        (429, NetworkError.TOO_MANY_REQUESTS),
        (500, NetworkError.SERVER_ERROR),
        (503, NetworkError.SERVER_ERROR),
        (404, NetworkError.UNKNOWN),
        (302, NetworkError.UNKNOWN),
    ],
)
def test_error_for_status(status, expected):
    assert error_for_status(status) == expected


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_request_json_success():
    async with _client(lambda r: httpx.Response(200, json={"ok": True})) as client:
        assert await request_json(client, "GET", "https://example.test/") == {"ok": True}


@pytest.mark.asyncio
async def test_request_json_status_error():
    async with _client(lambda r: httpx.Response(429)) as client:
        with pytest.raises(ApiError) as exc_info:
            await request_json(client, "GET", "https://example.test/")
    assert exc_info.value.error == NetworkError.TOO_MANY_REQUESTS
    assert exc_info.value.status_code == 429
    assert "HTTP 429" in str(exc_info.value)


@pytest.mark.asyncio
async def test_request_json_bad_body():
    async with _client(lambda r: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(ApiError) as exc_info:
            await request_json(client, "GET", "https://example.test/")
    assert exc_info.value.error == NetworkError.SERIALIZATION


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc, expected",
    [
        (httpx.ConnectError("no route"), NetworkError.NO_INTERNET),
        (httpx.ReadTimeout("slow"), NetworkError.REQUEST_TIMEOUT),
        (httpx.RemoteProtocolError("bad"), NetworkError.UNKNOWN),
    ],
)
async def test_request_json_transport_errors(exc, expected):
    def handler(request):
        raise exc

    async with _client(handler) as client:
        with pytest.raises(ApiError) as exc_info:
            await request_json(client, "GET", "https://example.test/")
    assert exc_info.value.error == expected
    assert exc_info.value.status_code is None
