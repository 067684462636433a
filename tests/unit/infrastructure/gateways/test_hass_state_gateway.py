from __future__ import annotations

import httpx
import pytest

from hass_relay.infrastructure.gateways.hass_state_gateway import HassStateGateway


class _StubResponse:
    def __init__(self, status_code: int, text: str = ""):
        self.status_code = status_code
        self.text = text

    def raise_for_status(self) -> None:
        if not 200 <= self.status_code < 300:
            request = httpx.Request("GET", "http://hass/api/states/x")
            response = httpx.Response(self.status_code, request=request, text="error")
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    def __init__(self, response: _StubResponse):
        self._response = response
        self.requests: list[dict] = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, headers: dict):
        self.requests.append({"method": "GET", "url": url, "headers": headers})
        return self._response

    async def post(self, url: str, headers: dict, content: str):
        self.requests.append(
            {"method": "POST", "url": url, "headers": headers, "content": content}
        )
        return self._response


def _install(monkeypatch, client) -> list[dict]:
    created: list[dict] = []

    def _factory(**kwargs):
        created.append(kwargs)
        return client

    monkeypatch.setattr("httpx.AsyncClient", _factory)
    return created


@pytest.mark.asyncio
async def test_get_state_success(monkeypatch) -> None:
    client = _StubAsyncClient(_StubResponse(200, '{"state":"on"}'))
    created = _install(monkeypatch, client)

    gateway = HassStateGateway("https://hass:8123/", "secret", timeout=5.0)
    response = await gateway.get_state("switch.lamp")

    assert response.ok
    assert response.body == '{"state":"on"}'
    request = client.requests[0]
    assert request["url"] == "https://hass:8123/api/states/switch.lamp"
    assert request["headers"] == {"Authorization": "Bearer secret"}
    assert created == [{"timeout": 5.0, "verify": True}]


@pytest.mark.asyncio
async def test_post_state_sends_body_verbatim(monkeypatch) -> None:
    client = _StubAsyncClient(_StubResponse(201, "{}"))
    _install(monkeypatch, client)

    gateway = HassStateGateway("https://hass:8123", "secret")
    response = await gateway.post_state("input_text.mqtt_buffer_1", '{"state":"x"}')

    assert response.ok
    assert response.status_code == 201
    request = client.requests[0]
    assert request["content"] == '{"state":"x"}'
    assert request["headers"]["Content-Type"] == "application/json"
    assert request["headers"]["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_get_state_http_error_returns_failed_response(monkeypatch) -> None:
    _install(monkeypatch, _StubAsyncClient(_StubResponse(404, "not found")))

    gateway = HassStateGateway("https://hass:8123", "secret")
    response = await gateway.get_state("switch.missing")

    assert not response.ok
    assert response.status_code == 404
    assert response.body == ""


@pytest.mark.asyncio
async def test_request_error_returns_unreached_response(monkeypatch) -> None:
    class _FailingClient:
        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return None

        async def get(self, url, headers):
            raise httpx.ConnectError("boom")

    _install(monkeypatch, _FailingClient())

    gateway = HassStateGateway("https://hass:8123", "secret")
    response = await gateway.get_state("switch.lamp")

    assert response.status_code is None
    assert not response.ok
    assert not response.reached_hub


@pytest.mark.asyncio
async def test_ping_uses_api_root(monkeypatch) -> None:
    client = _StubAsyncClient(_StubResponse(200, '{"message":"API running."}'))
    _install(monkeypatch, client)

    gateway = HassStateGateway("https://hass:8123", "secret", verify_ssl=False)

    assert await gateway.ping() is True
    assert client.requests[0]["url"] == "https://hass:8123/api/"


@pytest.mark.asyncio
async def test_ping_reports_unauthorized(monkeypatch) -> None:
    _install(monkeypatch, _StubAsyncClient(_StubResponse(401)))

    gateway = HassStateGateway("https://hass:8123", "bad-token")

    assert await gateway.ping() is False
