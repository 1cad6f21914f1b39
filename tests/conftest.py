from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from exporter.config import get_settings
from exporter.main import create_app
from exporter.verify.client import set_http_client


SUMMARY_PAYLOAD = {
    "total_attempts": 100,
    "total_converted": 80,
    "total_unconverted": 20,
    "conversion_rate_percentage": "80.0",
}


class MockVerifyApi:
    """Stands in for verify.twilio.com; records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._handler: Callable[[httpx.Request], httpx.Response] = self.respond_json(SUMMARY_PAYLOAD)

    @staticmethod
    def respond_json(payload: dict, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
        return lambda _request: httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))

    def set_response(self, status_code: int, body: str) -> None:
        self._handler = lambda _request: httpx.Response(status_code, text=body)

    def set_summary(self, payload: dict) -> None:
        self._handler = self.respond_json(payload)

    def set_unreachable(self) -> None:
        def _refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

        self._handler = _refuse

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_NAME", "exporter-tests")
    monkeypatch.setenv("SID", "AC123")
    monkeypatch.setenv("TOKEN", "secret-token")
    monkeypatch.delenv("VERIFY_BASE_URL", raising=False)
    for name in ("VERIFY_DATE_CREATED_AFTER", "VERIFY_TIMEOUT_SECONDS", "HOST", "PORT", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()

    yield

    set_http_client(None)
    get_settings.cache_clear()


@pytest.fixture
def verify_api() -> MockVerifyApi:
    api = MockVerifyApi()
    set_http_client(httpx.AsyncClient(transport=httpx.MockTransport(api)))
    return api


@pytest.fixture
def exporter_app(verify_api: MockVerifyApi) -> FastAPI:
    return create_app()


@pytest.fixture
async def api_client(exporter_app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=exporter_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
