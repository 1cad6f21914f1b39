from __future__ import annotations

import re
import uuid
from time import perf_counter
from typing import Any, Callable

import structlog
from starlette.datastructures import Headers, MutableHeaders

REQUEST_ID_HEADER = "X-Request-ID"

# Scrapers and proxies may send their own id; anything odd is replaced.
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


def resolve_request_id(scope: dict[str, Any]) -> str:
    incoming = Headers(scope=scope).get(REQUEST_ID_HEADER)
    if incoming and _VALID_REQUEST_ID.match(incoming):
        return incoming
    return uuid.uuid4().hex


class RequestContextMiddleware:
    """Binds request_id for every log line of a request and echoes it back."""

    def __init__(self, app: Callable[..., Any], quiet_paths: frozenset[str] = frozenset({"/health"})) -> None:
        self.app = app
        self.quiet_paths = quiet_paths

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = resolve_request_id(scope)
        structlog.contextvars.bind_contextvars(request_id=request_id, path=scope.get("path"))

        started = perf_counter()
        status_code = 500

        async def send_with_request_id(message: dict[str, Any]) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            if scope.get("path") not in self.quiet_paths or status_code >= 400:
                structlog.get_logger("access").info(
                    "http_request",
                    method=scope.get("method"),
                    status_code=status_code,
                    elapsed_ms=round((perf_counter() - started) * 1000.0, 2),
                )
            structlog.contextvars.clear_contextvars()
