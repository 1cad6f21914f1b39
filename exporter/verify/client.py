"""Twilio Verify API client.

Only the Attempts Summary endpoint is used:
https://www.twilio.com/docs/verify/api/list-verification-attempts-summary
"""

from __future__ import annotations

import asyncio
import base64

import httpx
from pydantic import ValidationError

from exporter.errors import ApiError, ConfigError, DecodeError
from exporter.models.schemas import Credentials, VerificationSummary
from exporter.observability.upstream import instrument_upstream_call

API_ATTEMPTS_SUMMARY = "Attempts/Summary"

_http_client: httpx.AsyncClient | None = None


def set_http_client(client: httpx.AsyncClient | None) -> None:
    global _http_client
    _http_client = client


def get_http_client() -> httpx.AsyncClient:
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient()
    return _http_client


async def close_http_client() -> None:
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


class VerifyClient:
    def __init__(
        self,
        credentials: Credentials,
        *,
        base_url: str,
        timeout_seconds: float,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.credentials = credentials
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.timeout_seconds = timeout_seconds
        self.timeout = httpx.Timeout(timeout_seconds)
        self._http_client = http_client

    def basic_auth_header(self) -> str:
        creds = f"{self.credentials.account_sid}:{self.credentials.auth_token}"
        return "Basic " + base64.b64encode(creds.encode("utf-8")).decode("ascii")

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def fetch_summary(self, after_date: str, country_filter: str | None = None) -> VerificationSummary:
        """Fetch attempt statistics created after ``after_date``.

        ``country_filter`` is accepted but not sent to the provider.
        """

        _ = country_filter
        client = self._http_client or get_http_client()

        async def _get() -> httpx.Response:
            # httpx timeouts are per phase; a trickling body needs an overall deadline.
            request = client.get(
                self.url_for(API_ATTEMPTS_SUMMARY),
                params={"DateCreatedAfter": after_date},
                headers={"Authorization": self.basic_auth_header()},
                timeout=self.timeout,
            )
            return await asyncio.wait_for(request, timeout=self.timeout_seconds)

        try:
            response = await instrument_upstream_call(
                operation="attempts.summary",
                fn=_get,
                app_name=self.credentials.app_identifier,
            )
        except httpx.InvalidURL as exc:
            raise ConfigError(f"Invalid VERIFY_BASE_URL {self.base_url!r}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise ApiError(f"Verification API request failed: {exc!r}") from exc
        except asyncio.TimeoutError as exc:
            raise ApiError(f"Verification API request exceeded {self.timeout_seconds}s") from exc

        if response.status_code != 200:
            raise ApiError(
                f"Verification API returned {response.status_code}: {response.text}",
                upstream_status=response.status_code,
                body=response.text,
            )

        try:
            return VerificationSummary.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError(f"Unexpected Attempts Summary payload: {exc.error_count()} error(s)") from exc
