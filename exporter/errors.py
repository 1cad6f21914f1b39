"""Exporter errors and their HTTP mapping."""

from __future__ import annotations

from fastapi import status


class ExporterError(Exception):
    """Base class for errors that fail a single scrape."""

    error: str = "exporter_error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def to_payload(self) -> dict[str, str]:
        return {"error": self.error, "detail": str(self)}


class ConfigError(ExporterError):
    error = "configuration_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ApiError(ExporterError):
    """The verification API could not be reached or answered with a non-200 status."""

    error = "upstream_error"
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str, *, upstream_status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.upstream_status = upstream_status
        self.body = body

    def to_payload(self) -> dict[str, str]:
        # The upstream body stays in the logs.
        return {"error": self.error, "detail": "Verification API request failed"}


class DecodeError(ExporterError):
    error = "decode_error"
    status_code = status.HTTP_502_BAD_GATEWAY
