from __future__ import annotations

from fastapi import Depends, Request

from exporter.config import Settings, get_settings
from exporter.observability.metrics import VerificationMetrics
from exporter.verify.client import VerifyClient


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()


def get_verification_metrics(request: Request) -> VerificationMetrics:
    return request.app.state.metrics


def get_verify_client(settings: Settings = Depends(get_app_settings)) -> VerifyClient:
    # Raises ConfigError for this request only when credentials are missing.
    return VerifyClient(
        settings.credentials(),
        base_url=settings.verify_base_url,
        timeout_seconds=settings.verify_timeout_seconds,
    )
