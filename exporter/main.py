from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from exporter.api.health import router as health_router
from exporter.api.metrics import router as metrics_router
from exporter.config import Settings, get_settings
from exporter.errors import ExporterError
from exporter.observability.logging import configure_logging
from exporter.observability.metrics import VerificationMetrics
from exporter.observability.middleware import RequestContextMiddleware
from exporter.verify.client import close_http_client


async def _exporter_error_handler(request: Request, exc: ExporterError) -> JSONResponse:
    structlog.get_logger("scrape").warning("scrape_failed", error=exc.error, reason=str(exc))
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build an app with its own gauge registry.

    ``settings`` pins configuration for this app; otherwise the cached
    environment settings are read on each request.
    """

    app = FastAPI(title="Verify Exporter", version="0.1.0")
    app.state.settings = settings
    app.state.metrics = VerificationMetrics()

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(ExporterError, _exporter_error_handler)
    app.include_router(health_router)
    app.include_router(metrics_router)

    @app.on_event("startup")
    def _startup() -> None:
        current = app.state.settings or get_settings()
        configure_logging(current.log_level, current.log_format)
        missing = current.missing_credentials
        if missing:
            structlog.get_logger("startup").warning("credentials_missing", missing=missing)

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        await close_http_client()

    return app


app = create_app()
