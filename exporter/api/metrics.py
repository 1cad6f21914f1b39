from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST

from exporter.api.dependencies import get_app_settings, get_verification_metrics, get_verify_client
from exporter.config import Settings
from exporter.observability.metrics import VerificationMetrics
from exporter.verify.client import VerifyClient

router = APIRouter(tags=["metrics"])


@router.get("/")
async def scrape(
    settings: Settings = Depends(get_app_settings),
    metrics: VerificationMetrics = Depends(get_verification_metrics),
    client: VerifyClient = Depends(get_verify_client),
) -> Response:
    summary = await client.fetch_summary(settings.verify_date_created_after, None)

    # All three gauges move together, or not at all.
    metrics.update_from_summary(summary)
    return Response(content=metrics.render_all(), media_type=CONTENT_TYPE_LATEST)
