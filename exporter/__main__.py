from __future__ import annotations

import argparse

import uvicorn

from exporter.config import get_settings
from exporter.observability.logging import configure_logging


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Twilio Verify Prometheus exporter")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    args = parser.parse_args()

    configure_logging(settings.log_level, settings.log_format)
    uvicorn.run("exporter.main:app", host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
