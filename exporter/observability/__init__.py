"""Observability helpers.

Request IDs + structlog contextvars, timing of verification API calls, and the
Prometheus registry that the scrape endpoint renders.
"""
