from __future__ import annotations

from time import perf_counter
from typing import Any, Awaitable, Callable, TypeVar

import structlog


T = TypeVar("T")


async def instrument_upstream_call(*, operation: str, fn: Callable[[], Awaitable[T]], **fields: Any) -> T:
    """Time an awaited call and emit a structured log event."""

    log = structlog.get_logger("verify")
    start = perf_counter()
    try:
        result = await fn()
    except Exception:
        elapsed_ms = (perf_counter() - start) * 1000.0
        log.exception(
            "verify_call_failed",
            operation=operation,
            elapsed_ms=round(elapsed_ms, 2),
            **fields,
        )
        raise

    elapsed_ms = (perf_counter() - start) * 1000.0
    log.info(
        "verify_call",
        operation=operation,
        elapsed_ms=round(elapsed_ms, 2),
        **fields,
    )
    return result
