from __future__ import annotations

from threading import Lock

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from exporter.models.schemas import VerificationSummary


TOTAL_VERIFICATIONS = "total_verifications"
CONVERTED_VERIFICATIONS = "converted_verifications"
FAILED_VERIFICATIONS = "failed_verifications"

_GAUGE_HELP: dict[str, str] = {
    TOTAL_VERIFICATIONS: "Total number of verifications",
    CONVERTED_VERIFICATIONS: "Converted Verifications",
    FAILED_VERIFICATIONS: "Failed verifications",
}

_HANDLER_LABEL = "all"


class VerificationMetrics:
    """Thread-safe holder of the verification gauges (resets on restart).

    Each instance owns its own CollectorRegistry unless one is passed in.
    Registering twice on the same registry raises ValueError.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._lock = Lock()
        self.registry = registry if registry is not None else CollectorRegistry()
        self._gauges = {
            name: Gauge(name, help_text, labelnames=("handler",), registry=self.registry).labels(
                handler=_HANDLER_LABEL
            )
            for name, help_text in _GAUGE_HELP.items()
        }

    def set_gauge(self, name: str, value: float) -> None:
        gauge = self._gauges[name]
        with self._lock:
            gauge.set(value)

    def update_from_summary(self, summary: VerificationSummary) -> None:
        with self._lock:
            self._gauges[TOTAL_VERIFICATIONS].set(summary.total_attempts)
            self._gauges[FAILED_VERIFICATIONS].set(summary.total_unconverted)
            self._gauges[CONVERTED_VERIFICATIONS].set(summary.total_converted)

    def value(self, name: str) -> float:
        if name not in self._gauges:
            raise KeyError(name)
        with self._lock:
            sample = self.registry.get_sample_value(name, {"handler": _HANDLER_LABEL})
        return float(sample or 0.0)

    def render_all(self) -> bytes:
        with self._lock:
            return generate_latest(self.registry)
