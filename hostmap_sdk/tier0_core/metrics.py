"""
hostmap_sdk.tier0_core.metrics
───────────────────────────────
Counters with standard naming and a service label.
Exported via a Prometheus /metrics endpoint when the embedding application
starts one.

Minimal stack: prometheus-client
Configure via: HOSTMAP_SERVICE_NAME, HOSTMAP_METRICS_PORT (default: 8001)
"""
from __future__ import annotations

from typing import Callable

from prometheus_client import Counter, start_http_server

# Standard label applied to every metric
_DEFAULT_LABELS = ["service"]


def _service_name() -> str:
    from hostmap_sdk.tier0_core.config import get_config
    return get_config().service_name


def counter(name: str, description: str, labels: list[str] | None = None) -> Callable:
    """
    Create a counter with the standard service label.

    Usage:
        registrations = counter("hostmap_registrations_total", "Host registrations", ["outcome"])
        registrations(outcome="committed").inc()
    """
    all_labels = _DEFAULT_LABELS + (labels or [])
    c = Counter(name, description, all_labels)

    def _counter(**extra_labels: str) -> Counter:
        return c.labels(service=_service_name(), **extra_labels)

    return _counter


def start_metrics_server(port: int | None = None):
    """
    Start the Prometheus HTTP metrics server on a dedicated port.
    Call once at application startup. Returns (server, thread).
    """
    from hostmap_sdk.tier0_core.config import get_config
    return start_http_server(port if port is not None else get_config().metrics_port)


# ── Subsystem metrics ─────────────────────────────────────────────────────────

registrations = counter(
    "hostmap_registrations_total",
    "Hostname registrations by outcome (committed, ignored)",
    ["outcome"],
)

resolver_lookups = counter(
    "hostmap_resolver_lookups_total",
    "Intercepted hostname resolutions by outcome (hit, negative, miss)",
    ["outcome"],
)


__all__ = ["counter", "start_metrics_server", "registrations", "resolver_lookups"]
