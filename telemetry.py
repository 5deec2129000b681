from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Histogram


PROVIDER_CALLS = Counter(
    "internship_search_provider_calls_total",
    "Search provider attempts by outcome.",
    ["provider", "outcome"],
)

SEARCH_LATENCY = Histogram(
    "internship_search_latency_seconds",
    "Latency of search requests including provider fallback.",
    buckets=(0.5, 1, 2, 4, 6, 8, 10, 15, 30),
)

REFINE_TOTAL = Counter(
    "internship_refine_summaries_total",
    "Summaries produced by source.",
    ["source"],
)


class Telemetry:
    """Facade around Prometheus metrics helpers."""

    def record_provider_call(self, provider: str, outcome: str) -> None:
        PROVIDER_CALLS.labels(provider=provider, outcome=outcome).inc()

    def record_refine(self, source: str) -> None:
        REFINE_TOTAL.labels(source=source).inc()

    @contextmanager
    def measure_search(self) -> Iterator[None]:
        """Context manager to time a search request."""
        start = time.monotonic()
        try:
            yield
        finally:
            SEARCH_LATENCY.observe(time.monotonic() - start)
