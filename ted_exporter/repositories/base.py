from __future__ import annotations

from typing import Protocol

# Per-MTU series written by the ingestion translator.
WATTS = "watts"
UPDATES_PER_POST = "updates_per_post"
VOLTAGE = "voltage"

# Exporter self-metrics written by the HTTP layer.
POSTS = "posts"
DECODE_ERRORS = "decode_errors"
ACTIVATIONS = "activations"


class MetricSink(Protocol):
    """Label-partitioned counters and gauges, keyed by a single label value.

    Implementations must tolerate concurrent writes from request threads.
    """

    def increment(self, metric: str, key: str, amount: float = 1.0) -> None: ...

    def set(self, metric: str, key: str, value: float) -> None: ...
