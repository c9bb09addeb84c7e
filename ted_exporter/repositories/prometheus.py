from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge

from ted_exporter.repositories.base import (
    ACTIVATIONS,
    DECODE_ERRORS,
    POSTS,
    UPDATES_PER_POST,
    VOLTAGE,
    WATTS,
)


class PrometheusMetricSink:
    def __init__(self, *, registry: CollectorRegistry) -> None:
        self._registry = registry
        # The gateway already reports a running total for watts, so the
        # series is exposed as a gauge that is set, never summed.
        self._gauges: dict[str, Gauge] = {
            WATTS: Gauge(
                "watts_used_by_mtu",
                "The watts used.",
                ["mtu"],
                registry=registry,
            ),
            VOLTAGE: Gauge(
                "mtuVoltage",
                "The last reported voltage.",
                ["mtu"],
                registry=registry,
            ),
        }
        self._counters: dict[str, Counter] = {
            UPDATES_PER_POST: Counter(
                "updates_per_post",
                "The number of updates per post.",
                ["mtu"],
                registry=registry,
            ),
            POSTS: Counter(
                "ted_posts",
                "Postings decoded, by gateway id.",
                ["gateway"],
                registry=registry,
            ),
            DECODE_ERRORS: Counter(
                "ted_decode_errors",
                "Request bodies that could not be decoded, by endpoint.",
                ["endpoint"],
                registry=registry,
            ),
            ACTIVATIONS: Counter(
                "ted_activations",
                "Activation handshakes answered, by gateway.",
                ["gateway"],
                registry=registry,
            ),
        }

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def increment(self, metric: str, key: str, amount: float = 1.0) -> None:
        self._counters[metric].labels(key).inc(amount)

    def set(self, metric: str, key: str, value: float) -> None:
        self._gauges[metric].labels(key).set(value)
