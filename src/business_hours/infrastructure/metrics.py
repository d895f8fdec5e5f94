"""
Application Metrics.

Provides Prometheus-compatible metrics for monitoring.
"""

import time
from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Optional, Tuple

from flask import Flask, Response, g, request


def _labels_key(labels: Dict[str, str]) -> str:
    """Create a unique, ordered key from labels."""
    if not labels:
        return ""
    return ",".join(f'{k}="{v}"' for k, v in sorted(labels.items()))


def _with_label(key: str, name: str, value: str) -> str:
    extra = f'{name}="{value}"'
    return f"{key},{extra}" if key else extra


@dataclass
class MetricValue:
    """A single metric value with labels."""
    value: float
    labels_key: str = ""
    timestamp: float = field(default_factory=time.time)


class Counter:
    """A monotonically increasing counter metric."""

    kind = "counter"

    def __init__(self, name: str, description: str) -> None:
        self.name = name
        self.description = description
        self._values: Dict[str, float] = defaultdict(float)
        self._lock = Lock()

    def inc(self, value: float = 1.0, **labels: str) -> None:
        """Increment the counter."""
        key = _labels_key(labels)
        with self._lock:
            self._values[key] += value

    def get(self, **labels: str) -> float:
        """Current value for a label set."""
        with self._lock:
            return self._values.get(_labels_key(labels), 0.0)

    def collect(self) -> List[MetricValue]:
        """Collect all values."""
        with self._lock:
            return [MetricValue(value=v, labels_key=k) for k, v in self._values.items()]

    def exposition_lines(self) -> List[str]:
        return [
            f"{self.name}{{{mv.labels_key}}} {mv.value}" if mv.labels_key
            else f"{self.name} {mv.value}"
            for mv in self.collect()
        ]


class Histogram:
    """A histogram metric for tracking distributions."""

    kind = "histogram"

    DEFAULT_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)

    def __init__(
        self,
        name: str,
        description: str,
        buckets: Tuple[float, ...] = DEFAULT_BUCKETS,
    ) -> None:
        self.name = name
        self.description = description
        self.buckets = buckets
        self._counts: Dict[str, Dict[float, int]] = defaultdict(lambda: defaultdict(int))
        self._sums: Dict[str, float] = defaultdict(float)
        self._totals: Dict[str, int] = defaultdict(int)
        self._lock = Lock()

    def observe(self, value: float, **labels: str) -> None:
        """Record an observation."""
        key = _labels_key(labels)
        with self._lock:
            self._sums[key] += value
            self._totals[key] += 1
            for bucket in self.buckets:
                if value <= bucket:
                    self._counts[key][bucket] += 1

    def count(self, **labels: str) -> int:
        """Number of observations for a label set."""
        with self._lock:
            return self._totals.get(_labels_key(labels), 0)

    def exposition_lines(self) -> List[str]:
        lines = []
        with self._lock:
            for key, total in self._totals.items():
                for bucket in self.buckets:
                    bucket_key = _with_label(key, "le", str(bucket))
                    lines.append(f"{self.name}_bucket{{{bucket_key}}} {self._counts[key][bucket]}")
                lines.append(f'{self.name}_bucket{{{_with_label(key, "le", "+Inf")}}} {total}')
                suffix = f"{{{key}}}" if key else ""
                lines.append(f"{self.name}_sum{suffix} {self._sums[key]}")
                lines.append(f"{self.name}_count{suffix} {total}")
        return lines


class MetricsRegistry:
    """Registry for all application metrics."""

    def __init__(self) -> None:
        # HTTP metrics
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
        )
        self.http_request_duration_seconds = Histogram(
            "http_request_duration_seconds",
            "HTTP request latency in seconds",
        )

        # Business metrics
        self.business_dates_computed_total = Counter(
            "business_dates_computed_total",
            "Total number of business dates computed",
        )

        # Holiday catalog metrics
        self.holiday_fetches_total = Counter(
            "holiday_fetches_total",
            "Total number of holiday catalog fetches",
        )
        self.holiday_fetch_duration_seconds = Histogram(
            "holiday_fetch_duration_seconds",
            "Holiday catalog fetch latency in seconds",
        )

    @property
    def all_metrics(self) -> list:
        return [
            self.http_requests_total,
            self.http_request_duration_seconds,
            self.business_dates_computed_total,
            self.holiday_fetches_total,
            self.holiday_fetch_duration_seconds,
        ]

    def to_prometheus_format(self) -> str:
        """Export metrics in Prometheus text format."""
        lines = []
        for metric in self.all_metrics:
            lines.append(f"# HELP {metric.name} {metric.description}")
            lines.append(f"# TYPE {metric.name} {metric.kind}")
            lines.extend(metric.exposition_lines())
        return "\n".join(lines) + "\n"


# Global metrics registry
_metrics: Optional[MetricsRegistry] = None


def get_metrics() -> MetricsRegistry:
    """Get global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics


def setup_metrics_middleware(app: Flask) -> None:
    """
    Setup Flask middleware for automatic HTTP metrics collection.

    Args:
        app: Flask application instance.
    """
    @app.before_request
    def before_request() -> None:
        g.metrics_start_time = time.time()

    @app.after_request
    def after_request(response):
        metrics = get_metrics()
        duration = time.time() - getattr(g, "metrics_start_time", time.time())
        endpoint = request.endpoint or "unknown"

        metrics.http_requests_total.inc(
            method=request.method,
            endpoint=endpoint,
            status=str(response.status_code),
        )
        metrics.http_request_duration_seconds.observe(
            duration,
            method=request.method,
            endpoint=endpoint,
        )

        return response


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint handler."""
    return Response(
        get_metrics().to_prometheus_format(),
        mimetype="text/plain; charset=utf-8",
    )
