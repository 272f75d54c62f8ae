"""Prometheus registry plus HTTP and database timing metrics."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram

# Dedicated registry: only catalog metrics are exported, and tests can
# create several apps without duplicate-collector errors
REGISTRY = CollectorRegistry()

# 1ms to 10s
LATENCY_BUCKETS = (0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)

http_requests_total = Counter(
    "http_requests_total",
    "HTTP requests by method, route template and status",
    ["method", "endpoint", "status"],
    registry=REGISTRY,
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=LATENCY_BUCKETS,
    registry=REGISTRY,
)

database_query_duration_seconds = Histogram(
    "database_query_duration_seconds",
    "Statement execution time by leading SQL keyword",
    ["operation"],
    buckets=LATENCY_BUCKETS,
    registry=REGISTRY,
)
