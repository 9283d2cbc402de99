"""Prometheus metrics for bedgate adapters."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

bedgate_streams_total = Counter(
    "bedgate_streams_total",
    "Total Bedrock runtime streams by outcome",
    ["model", "status"],
)
bedgate_stream_duration_seconds = Histogram(
    "bedgate_stream_duration_seconds",
    "Bedrock runtime stream duration in seconds",
    ["model"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)
bedgate_tokens_total = Counter(
    "bedgate_tokens_total",
    "Tokens reported by Bedrock runtime streams",
    ["model", "direction"],
)
