"""Prometheus metrics for monitoring forecasts, detected patterns and repository health"""

from typing import Optional

from prometheus_client import Counter, Histogram

# Forecast metrics
forecast_counter = Counter(
    "cashflow_forecast_total",
    "Total cash-flow forecasts produced",
    ["risk"],  # none | low_balance | overdraft
)

recurring_listing_counter = Counter(
    "cashflow_recurring_listing_total",
    "Total recurring-expense listings produced",
)

patterns_detected_histogram = Histogram(
    "recurring_patterns_detected",
    "Recurring patterns detected per request",
    ["pipeline"],  # forecast | recurring_listing
    buckets=[0, 1, 2, 5, 10, 20, 50],
)

# Repository metrics
repository_fetch_failures_counter = Counter(
    "repository_fetch_failures_total",
    "Failed transaction repository fetches",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_forecast(pattern_count: int, risk_kind: Optional[str]) -> None:
    """Record forecast metrics for monitoring overdraft-risk rates"""
    forecast_counter.labels(risk=risk_kind or "none").inc()
    patterns_detected_histogram.labels(pipeline="forecast").observe(pattern_count)


def record_recurring_listing(pattern_count: int) -> None:
    recurring_listing_counter.inc()
    patterns_detected_histogram.labels(pipeline="recurring_listing").observe(pattern_count)
