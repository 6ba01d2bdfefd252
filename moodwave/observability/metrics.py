from __future__ import annotations

from flask import Blueprint, Response
from prometheus_client import Counter, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

CATALOG_REQUESTS = Counter(
    "moodwave_catalog_requests_total",
    "Catalog API calls by operation and outcome.",
    ["operation", "outcome"],
)
AGGREGATOR_SOURCE_FAILURES = Counter(
    "moodwave_aggregator_source_failures_total",
    "Aggregation sources that failed and contributed no tracks.",
)
MOOD_FILTER_FALLBACKS = Counter(
    "moodwave_mood_filter_fallbacks_total",
    "Mood filter runs that returned unfiltered tracks after a feature lookup failure.",
)


def record_catalog_call(operation: str, outcome: str) -> None:
    CATALOG_REQUESTS.labels(operation=operation, outcome=outcome).inc()


def record_source_failure() -> None:
    AGGREGATOR_SOURCE_FAILURES.inc()


def record_mood_filter_fallback() -> None:
    MOOD_FILTER_FALLBACKS.inc()


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
