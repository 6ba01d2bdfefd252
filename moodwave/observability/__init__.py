# noqa: D104 - package initialization
from .logging import configure_structured_logging  # noqa: F401
from .metrics import (  # noqa: F401
    metrics_blueprint,
    record_catalog_call,
    record_mood_filter_fallback,
    record_source_failure,
)
from .tracing import attached_context, capture_context, catalog_span, init_tracing  # noqa: F401
