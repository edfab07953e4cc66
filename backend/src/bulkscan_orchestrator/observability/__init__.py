"""Observability: structured logging, metrics and health checks."""

from .health import ComponentHealth, HealthStatus
from .logging_config import configure_logging, get_logger
from .metrics import (
    callback_results_total,
    case_creation_results_total,
    ccd_credentials_invalidated_total,
    envelope_processing_duration_seconds,
    envelopes_processed_total,
)
from .middleware import RequestIDMiddleware
from .request_id import correlation_scope, generate_request_id, get_request_id, request_id_var

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "callback_results_total",
    "case_creation_results_total",
    "ccd_credentials_invalidated_total",
    "envelope_processing_duration_seconds",
    "envelopes_processed_total",
    # Correlation ID
    "request_id_var",
    "get_request_id",
    "generate_request_id",
    "correlation_scope",
    # Health
    "HealthStatus",
    "ComponentHealth",
    # Middleware
    "RequestIDMiddleware",
]
