"""Prometheus metrics for the bulk scan orchestrator.

Defines the operational counters exposed on /metrics.
"""

from prometheus_client import Counter, Histogram

# Envelope processing metrics
envelopes_processed_total = Counter(
    "bulkscan_envelopes_processed_total",
    "Total envelopes processed from the queue",
    ["container", "classification", "ccd_action"]  # ccd_action: CASE_CREATION|AUTO_ATTACHED_TO_CASE|EXCEPTION_RECORD|FAILED
)

envelope_processing_duration_seconds = Histogram(
    "bulkscan_envelope_processing_duration_seconds",
    "Time spent handling one envelope in seconds",
    ["classification"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)

# Case creation metrics
case_creation_results_total = Counter(
    "bulkscan_case_creation_results_total",
    "Automatic case creation outcomes",
    ["container", "result"]  # result: CaseCreationResultType value
)

# CCD credential cache
ccd_credentials_invalidated_total = Counter(
    "bulkscan_ccd_credentials_invalidated_total",
    "Cached IDAM credentials dropped after CCD rejected them",
    ["jurisdiction"]
)

# Callback metrics
callback_results_total = Counter(
    "bulkscan_callback_results_total",
    "Case creation callback outcomes",
    ["event_id", "outcome"]  # outcome: success|warnings|errors|failed
)
