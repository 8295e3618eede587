"""Metrics module for Daily Token Quota service."""

from prometheus_client import (
    Counter,
    Histogram,
)

# Counter to track REST API calls
# This will be used to count how many times each API endpoint is called
# and the status code of the response
rest_api_calls_total = Counter(
    "dtq_rest_api_calls_total", "REST API calls counter", ["path", "status_code"]
)

# Histogram to measure response durations
# This will be used to track how long it takes to handle requests
response_duration_seconds = Histogram(
    "dtq_response_duration_seconds", "Response durations", ["path"]
)

# Quota records created on first access
quota_records_created_total = Counter(
    "dtq_quota_records_created_total", "Quota records created on first access"
)

# Records reset by the lazy path, one per successful compare-and-reset
quota_lazy_resets_total = Counter(
    "dtq_quota_lazy_resets_total", "Quota records reset on read"
)

# Lazy resets that lost the race against another reset
quota_reset_conflicts_total = Counter(
    "dtq_quota_reset_conflicts_total", "Quota reset conflicts resolved by re-fetch"
)

# Batch reconciliation runs and their outcome
quota_batch_runs_total = Counter(
    "dtq_quota_batch_runs_total", "Batch reconciliation runs", ["success"]
)

# Records actually changed by batch reconciliation
quota_batch_resets_total = Counter(
    "dtq_quota_batch_resets_total", "Quota records reset by batch reconciliation"
)

# Duration of batch reconciliation runs
quota_batch_duration_seconds = Histogram(
    "dtq_quota_batch_duration_seconds", "Batch reconciliation durations"
)
