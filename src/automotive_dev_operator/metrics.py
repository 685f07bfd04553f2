"""Prometheus metrics for the Automotive Dev Operator."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "automotive_dev_operator_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "automotive_dev_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

error_total = Counter(
    "automotive_dev_operator_error_total",
    "Total number of reconciliation errors",
    ["kind", "error_type"],
)

# OAuth secret bootstrap metrics
oauth_secret_operations_total = Counter(
    "automotive_dev_operator_oauth_secret_operations_total",
    "Total number of OAuth proxy secret ensure operations",
    ["secret", "action", "result"],
)

# API call metrics
api_call_total = Counter(
    "automotive_dev_operator_api_call_total",
    "Total number of API calls",
    ["api_type", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "automotive_dev_operator_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["api_type", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)
