"""Prometheus metrics for the Ledgerbank service.

Business Metrics:
- ledgerbank_ledger_operations_total: Ledger mutations by operation and outcome
- ledgerbank_balance_drift_total: Reconciliations that found a drifted balance
- ledgerbank_budget_queries_total: Budget prefix queries served
- ledgerbank_exports_total: CSV exports by kind

Technical Metrics:
- ledgerbank_ledger_operation_latency_seconds: Ledger operation latency
- ledgerbank_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

ledger_operations_total = Counter(
    "ledgerbank_ledger_operations_total",
    "Total number of ledger operations",
    ["operation", "outcome"],  # record/amend/delete/recompute, success/error
)

balance_drift_total = Counter(
    "ledgerbank_balance_drift_total",
    "Total number of reconciliations that found a drifted balance",
)

budget_queries_total = Counter(
    "ledgerbank_budget_queries_total",
    "Total number of budget prefix queries",
)

exports_total = Counter(
    "ledgerbank_exports_total",
    "Total number of CSV exports",
    ["kind"],  # transactions, accounts
)


# =============================================================================
# Technical Metrics
# =============================================================================

ledger_operation_latency = Histogram(
    "ledgerbank_ledger_operation_latency_seconds",
    "Ledger operation latency in seconds",
    ["operation"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

http_requests_total = Counter(
    "ledgerbank_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "ledgerbank_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

@contextmanager
def track_ledger_operation(operation: str) -> Generator[None, None, None]:
    """
    Context manager recording latency and outcome of a ledger operation.

    The outcome is "error" when the block raises, "success" otherwise.
    """
    start = time.perf_counter()
    outcome = "success"
    try:
        yield
    except Exception:
        outcome = "error"
        raise
    finally:
        duration = time.perf_counter() - start
        ledger_operation_latency.labels(operation=operation).observe(duration)
        ledger_operations_total.labels(operation=operation, outcome=outcome).inc()


def record_balance_drift() -> None:
    """Record a reconciliation that found drift."""
    balance_drift_total.inc()


def record_budget_query() -> None:
    """Record a budget prefix query."""
    budget_queries_total.inc()


def record_export(kind: str) -> None:
    """Record a CSV export."""
    exports_total.labels(kind=kind).inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
