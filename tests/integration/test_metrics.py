"""
Integration tests for metrics tracking.

These tests verify:
1. The metrics endpoint returns Prometheus format
2. Ledger operations are counted by operation and outcome
3. Drift, budget and export counters move with their operations
4. HTTP requests are labelled by their full route template
"""

import pytest
from httpx import AsyncClient
from prometheus_client import REGISTRY


def sample(name: str, **labels) -> float:
    return REGISTRY.get_sample_value(name, labels or None) or 0.0


# =============================================================================
# Metrics Endpoint Tests
# =============================================================================

class TestMetricsEndpoint:
    """Tests for GET /metrics endpoint."""

    @pytest.mark.asyncio
    async def test_metrics_endpoint_returns_prometheus_format(self, client: AsyncClient):
        response = await client.get("/metrics")

        assert response.status_code == 200
        content_type = response.headers.get("content-type", "")
        assert "text/plain" in content_type or "text/openmetrics" in content_type
        assert "# HELP ledgerbank_ledger_operations_total" in response.text


# =============================================================================
# Ledger Metrics Tests
# =============================================================================

class TestLedgerMetrics:

    @pytest.mark.asyncio
    async def test_record_success_counted(self, client: AsyncClient, account: dict, record):
        before = sample(
            "ledgerbank_ledger_operations_total", operation="record", outcome="success"
        )

        await record(account["account_id"], 100, 1)

        after = sample(
            "ledgerbank_ledger_operations_total", operation="record", outcome="success"
        )
        assert after == before + 1

    @pytest.mark.asyncio
    async def test_failed_delete_counted_as_error(self, client: AsyncClient):
        before = sample(
            "ledgerbank_ledger_operations_total", operation="delete", outcome="error"
        )

        response = await client.delete("/v1/transactions/424242")
        assert response.status_code == 404

        after = sample(
            "ledgerbank_ledger_operations_total", operation="delete", outcome="error"
        )
        assert after == before + 1

    @pytest.mark.asyncio
    async def test_budget_and_export_counters(self, client: AsyncClient, account: dict):
        account_id = account["account_id"]
        budget_before = sample("ledgerbank_budget_queries_total")
        export_before = sample("ledgerbank_exports_total", kind="transactions")

        await client.get(f"/v1/accounts/{account_id}/budgets/100")
        await client.get(f"/v1/accounts/{account_id}/export")

        assert sample("ledgerbank_budget_queries_total") == budget_before + 1
        assert sample("ledgerbank_exports_total", kind="transactions") == export_before + 1


# =============================================================================
# HTTP Metrics Tests
# =============================================================================

class TestHttpMetrics:

    @pytest.mark.asyncio
    async def test_requests_labelled_by_route_template(self, client: AsyncClient, account: dict):
        labels = {
            "method": "GET",
            "endpoint": "/v1/accounts/{account_id}",
            "status": "200",
        }
        before = sample("ledgerbank_http_requests_total", **labels)

        response = await client.get(f"/v1/accounts/{account['account_id']}")
        assert response.status_code == 200

        assert sample("ledgerbank_http_requests_total", **labels) == before + 1

    @pytest.mark.asyncio
    async def test_nested_and_collection_routes_keep_version_prefix(
        self, client: AsyncClient, account: dict
    ):
        budget_labels = {
            "method": "GET",
            "endpoint": "/v1/accounts/{account_id}/budgets/{budget_cents}",
            "status": "200",
        }
        listing_labels = {"method": "GET", "endpoint": "/v1/accounts", "status": "200"}
        budget_before = sample("ledgerbank_http_requests_total", **budget_labels)
        listing_before = sample("ledgerbank_http_requests_total", **listing_labels)

        await client.get(f"/v1/accounts/{account['account_id']}/budgets/500")
        await client.get("/v1/accounts")

        assert sample("ledgerbank_http_requests_total", **budget_labels) == budget_before + 1
        assert sample("ledgerbank_http_requests_total", **listing_labels) == listing_before + 1

    @pytest.mark.asyncio
    async def test_unknown_path_labelled_unmatched(self, client: AsyncClient):
        labels = {"method": "GET", "endpoint": "unmatched", "status": "404"}
        before = sample("ledgerbank_http_requests_total", **labels)

        response = await client.get("/v1/nowhere/42")
        assert response.status_code == 404

        assert sample("ledgerbank_http_requests_total", **labels) == before + 1
