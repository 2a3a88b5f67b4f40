"""
Integration tests for GET /v1/accounts/{account_id}/budgets/{budget_cents}.

These tests verify:
1. The greedy oldest-first cutoff
2. Credits (including the opening balance) are ignored
3. Invalid budgets and unknown accounts
"""

import pytest
from httpx import AsyncClient


class TestBudget:

    @pytest.mark.asyncio
    async def test_prefix_within_budget(self, client: AsyncClient, account: dict, record):
        account_id = account["account_id"]
        for amount in (30, 40, 25):
            await record(account_id, amount, 0)

        exact = (await client.get(f"/v1/accounts/{account_id}/budgets/70")).json()
        short = (await client.get(f"/v1/accounts/{account_id}/budgets/69")).json()

        assert [t["amount_cents"] for t in exact["transactions"]] == [30, 40]
        assert exact["total_cents"] == 70
        assert exact["budget_cents"] == 70
        assert [t["amount_cents"] for t in short["transactions"]] == [30]
        assert short["total_cents"] == 30

    @pytest.mark.asyncio
    async def test_everything_fits_a_large_budget(self, client: AsyncClient, account: dict, record):
        for amount in (10, 20):
            await record(account["account_id"], amount, 0)

        response = await client.get(f"/v1/accounts/{account['account_id']}/budgets/1000000")

        assert len(response.json()["transactions"]) == 2

    @pytest.mark.asyncio
    async def test_credits_are_not_spending(self, client: AsyncClient, user: dict, record):
        opened = (await client.post(
            "/v1/accounts",
            json={"user_id": user["user_id"], "name": "Budgeted", "opening_balance_cents": 5000},
        )).json()
        account_id = opened["account_id"]
        await record(account_id, 60, 0, "lunch")
        await record(account_id, 100, 1, "refund")
        await record(account_id, 10, 0, "coffee")

        data = (await client.get(f"/v1/accounts/{account_id}/budgets/70")).json()

        assert [t["name"] for t in data["transactions"]] == ["T0-LUNCH", "T0-COFFEE"]
        assert all(t["type"] == 0 for t in data["transactions"])

    @pytest.mark.asyncio
    async def test_zero_budget(self, client: AsyncClient, account: dict, record):
        await record(account["account_id"], 1, 0)

        data = (await client.get(f"/v1/accounts/{account['account_id']}/budgets/0")).json()

        assert data["transactions"] == []
        assert data["total_cents"] == 0

    @pytest.mark.asyncio
    async def test_negative_budget_rejected(self, client: AsyncClient, account: dict):
        response = await client.get(f"/v1/accounts/{account['account_id']}/budgets/-1")

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_ARGUMENT"

    @pytest.mark.asyncio
    async def test_unknown_account_returns_404(self, client: AsyncClient):
        response = await client.get("/v1/accounts/4040/budgets/10")

        assert response.status_code == 404
