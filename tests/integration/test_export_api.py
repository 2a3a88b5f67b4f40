"""
Integration tests for CSV exports.

These tests verify:
1. GET /v1/accounts/{account_id}/export - one account's ledger
2. GET /v1/accounts/export - every account with its balance
"""

import pytest
from httpx import AsyncClient


class TestLedgerExport:

    @pytest.mark.asyncio
    async def test_ledger_export(self, client: AsyncClient, user: dict, account: dict, record):
        account_id = account["account_id"]
        first = await record(account_id, 10000, 1, "salary")
        second = await record(account_id, 2500, 0, "groceries, market")

        response = await client.get(f"/v1/accounts/{account_id}/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert (
            response.headers["content-disposition"]
            == f'attachment; filename="account_{account_id}_transactions.csv"'
        )

        lines = response.text.splitlines()
        assert lines[0] == "id,name,amount_cents,type,account_id,user_id,created_at"
        assert len(lines) == 3

        row = lines[1].split(",")
        assert row[:6] == [
            str(first["transaction"]["transaction_id"]),
            "T1-SALARY",
            "10000",
            "1",
            str(account_id),
            str(user["user_id"]),
        ]
        assert lines[2].split(",")[1] == "T0-GROCERIES MARKET"
        assert lines[2].split(",")[0] == str(second["transaction"]["transaction_id"])

    @pytest.mark.asyncio
    async def test_empty_ledger_exports_header(self, client: AsyncClient, account: dict):
        response = await client.get(f"/v1/accounts/{account['account_id']}/export")

        assert response.text == "id,name,amount_cents,type,account_id,user_id,created_at\n"

    @pytest.mark.asyncio
    async def test_unknown_account_returns_404(self, client: AsyncClient):
        response = await client.get("/v1/accounts/777/export")

        assert response.status_code == 404


class TestAccountsExport:

    @pytest.mark.asyncio
    async def test_accounts_export(self, client: AsyncClient, user: dict, account: dict, record):
        await record(account["account_id"], 1500, 1)
        second = (await client.post(
            "/v1/accounts",
            json={"user_id": user["user_id"], "name": "Savings", "opening_balance_cents": 300},
        )).json()

        response = await client.get("/v1/accounts/export")

        assert response.status_code == 200
        assert response.headers["content-disposition"] == 'attachment; filename="accounts.csv"'
        assert response.text.splitlines() == [
            "id,name,balance_cents,user_id",
            f"{account['account_id']},Compte courant,1500,{user['user_id']}",
            f"{second['account_id']},Savings,300,{user['user_id']}",
        ]
