"""
Integration tests for ledger mutations.

These tests verify:
1. POST /v1/transactions - recording moves the balance by the signed amount
2. PATCH /v1/transactions/{id} - amending applies the difference only
3. DELETE /v1/transactions/{id} - deleting reverses the contribution
4. The stored balance equals the sum of the ledger after every step
5. Failed operations leave no partial state behind
6. Serialization conflicts surface as 409 with a retry hint
"""

from typing import Annotated

import pytest
from fastapi import Depends
from httpx import AsyncClient
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerbank.core.dependencies import get_account_repository
from ledgerbank.domain.exceptions import StorageUnavailableException
from ledgerbank.infrastructure.database import get_db_session
from ledgerbank.infrastructure.repositories import SqlAccountRepository
from ledgerbank.main import app
from ledgerbank.service.ledger import MAX_AMOUNT_CENTS, ledger_settings


async def assert_in_sync(client: AsyncClient, account_id: int, balance_cents: int):
    """The cached balance must match both the expected value and the ledger."""
    report = (await client.get(f"/v1/accounts/{account_id}/reconciliation")).json()
    assert report["in_sync"] is True
    assert report["stored_balance_cents"] == balance_cents
    assert report["computed_balance_cents"] == balance_cents


# =============================================================================
# Record Tests
# =============================================================================

class TestRecordTransaction:
    """Tests for POST /v1/transactions."""

    @pytest.mark.asyncio
    async def test_record_credit(self, client: AsyncClient, account: dict, record):
        entry = await record(account["account_id"], 10000, 1, "salary")

        assert entry["balance_cents"] == 10000
        assert entry["transaction_count"] == 1
        assert entry["transaction"]["name"] == "T1-SALARY"
        assert entry["transaction"]["type"] == 1
        await assert_in_sync(client, account["account_id"], 10000)

    @pytest.mark.asyncio
    async def test_debit_may_overdraw(self, client: AsyncClient, account: dict, record):
        entry = await record(account["account_id"], 2500, 0, "groceries")

        assert entry["balance_cents"] == -2500
        assert entry["transaction"]["name"] == "T0-GROCERIES"
        await assert_in_sync(client, account["account_id"], -2500)

    @pytest.mark.asyncio
    async def test_zero_amount_allowed(self, client: AsyncClient, account: dict, record):
        entry = await record(account["account_id"], 0, 0, "noop")

        assert entry["balance_cents"] == 0
        assert entry["transaction_count"] == 1

    @pytest.mark.asyncio
    async def test_negative_amount_rejected(self, client: AsyncClient, account: dict, record):
        await record(account["account_id"], 100, 1)

        response = await client.post(
            "/v1/transactions",
            json={"account_id": account["account_id"], "name": "bad", "amount_cents": -5, "type": 0},
        )

        assert response.status_code == 422
        await assert_in_sync(client, account["account_id"], 100)
        ledger = (await client.get(f"/v1/accounts/{account['account_id']}/transactions")).json()
        assert len(ledger) == 1

    @pytest.mark.asyncio
    async def test_unknown_type_rejected(self, client: AsyncClient, account: dict):
        response = await client.post(
            "/v1/transactions",
            json={"account_id": account["account_id"], "name": "odd", "amount_cents": 5, "type": 2},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_account_returns_404(self, client: AsyncClient):
        response = await client.post(
            "/v1/transactions",
            json={"account_id": 999, "name": "lost", "amount_cents": 5, "type": 1},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "ACCOUNT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_failed_balance_update_rolls_back_the_row(
        self,
        client: AsyncClient,
        account: dict,
        record,
    ):
        """A transaction row is never committed without its balance effect."""
        await record(account["account_id"], 100, 1)

        class BrokenAccountRepository(SqlAccountRepository):
            async def apply_delta(self, *args, **kwargs):
                raise StorageUnavailableException("database went away")

        async def broken_account_repository(
            session: Annotated[AsyncSession, Depends(get_db_session)],
        ):
            return BrokenAccountRepository(session)

        app.dependency_overrides[get_account_repository] = broken_account_repository
        try:
            response = await client.post(
                "/v1/transactions",
                json={"account_id": account["account_id"], "name": "x", "amount_cents": 40, "type": 0},
            )
        finally:
            del app.dependency_overrides[get_account_repository]

        assert response.status_code == 503
        assert response.json()["error"] == "STORAGE_UNAVAILABLE"

        ledger = (await client.get(f"/v1/accounts/{account['account_id']}/transactions")).json()
        assert [t["amount_cents"] for t in ledger] == [100]
        await assert_in_sync(client, account["account_id"], 100)

    @pytest.mark.asyncio
    async def test_serialization_conflict_returns_409_with_retry_after(
        self,
        client: AsyncClient,
        account: dict,
        record,
    ):
        """A serialization failure from the driver is retryable and rolls back."""
        await record(account["account_id"], 100, 1)

        class SerializationFailure(Exception):
            sqlstate = "40001"

        class ConflictingAccountRepository(SqlAccountRepository):
            async def _update_and_reload(self, account_id, stmt):
                raise DBAPIError(
                    "UPDATE accounts SET balance_cents = ?",
                    {},
                    SerializationFailure("could not serialize access"),
                )

        async def conflicting_account_repository(
            session: Annotated[AsyncSession, Depends(get_db_session)],
        ):
            return ConflictingAccountRepository(session)

        app.dependency_overrides[get_account_repository] = conflicting_account_repository
        try:
            response = await client.post(
                "/v1/transactions",
                json={"account_id": account["account_id"], "name": "x", "amount_cents": 40, "type": 0},
            )
        finally:
            del app.dependency_overrides[get_account_repository]

        assert response.status_code == 409
        assert response.headers["Retry-After"] == str(ledger_settings.conflict_retry_after_seconds)
        body = response.json()
        assert body["error"] == "LEDGER_CONFLICT"
        assert "request_id" in body

        ledger = (await client.get(f"/v1/accounts/{account['account_id']}/transactions")).json()
        assert [t["amount_cents"] for t in ledger] == [100]
        await assert_in_sync(client, account["account_id"], 100)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount_cents", [MAX_AMOUNT_CENTS + 1, 2**63])
    async def test_amount_above_ceiling_rejected(
        self,
        client: AsyncClient,
        account: dict,
        record,
        amount_cents: int,
    ):
        await record(account["account_id"], 100, 1)

        response = await client.post(
            "/v1/transactions",
            json={
                "account_id": account["account_id"],
                "name": "huge",
                "amount_cents": amount_cents,
                "type": 1,
            },
        )

        assert response.status_code == 422
        await assert_in_sync(client, account["account_id"], 100)
        ledger = (await client.get(f"/v1/accounts/{account['account_id']}/transactions")).json()
        assert len(ledger) == 1

    @pytest.mark.asyncio
    async def test_amount_at_ceiling_accepted(self, client: AsyncClient, account: dict, record):
        entry = await record(account["account_id"], MAX_AMOUNT_CENTS, 1, "windfall")

        assert entry["balance_cents"] == MAX_AMOUNT_CENTS
        await assert_in_sync(client, account["account_id"], MAX_AMOUNT_CENTS)


# =============================================================================
# Amend and Delete Tests
# =============================================================================

class TestAmendAndDelete:
    """Tests for PATCH and DELETE /v1/transactions/{id}."""

    @pytest.mark.asyncio
    async def test_amend_delete_sequence(self, client: AsyncClient, account: dict, record):
        account_id = account["account_id"]
        await record(account_id, 100, 1, "deposit")
        entry = await record(account_id, 20, 0, "shopping")
        txn_id = entry["transaction"]["transaction_id"]
        assert entry["balance_cents"] == 80
        await assert_in_sync(client, account_id, 80)

        # Debit of 20 amended to 50
        response = await client.patch(
            f"/v1/transactions/{txn_id}", json={"amount_cents": 50, "type": 0}
        )
        assert response.status_code == 200
        assert response.json()["balance_cents"] == 50
        await assert_in_sync(client, account_id, 50)

        # Deleting brings the balance back to the deposit
        response = await client.delete(f"/v1/transactions/{txn_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["balance_cents"] == 100
        assert data["transaction_count"] == 1
        await assert_in_sync(client, account_id, 100)

        response = await client.get(f"/v1/transactions/{txn_id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_amend_can_flip_type(self, client: AsyncClient, account: dict, record):
        account_id = account["account_id"]
        await record(account_id, 100, 1, "deposit")
        entry = await record(account_id, 20, 1, "refund")
        txn_id = entry["transaction"]["transaction_id"]

        # 20 credit -> 50 debit swings the balance by 70
        response = await client.patch(
            f"/v1/transactions/{txn_id}", json={"amount_cents": 50, "type": 0}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["balance_cents"] == 50
        assert data["transaction"]["name"] == "T0-REFUND"
        await assert_in_sync(client, account_id, 50)

    @pytest.mark.asyncio
    async def test_amend_can_rename(self, client: AsyncClient, account: dict, record):
        entry = await record(account["account_id"], 10, 0, "coffe")
        txn_id = entry["transaction"]["transaction_id"]

        response = await client.patch(
            f"/v1/transactions/{txn_id}",
            json={"amount_cents": 10, "type": 0, "name": "coffee"},
        )

        assert response.status_code == 200
        assert response.json()["transaction"]["name"] == "T0-COFFEE"
        assert response.json()["balance_cents"] == -10

    @pytest.mark.asyncio
    async def test_amend_with_same_values_is_noop(self, client: AsyncClient, account: dict, record):
        entry = await record(account["account_id"], 10, 1)
        txn_id = entry["transaction"]["transaction_id"]

        response = await client.patch(
            f"/v1/transactions/{txn_id}", json={"amount_cents": 10, "type": 1}
        )

        assert response.json()["balance_cents"] == 10
        assert response.json()["transaction_count"] == 1

    @pytest.mark.asyncio
    async def test_amend_negative_amount_rejected(self, client: AsyncClient, account: dict, record):
        entry = await record(account["account_id"], 10, 1)
        txn_id = entry["transaction"]["transaction_id"]

        response = await client.patch(
            f"/v1/transactions/{txn_id}", json={"amount_cents": -10, "type": 1}
        )

        assert response.status_code == 422
        await assert_in_sync(client, account["account_id"], 10)

    @pytest.mark.asyncio
    async def test_amend_amount_above_ceiling_rejected(self, client: AsyncClient, account: dict, record):
        entry = await record(account["account_id"], 10, 1)
        txn_id = entry["transaction"]["transaction_id"]

        response = await client.patch(
            f"/v1/transactions/{txn_id}", json={"amount_cents": 2**63, "type": 1}
        )

        assert response.status_code == 422
        await assert_in_sync(client, account["account_id"], 10)

    @pytest.mark.asyncio
    async def test_missing_transaction_returns_404(self, client: AsyncClient):
        patch = await client.patch("/v1/transactions/555", json={"amount_cents": 1, "type": 0})
        delete = await client.delete("/v1/transactions/555")
        get = await client.get("/v1/transactions/555")

        for response in (patch, delete, get):
            assert response.status_code == 404
            assert response.json()["error"] == "TRANSACTION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_transaction(self, client: AsyncClient, account: dict, record):
        entry = await record(account["account_id"], 75, 0, "bus ticket")
        txn_id = entry["transaction"]["transaction_id"]

        response = await client.get(f"/v1/transactions/{txn_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "T0-BUS TICKET"
        assert data["account_id"] == account["account_id"]


# =============================================================================
# Ledger Listing Tests
# =============================================================================

class TestListTransactions:

    @pytest.mark.asyncio
    async def test_listed_oldest_first(self, client: AsyncClient, account: dict, record):
        for amount in (1, 2, 3):
            await record(account["account_id"], amount, 0)

        response = await client.get(f"/v1/accounts/{account['account_id']}/transactions")

        assert [t["amount_cents"] for t in response.json()] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_unknown_account_returns_404(self, client: AsyncClient):
        response = await client.get("/v1/accounts/8080/transactions")

        assert response.status_code == 404
