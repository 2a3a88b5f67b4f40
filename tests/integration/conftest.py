"""
Fixtures for integration tests.

Provides:
- An in-memory SQLite database behind a real DatabaseSessionManager
- Test client for the FastAPI app with the session dependency overridden
- Helpers that create users and accounts through the API
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from ledgerbank.main import app
from ledgerbank.infrastructure.database import DatabaseSessionManager, get_db_session


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def session_manager() -> AsyncGenerator[DatabaseSessionManager, None]:
    """
    Session manager bound to a fresh in-memory SQLite database.

    StaticPool keeps the single in-memory connection alive for the whole
    test, so every session sees the same data.
    """
    manager = DatabaseSessionManager()
    manager.init(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await manager.create_schema()

    yield manager

    await manager.close()


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(session_manager: DatabaseSessionManager) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client backed by the in-memory database.

    Each request gets its own unit of work, committed on success and rolled
    back on error, exactly as in production.
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_manager.session() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def user(client: AsyncClient) -> dict:
    """A user created through the API."""
    response = await client.post(
        "/v1/users",
        json={"name": "Valentin Montagne", "email": "contact@vm-it-consulting.com"},
    )
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def account(client: AsyncClient, user: dict) -> dict:
    """An empty account owned by `user`."""
    response = await client.post(
        "/v1/accounts",
        json={"user_id": user["user_id"], "name": "Compte courant"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def record(client: AsyncClient):
    """Return a coroutine function that records a transaction and checks it succeeded."""
    async def _record(account_id: int, amount_cents: int, txn_type: int, name: str = "item") -> dict:
        response = await client.post(
            "/v1/transactions",
            json={
                "account_id": account_id,
                "name": name,
                "amount_cents": amount_cents,
                "type": txn_type,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _record
