"""
Global test fixtures for the Barudan Sales Portal.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Mock Redis (fakeredis)
- Test users and tokens
- FastAPI test clients wired to the mocks
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock

import fakeredis
import fakeredis.aioredis
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest.fixture
def mock_async_mongo_client():
    """
    In-memory MongoDB with the Motor async API.

    Created synchronously so the same client can be used from the
    TestClient's event loop.
    """
    client = AsyncMongoMockClient()
    yield client
    client.close()


@pytest_asyncio.fixture
async def mock_auth_db(mock_async_mongo_client):
    """Provide mock auth_db database."""
    db = mock_async_mongo_client["auth_db"]
    await db.users.create_index("email", unique=True)
    yield db


@pytest.fixture
def mock_sales_db(mock_async_mongo_client):
    """Provide mock sales_db database."""
    return mock_async_mongo_client["sales_db"]


@pytest.fixture
def mock_board_db(mock_async_mongo_client):
    """Provide mock board_db database."""
    return mock_async_mongo_client["board_db"]


@pytest.fixture
def mock_pricing_db(mock_async_mongo_client):
    """Provide mock pricing_db database."""
    return mock_async_mongo_client["pricing_db"]


# =============================================================================
# Redis Fixtures (fakeredis)
# =============================================================================

@pytest.fixture
def mock_async_redis():
    """
    Async fake Redis with its own server, so tests never share state.
    """
    return fakeredis.aioredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture(autouse=True)
def use_mock_connections(monkeypatch, mock_async_mongo_client, mock_async_redis):
    """
    Point the connection singletons at the mocks.

    Everything that calls get_mongo_client / get_redis_client (services,
    dependencies, rate limiting, event publishing) then uses them.

    mongomock has no sessions, so transactional writes run their callback
    directly with ``session=None``.
    """
    from app.database import connections

    async def run_without_session(callback):
        return await callback(None)

    monkeypatch.setattr(connections, "_mongo_client", mock_async_mongo_client)
    monkeypatch.setattr(connections, "_redis_client", mock_async_redis)
    monkeypatch.setattr("app.services.exchange_rate_service.run_in_transaction", run_without_session)
    monkeypatch.setattr("app.services.order_service.run_in_transaction", run_without_session)


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Credentials used to sign in through the API."""
    return {
        "email": "vendedor@barudan.com.br",
        "password": "senha123",
    }


@pytest.fixture
def other_user_data() -> dict:
    """A second account, for ownership checks."""
    return {
        "email": "gerente@barudan.com.br",
        "password": "outrasenha",
    }


@pytest.fixture
def mock_user() -> dict:
    """A complete mock user document as stored in MongoDB."""
    return {
        "_id": "507f1f77bcf86cd799439011",
        "id": "507f1f77bcf86cd799439011",
        "email": "vendedor@barudan.com.br",
        "hashed_password": "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.qOZ3q7K9V6X6Hy",
        "roles": ["user"],
        "status": "active",
        "created_at": datetime.now(timezone.utc).isoformat()
    }


@pytest.fixture
def mock_current_user(mock_user):
    """The mock user as a User model."""
    from app.models.user import User, UserRole, UserStatus

    return User(
        id=mock_user["id"],
        email=mock_user["email"],
        hashed_password=mock_user["hashed_password"],
        roles=[UserRole.USER],
        status=UserStatus.ACTIVE,
        created_at=mock_user["created_at"],
    )


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(monkeypatch):
    """
    FastAPI app with the live event relay and connection teardown stubbed.
    """
    from app.main import app as fastapi_app
    from app.routers import ws

    async def no_relay():
        return None

    monkeypatch.setattr(ws, "relay_events", no_relay)
    monkeypatch.setattr("app.main.close_connections", AsyncMock())
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    Use this for synchronous endpoint testing.
    """
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def async_client(app):
    """
    Create an async test client.

    Use this for testing async endpoints.
    """
    from httpx import AsyncClient, ASGITransport

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac


# =============================================================================
# Authenticated Client Fixtures
# =============================================================================

def sign_in(client: TestClient, credentials: dict) -> str:
    """Sign in through the API and return the access token."""
    response = client.post("/auth/sign-in", json=credentials)
    assert response.status_code == 200, response.text
    return response.json()["access_token"]


@pytest.fixture
def auth_token(client, test_user_data) -> str:
    """Token of a freshly created account."""
    return sign_in(client, test_user_data)


@pytest.fixture
def other_auth_token(client, other_user_data) -> str:
    """Token of a second account."""
    return sign_in(client, other_user_data)


def make_authenticated_request(client: TestClient, method: str, url: str, token: str, **kwargs):
    """
    Helper to make authenticated requests with token as query param.

    Args:
        client: TestClient instance
        method: HTTP method (get, post, put, delete)
        url: Endpoint URL
        token: JWT token
        **kwargs: Additional arguments for the request

    Returns:
        Response object
    """
    params = dict(kwargs.pop("params", None) or {})
    params["token"] = token

    request_method = getattr(client, method.lower())
    return request_method(url, params=params, **kwargs)


@pytest.fixture
def api(client):
    """
    ``make_authenticated_request`` bound to the test client.

        api("get", "/orders", auth_token)
    """
    def _request(method: str, url: str, token: str, **kwargs):
        return make_authenticated_request(client, method, url, token, **kwargs)
    return _request
