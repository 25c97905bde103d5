"""Pytest configuration and fixtures."""

from __future__ import annotations

import gc
import warnings
from collections.abc import AsyncGenerator, Callable, Generator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

pytest_plugins = ["pytest_asyncio"]


def _force_cleanup():
    """Force cleanup of pending async resources."""
    # ResourceWarnings are expected when async resources are collected off-loop
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=ResourceWarning)
        gc.collect()


@pytest.fixture(scope="function", autouse=True)
def reset_engine():
    """Start and finish every test without a cached database engine."""
    import signaldash.database.connection as db_conn

    db_conn._engine = None
    db_conn._session_factory = None

    yield

    db_conn._engine = None
    db_conn._session_factory = None
    _force_cleanup()


@pytest_asyncio.fixture
async def db(tmp_path) -> AsyncGenerator[Any, None]:
    """File-backed SQLite database with all tables created."""
    from signaldash.database.connection import close_sqlalchemy_engine, init_sqlalchemy_engine
    from signaldash.database.orm import Base

    engine = await init_sqlalchemy_engine(f"sqlite+aiosqlite:///{tmp_path / 'signaldash.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await close_sqlalchemy_engine()


@pytest_asyncio.fixture
async def user(db):
    """Registered user owning baskets in tests."""
    from signaldash.repositories.auth_user_orm import create_user

    return await create_user("alice")


@pytest_asyncio.fixture
async def other_user(db):
    """Second registered user."""
    from signaldash.repositories.auth_user_orm import create_user

    return await create_user("bob")


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    from signaldash.api.app import create_api_app

    app = create_api_app()
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client for the FastAPI app."""
    from signaldash.api.app import create_api_app

    app = create_api_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> Callable[[str], dict]:
    """Build authorization headers for a username."""
    from signaldash.core.security import create_access_token

    def _headers(username: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(username=username)}"}

    return _headers


@pytest.fixture
def sample_signals() -> list[dict]:
    """Raw upstream signal records, deliberately unsorted."""
    return [
        {
            "date": "2024-01-15T00:00:00Z",
            "comp_symbol": "aapl",
            "analyzed_tweets": 120,
            "sentiment_score": 0.73,
            "sentiment": "Positive",
            "entry_price": 185.5,
        },
        {
            "date": "2024-01-12",
            "comp_symbol": "MSFT",
            "analyzed_tweets": 80,
            "sentiment_score": -0.41,
            "sentiment": "negative",
            "entry_price": 390.0,
        },
        {
            "date": "01/17/2024",
            "comp_symbol": "TSLA",
            "analyzed_tweets": 300,
            "sentiment_score": 0.05,
            "sentiment": "NEUTRAL",
            "entry_price": 215.25,
        },
        {
            "date": "2024-01-16",
            "comp_symbol": "AMZN",
            "analyzed_tweets": None,
            "sentiment_score": 0.22,
            "sentiment": "positive",
            "entry_price": 155.0,
        },
    ]


@pytest.fixture
def feed_client(sample_signals) -> Callable[..., httpx.AsyncClient]:
    """Build an httpx client whose transport answers like the signal feed."""

    def _client(
        payload: Any = None,
        status_code: int = 200,
        content: bytes | None = None,
        exc: Exception | None = None,
    ) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            if exc is not None:
                raise exc
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(
                status_code,
                json=sample_signals if payload is None else payload,
            )

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _client
