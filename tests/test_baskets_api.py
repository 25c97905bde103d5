"""Tests for stock basket API endpoints."""

from __future__ import annotations

import pytest
from fastapi import status


BASKET_PAYLOAD = {
    "basket": {
        "name": "Tech Momentum",
        "source_weights": {"twitter": 0.6, "news": 0.4},
        "is_locked": False,
    },
    "stocks": [
        {"symbol": "AAPL", "name": "Apple Inc.", "sector": "Technology", "allocation": 50.0},
        {"symbol": "MSFT", "name": "Microsoft", "allocation": 50.0, "is_locked": True},
    ],
}


class TestLatestBasketEndpoint:
    """Tests for GET /baskets/latest."""

    @pytest.mark.asyncio
    async def test_without_auth_returns_401(self, db, async_client):
        """Anonymous callers are rejected."""
        response = await async_client.get("/baskets/latest")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "User not authenticated"

    @pytest.mark.asyncio
    async def test_with_invalid_token_returns_401(self, db, async_client):
        """Garbage tokens are treated as anonymous."""
        response = await async_client.get(
            "/baskets/latest", headers={"Authorization": "Bearer invalid_token"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_unknown_user_returns_401(self, db, async_client, auth_headers):
        """A valid token for an unregistered user is rejected."""
        response = await async_client.get("/baskets/latest", headers=auth_headers("ghost"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_no_basket_returns_nulls(self, user, async_client, auth_headers):
        """A user without baskets gets nulls."""
        response = await async_client.get("/baskets/latest", headers=auth_headers(user.username))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"basket": None, "stocks": None, "error": None}


    @pytest.mark.asyncio
    async def test_stock_failure_keeps_basket(self, async_client, monkeypatch):
        """A basket whose stocks failed to load comes back with the error attached."""
        from signaldash.api.routes import baskets as basket_routes
        from signaldash.core.exceptions import DatabaseError
        from signaldash.repositories.baskets_orm import BasketLookup

        async def fake_lookup(user_id):
            return BasketLookup(
                basket={
                    "id": "b-1",
                    "user_id": 1,
                    "name": "Partial",
                    "source_weights": {"twitter": 1.0},
                    "is_locked": False,
                    "created_at": None,
                    "updated_at": None,
                },
                error=DatabaseError(message="Error fetching stocks"),
            )

        monkeypatch.setattr(basket_routes.baskets_repo, "get_most_recent_basket", fake_lookup)
        response = await async_client.get("/baskets/latest")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["basket"]["id"] == "b-1"
        assert data["stocks"] is None
        assert data["error"]["error"] == "DATABASE_ERROR"
        assert data["error"]["message"] == "Error fetching stocks"


class TestSaveBasketEndpoint:
    """Tests for PUT /baskets."""

    @pytest.mark.asyncio
    async def test_without_auth_returns_401(self, db, async_client):
        """Anonymous saves are rejected."""
        response = await async_client.put("/baskets", json=BASKET_PAYLOAD)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_invalid_body_returns_422(self, user, async_client, auth_headers):
        """A basket without a name fails validation."""
        response = await async_client.put(
            "/baskets",
            json={"basket": {"name": ""}, "stocks": []},
            headers=auth_headers(user.username),
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    @pytest.mark.asyncio
    async def test_save_and_read_back(self, user, async_client, auth_headers):
        """A saved basket is returned by the latest endpoint."""
        headers = auth_headers(user.username)

        response = await async_client.put("/baskets", json=BASKET_PAYLOAD, headers=headers)
        assert response.status_code == status.HTTP_200_OK
        basket_id = response.json()["basket_id"]

        latest = (await async_client.get("/baskets/latest", headers=headers)).json()
        assert latest["basket"]["id"] == basket_id
        assert latest["basket"]["name"] == "Tech Momentum"
        assert latest["basket"]["user_id"] == user.id
        sectors = {s["symbol"]: s["sector"] for s in latest["stocks"]}
        assert sectors == {"AAPL": "Technology", "MSFT": "Unknown"}

    @pytest.mark.asyncio
    async def test_update_via_id(self, user, async_client, auth_headers):
        """Sending the id back updates the same basket."""
        headers = auth_headers(user.username)
        basket_id = (await async_client.put("/baskets", json=BASKET_PAYLOAD, headers=headers)).json()["basket_id"]

        payload = {
            "basket": {"id": basket_id, "name": "Renamed", "source_weights": {}},
            "stocks": [{"symbol": "NVDA", "name": "Nvidia", "allocation": 100.0}],
        }
        response = await async_client.put("/baskets", json=payload, headers=headers)
        assert response.json()["basket_id"] == basket_id

        latest = (await async_client.get("/baskets/latest", headers=headers)).json()
        assert latest["basket"]["name"] == "Renamed"
        assert [s["symbol"] for s in latest["stocks"]] == ["NVDA"]

    @pytest.mark.asyncio
    async def test_update_foreign_basket_returns_404(
        self, user, other_user, async_client, auth_headers
    ):
        """Updating another user's basket is reported as not found."""
        basket_id = (
            await async_client.put("/baskets", json=BASKET_PAYLOAD, headers=auth_headers(other_user.username))
        ).json()["basket_id"]

        payload = {"basket": {"id": basket_id, "name": "Mine now"}, "stocks": []}
        response = await async_client.put("/baskets", json=payload, headers=auth_headers(user.username))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_session_cookie_accepted(self, user, async_client):
        """The session cookie works like a bearer token."""
        from signaldash.core.security import create_access_token

        token = create_access_token(username=user.username)
        response = await async_client.get("/baskets/latest", headers={"Cookie": f"session={token}"})

        assert response.status_code == status.HTTP_200_OK
