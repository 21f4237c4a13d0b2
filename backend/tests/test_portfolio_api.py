"""API tests for portfolio endpoints."""

import pytest

from conftest import create_asset


async def create_position(client, **overrides):
    body = {"asset_id": "bitcoin", "symbol": "btc", "amount": 2.0, "buy_price": 100.0}
    body.update(overrides)
    response = await client.post("/api/portfolio/positions", json=body)
    assert response.status_code == 201
    return response.json()


class TestPositions:
    """Tests for /api/portfolio/positions."""

    @pytest.mark.asyncio
    async def test_empty_list(self, client):
        response = await client.get("/api/portfolio/positions")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_create_uses_buy_price_without_market_data(self, client):
        data = await create_position(client)

        assert data["symbol"] == "BTC"
        assert data["current_price"] == 100.0
        assert data["profit"] == 0.0

    @pytest.mark.asyncio
    async def test_create_uses_held_market_price(self, client, market_list):
        market_list.assets = [create_asset("bitcoin", price=150.0)]

        data = await create_position(client)

        assert data["current_price"] == 150.0
        assert data["value"] == 300.0
        assert data["profit_percent"] == 50.0

    @pytest.mark.asyncio
    async def test_create_rejects_non_positive_amount(self, client):
        response = await client.post(
            "/api/portfolio/positions",
            json={"asset_id": "bitcoin", "symbol": "BTC", "amount": 0, "buy_price": 100.0},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update(self, client):
        created = await create_position(client)

        response = await client.put(
            f"/api/portfolio/positions/{created['id']}", json={"current_price": 125.0}
        )

        assert response.status_code == 200
        assert response.json()["profit"] == 50.0

    @pytest.mark.asyncio
    async def test_update_missing_returns_404(self, client):
        response = await client.put("/api/portfolio/positions/42", json={"amount": 1.0})

        assert response.status_code == 404
        assert "42" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_delete(self, client):
        created = await create_position(client)

        response = await client.delete(f"/api/portfolio/positions/{created['id']}")

        assert response.status_code == 200
        assert (await client.get("/api/portfolio/positions")).json() == []

    @pytest.mark.asyncio
    async def test_delete_missing_returns_404(self, client):
        response = await client.delete("/api/portfolio/positions/42")
        assert response.status_code == 404


class TestSummary:
    """Tests for /api/portfolio/summary and /api/portfolio/mark-to-market."""

    @pytest.mark.asyncio
    async def test_summary(self, client):
        await create_position(client, amount=1.0, buy_price=100.0, current_price=110.0)
        await create_position(client, asset_id="ethereum", symbol="eth", amount=1.0, buy_price=100.0, current_price=90.0)

        response = await client.get("/api/portfolio/summary")

        assert response.status_code == 200
        data = response.json()
        assert data["position_count"] == 2
        assert data["total_value"] == 200.0
        assert data["total_profit"] == 0.0

    @pytest.mark.asyncio
    async def test_mark_to_market(self, client, market_list):
        await create_position(client, amount=1.0, buy_price=100.0)
        market_list.assets = [create_asset("bitcoin", price=200.0)]

        response = await client.post("/api/portfolio/mark-to-market")

        assert response.status_code == 200
        data = response.json()
        assert data["updated"] == 1
        assert data["summary"]["total_profit_percent"] == 100.0
