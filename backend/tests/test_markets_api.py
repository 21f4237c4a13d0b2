"""API tests for market list endpoints."""

import pytest

from conftest import create_page


class TestGetMarkets:
    """Tests for GET /api/markets."""

    @pytest.mark.asyncio
    async def test_initial_state(self, client):
        response = await client.get("/api/markets")

        assert response.status_code == 200
        data = response.json()
        assert data["assets"] == []
        assert data["page"] == 1
        assert data["has_more"] is True
        assert data["sort_option"] == "Market Cap"


class TestLoad:
    """Tests for POST /api/markets/load and /api/markets/refresh."""

    @pytest.mark.asyncio
    async def test_load_without_body(self, client, fake_client):
        fake_client.pages[1] = create_page(1, 50)

        response = await client.post("/api/markets/load")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert len(data["assets"]) == 50
        assert data["page"] == 2

    @pytest.mark.asyncio
    async def test_load_with_reset(self, client, fake_client):
        fake_client.pages[1] = create_page(1, 50)
        fake_client.pages[2] = create_page(2, 50)
        await client.post("/api/markets/load")
        await client.post("/api/markets/load")

        response = await client.post("/api/markets/load", json={"reset": True})

        assert len(response.json()["assets"]) == 50
        assert fake_client.market_calls[-1] == (1, 50)

    @pytest.mark.asyncio
    async def test_failure_is_reported_not_raised(self, client, fake_client):
        fake_client.pages[1] = create_page(1, 50)
        await client.post("/api/markets/load")
        fake_client.fail = True

        response = await client.post("/api/markets/refresh")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert len(data["assets"]) == 50
        assert data["is_refreshing"] is False


class TestSort:
    """Tests for PUT /api/markets/sort."""

    @pytest.mark.asyncio
    async def test_sort_by_price(self, client, fake_client):
        fake_client.pages[1] = create_page(1, 5)
        await client.post("/api/markets/load")

        response = await client.put("/api/markets/sort", json={"sort_option": "Price"})

        assert response.status_code == 200
        data = response.json()
        assert data["sort_option"] == "Price"
        assert [a["id"] for a in data["assets"]] == ["coin-4", "coin-3", "coin-2", "coin-1", "coin-0"]
        assert len(fake_client.market_calls) == 1

    @pytest.mark.asyncio
    async def test_unknown_sort_option(self, client):
        response = await client.put("/api/markets/sort", json={"sort_option": "Volume"})
        assert response.status_code == 422


class TestAppeared:
    """Tests for POST /api/markets/appeared/{asset_id}."""

    @pytest.mark.asyncio
    async def test_threshold_row_loads_next_page(self, client, fake_client):
        fake_client.pages[1] = create_page(1, 50)
        fake_client.pages[2] = create_page(2, 50)
        await client.post("/api/markets/load")

        response = await client.post("/api/markets/appeared/coin-40")

        data = response.json()
        assert data["loaded"] is True
        assert len(data["assets"]) == 100

    @pytest.mark.asyncio
    async def test_other_row_does_nothing(self, client, fake_client):
        fake_client.pages[1] = create_page(1, 50)
        await client.post("/api/markets/load")

        response = await client.post("/api/markets/appeared/coin-3")

        assert response.json()["loaded"] is False
        assert len(fake_client.market_calls) == 1
