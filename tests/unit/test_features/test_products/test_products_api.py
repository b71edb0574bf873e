"""HTTP tests for the /api/v1/products REST endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock

from httpx import ASGITransport, AsyncClient
import pytest

from catalog_service.features.products.dependencies import get_product_use_case
from catalog_service.features.products.router import resolve_limit

BASE = "/api/v1/products"


async def _create(client: AsyncClient, **overrides) -> dict:
    payload = {"name": "Desk Lamp", "price": 24.5, "category": "ELECTRONICS", **overrides}
    response = await client.post(BASE, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateProduct:
    async def test_created(self, client):
        body = await _create(client)

        assert body["id"] >= 1
        assert body["name"] == "Desk Lamp"
        assert body["price"] == 24.5
        assert body["category"] == "ELECTRONICS"
        assert body["active"] is True

    async def test_client_supplied_id_is_ignored(self, client):
        first = await _create(client)
        second = await _create(client, id=first["id"])

        assert second["id"] != first["id"]

    async def test_validation_errors_are_reported_per_field(self, client):
        response = await client.post(BASE, json={"name": "", "price": 0})

        assert response.status_code == 400
        body = response.json()
        assert body["errors"] == {
            "name": "Product name is required",
            "price": "Price must be greater than 0",
            "category": "Category is required",
        }

    async def test_non_json_body_is_unsupported(self, client):
        response = await client.post(
            BASE, content="name=Lamp", headers={"content-type": "text/plain"},
        )

        assert response.status_code == 415
        assert response.json()["status"] == 415


class TestListProducts:
    async def test_defaults(self, client, seeded_products):
        response = await client.get(BASE)

        assert response.status_code == 200
        body = response.json()
        assert body["size"] == 5
        assert body["limit"] == 20
        assert body["hasNext"] is False
        assert body["hasPrevious"] is False
        assert body["previousCursor"] is None
        assert body["pageInfo"]["size"] == 5

    async def test_cursor_walk(self, client, seeded_products):
        first = (await client.get(BASE, params={"limit": 2})).json()
        second = (await client.get(BASE, params={"limit": 2, "cursor": first["nextCursor"]})).json()
        third = (await client.get(BASE, params={"limit": 2, "cursor": second["nextCursor"]})).json()

        ids = [p.id for p in seeded_products]
        assert [item["id"] for item in first["content"]] == ids[0:2]
        assert [item["id"] for item in second["content"]] == ids[2:4]
        assert [item["id"] for item in third["content"]] == ids[4:]
        assert second["hasPrevious"] is True
        assert second["previousCursor"] == str(ids[2])
        assert third["hasNext"] is False

    @pytest.mark.parametrize("limit", ["0", "101", "abc", ""])
    async def test_unusable_limit_falls_back_to_default(self, client, seeded_products, limit):
        body = (await client.get(BASE, params={"limit": limit})).json()

        assert body["limit"] == 20

    async def test_malformed_cursor_returns_first_page(self, client, seeded_products):
        body = (await client.get(BASE, params={"cursor": "%%%"})).json()

        assert body["content"][0]["id"] == seeded_products[0].id
        assert body["hasPrevious"] is False

    async def test_unknown_category_is_bad_request(self, client):
        response = await client.get(BASE, params={"category": "GARDEN"})

        assert response.status_code == 400
        assert response.json()["type"] == "invalid-argument"

    async def test_name_and_category_filters(self, client):
        await _create(client, name="Desk Lamp")
        await _create(client, name="Cookbook", category="BOOKS")

        body = (await client.get(BASE, params={"name": "LAMP", "category": "electronics"})).json()

        assert [item["name"] for item in body["content"]] == ["Desk Lamp"]

    async def test_inactive_products_on_request(self, client):
        created = await _create(client)
        await client.delete(f"{BASE}/{created['id']}")

        active = (await client.get(BASE)).json()
        inactive = (await client.get(BASE, params={"active": "false"})).json()

        assert active["content"] == []
        assert [item["id"] for item in inactive["content"]] == [created["id"]]


class TestGetProduct:
    async def test_found(self, client):
        created = await _create(client)

        response = await client.get(f"{BASE}/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    async def test_inactive_is_not_found(self, client):
        created = await _create(client)
        await client.delete(f"{BASE}/{created['id']}")

        response = await client.get(f"{BASE}/{created['id']}")

        assert response.status_code == 404
        assert response.json()["detail"] == f"Active product not found with id: {created['id']}"

    async def test_non_numeric_id_is_bad_request(self, client):
        response = await client.get(f"{BASE}/abc")

        assert response.status_code == 400


class TestUpdateProduct:
    async def test_full_replace(self, client):
        created = await _create(client)

        response = await client.put(
            f"{BASE}/{created['id']}",
            json={"name": "Floor Lamp", "price": "99.99", "category": "electronics", "active": True},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == created["id"]
        assert body["name"] == "Floor Lamp"
        assert body["price"] == 99.99

    async def test_inactive_product_can_be_updated(self, client):
        created = await _create(client)
        await client.delete(f"{BASE}/{created['id']}")

        response = await client.put(
            f"{BASE}/{created['id']}",
            json={"name": "Revived", "price": 1, "category": "BOOKS", "active": True},
        )

        assert response.status_code == 200
        assert response.json()["active"] is True

    async def test_missing(self, client):
        response = await client.put(
            f"{BASE}/999", json={"name": "Ghost", "price": 1, "category": "BOOKS"},
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found with id: 999"


class TestDeactivateProduct:
    async def test_no_content_and_idempotent(self, client):
        created = await _create(client)

        first = await client.delete(f"{BASE}/{created['id']}")
        second = await client.delete(f"{BASE}/{created['id']}")

        assert first.status_code == 204
        assert second.status_code == 204

    async def test_missing(self, client):
        response = await client.delete(f"{BASE}/999")

        assert response.status_code == 404


async def test_unexpected_error_is_generic_500(app):
    use_case = AsyncMock()
    use_case.get_active_product_by_id.side_effect = RuntimeError("database exploded")
    app.dependency_overrides[get_product_use_case] = lambda: use_case

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get(f"{BASE}/1")

    assert response.status_code == 500
    body = response.json()
    assert body["detail"] == "An unexpected error occurred while processing your request"
    assert "exploded" not in response.text


class TestResolveLimit:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, 20), ("", 20), (" 7 ", 7), ("1", 1), ("100", 100), ("0", 20), ("x", 20)],
    )
    def test_resolve_limit(self, raw, expected):
        assert resolve_limit(raw) == expected
