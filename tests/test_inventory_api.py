"""
EarthSafe API - Inventory API Tests
"""

import pytest


async def _item(client, org, headers, **overrides):
    payload = {
        "item_type": "gold",
        "name": "Smelted bar",
        "quantity": 12.5,
        "unit": "grams",
        "value_per_unit": 60,
        **overrides,
    }
    response = await client.post(f"/api/orgs/{org.id}/inventory", headers=headers, json=payload)
    assert response.status_code == 201
    return response.json()


class TestInventoryItems:
    @pytest.mark.asyncio
    async def test_total_value_is_computed(self, client, auth_headers, test_org):
        item = await _item(client, test_org, auth_headers)

        assert item["total_value"] == 750.0
        assert item["last_updated"] is not None

    @pytest.mark.asyncio
    async def test_update_recomputes_total_value(self, client, auth_headers, test_org):
        item = await _item(client, test_org, auth_headers)

        response = await client.patch(
            f"/api/orgs/{test_org.id}/inventory/{item['id']}",
            headers=auth_headers,
            json={"quantity": 20, "name": None},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["quantity"] == 20.0
        assert data["total_value"] == 1200.0
        assert data["name"] == "Smelted bar"

    @pytest.mark.asyncio
    async def test_list_sorted_by_type_then_name(self, client, auth_headers, test_org):
        await _item(client, test_org, auth_headers, item_type="ore", name="ROM ore", unit="tons")
        await _item(client, test_org, auth_headers, item_type="consumable", name="Mercury-free reagent", unit="kg")
        await _item(client, test_org, auth_headers, item_type="consumable", name="Cyanide", unit="kg")

        response = await client.get(f"/api/orgs/{test_org.id}/inventory", headers=auth_headers)

        assert [i["name"] for i in response.json()] == ["Cyanide", "Mercury-free reagent", "ROM ore"]

    @pytest.mark.asyncio
    async def test_delete_item(self, client, auth_headers, test_org):
        item = await _item(client, test_org, auth_headers)
        url = f"/api/orgs/{test_org.id}/inventory/{item['id']}"

        response = await client.delete(url, headers=auth_headers)
        assert response.json()["message"] == "Inventory item deleted"

        assert (await client.get(url, headers=auth_headers)).status_code == 404

    @pytest.mark.asyncio
    async def test_requires_membership(self, client, other_headers, test_org):
        response = await client.get(f"/api/orgs/{test_org.id}/inventory", headers=other_headers)

        assert response.status_code == 403


class TestInventoryStats:
    @pytest.mark.asyncio
    async def test_stats_by_type(self, client, auth_headers, test_org):
        await _item(client, test_org, auth_headers)
        await _item(client, test_org, auth_headers, name="Nuggets", quantity=2, value_per_unit=65)
        await _item(client, test_org, auth_headers, item_type="ore", name="Stockpile", quantity=3, unit="tons", value_per_unit=40)

        response = await client.get(f"/api/orgs/{test_org.id}/inventory/stats", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "total_items": 3,
            "total_value": 1000.0,
            "by_type": {
                "gold": {"count": 2, "value": 880.0},
                "ore": {"count": 1, "value": 120.0},
            },
        }

    @pytest.mark.asyncio
    async def test_empty_stats(self, client, auth_headers, test_org):
        response = await client.get(f"/api/orgs/{test_org.id}/inventory/stats", headers=auth_headers)

        assert response.json() == {"total_items": 0, "total_value": 0.0, "by_type": {}}
