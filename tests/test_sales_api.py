"""
EarthSafe API - Sales API Tests
"""

import uuid

import pytest

from app.models.organization import OrgRole


async def _sale(client, org, headers, **overrides):
    payload = {"quantity": 5.5, "price_per_unit": 62.4, "receipt_number": "FPR-1001", **overrides}
    return await client.post(f"/api/orgs/{org.id}/sales", headers=headers, json=payload)


class TestCreateSale:
    @pytest.mark.asyncio
    async def test_defaults_to_fidelity(self, client, auth_headers, test_org):
        response = await _sale(client, test_org, auth_headers)

        assert response.status_code == 201
        sale = response.json()
        assert sale["buyer_name"] == "Fidelity Printers & Refiners"
        assert sale["source"] == "fidelity"
        assert sale["status"] == "pending"
        assert sale["reference_id"] == "FPR-1001"
        assert sale["mineral_type"] == "gold"
        assert sale["grams"] == 5.5
        assert sale["total_value"] == 343.2

    @pytest.mark.asyncio
    async def test_private_buyer(self, client, auth_headers, test_org):
        response = await _sale(client, test_org, auth_headers, buyer_name="Private buyer, Kadoma")

        assert response.json()["source"] == "private"

    @pytest.mark.asyncio
    async def test_duplicate_receipt_number_conflicts(self, client, auth_headers, test_org):
        await _sale(client, test_org, auth_headers)
        response = await _sale(client, test_org, auth_headers, quantity=1)

        assert response.status_code == 409
        assert response.json()["error"]["details"] == {"reference_id": "FPR-1001"}

    @pytest.mark.asyncio
    async def test_quantity_must_be_positive(self, client, auth_headers, test_org):
        response = await _sale(client, test_org, auth_headers, quantity=0)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_viewer_cannot_record_sales(self, client, test_org, other_user, other_headers, add_member):
        await add_member(test_org, other_user, OrgRole.VIEWER)

        response = await _sale(client, test_org, other_headers)

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Insufficient permissions"

    @pytest.mark.asyncio
    async def test_miner_can_record_sales(self, client, test_org, other_user, other_headers, add_member):
        await add_member(test_org, other_user, OrgRole.MINER)

        response = await _sale(client, test_org, other_headers)

        assert response.status_code == 201


class TestManageSales:
    @pytest.mark.asyncio
    async def test_list_sales(self, client, auth_headers, test_org):
        await _sale(client, test_org, auth_headers, receipt_number="A-1")
        await _sale(client, test_org, auth_headers, receipt_number="A-2")

        response = await client.get(f"/api/orgs/{test_org.id}/sales", headers=auth_headers)

        assert response.status_code == 200
        assert {s["reference_id"] for s in response.json()} == {"A-1", "A-2"}

    @pytest.mark.asyncio
    async def test_update_recomputes_value_and_source(self, client, auth_headers, test_org):
        sale = (await _sale(client, test_org, auth_headers)).json()

        response = await client.patch(
            f"/api/orgs/{test_org.id}/sales/{sale['id']}",
            headers=auth_headers,
            json={"quantity": 10, "buyer_name": "Harare Gold Traders", "status": "verified"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_value"] == 624.0
        assert data["source"] == "other"
        assert data["status"] == "verified"

    @pytest.mark.asyncio
    async def test_reconcile_with_own_shift(self, client, auth_headers, test_org):
        sale = (await _sale(client, test_org, auth_headers)).json()
        shift = (await client.post(f"/api/orgs/{test_org.id}/shifts", headers=auth_headers, json={})).json()

        response = await client.patch(
            f"/api/orgs/{test_org.id}/sales/{sale['id']}",
            headers=auth_headers,
            json={"reconciled_with_shift_id": shift["id"]},
        )

        assert response.status_code == 200
        assert response.json()["reconciled_with_shift_id"] == shift["id"]

    @pytest.mark.asyncio
    async def test_reconcile_with_foreign_shift_is_not_found(self, client, auth_headers, other_headers, test_org):
        sale = (await _sale(client, test_org, auth_headers)).json()
        other_org = (await client.post("/api/orgs", headers=other_headers, json={"name": "Other Mine"})).json()
        foreign_shift = (await client.post(
            f"/api/orgs/{other_org['id']}/shifts", headers=other_headers, json={}
        )).json()
        url = f"/api/orgs/{test_org.id}/sales/{sale['id']}"

        foreign = await client.patch(url, headers=auth_headers, json={"reconciled_with_shift_id": foreign_shift["id"]})
        unknown = await client.patch(url, headers=auth_headers, json={"reconciled_with_shift_id": str(uuid.uuid4())})

        assert foreign.status_code == 404
        assert unknown.status_code == 404
        stored = await client.get(f"/api/orgs/{test_org.id}/sales", headers=auth_headers)
        assert stored.json()[0]["reconciled_with_shift_id"] is None

    @pytest.mark.asyncio
    async def test_delete_requires_admin(self, client, auth_headers, test_org, other_user, other_headers, add_member):
        await add_member(test_org, other_user, OrgRole.MINER)
        sale = (await _sale(client, test_org, other_headers)).json()
        url = f"/api/orgs/{test_org.id}/sales/{sale['id']}"

        denied = await client.delete(url, headers=other_headers)
        assert denied.status_code == 403

        response = await client.delete(url, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Sale deleted"
