"""
EarthSafe API - Equipment API Tests
"""

from datetime import date, timedelta

import pytest

from app.models.compliance import ComplianceDocument, ComplianceDocumentType


class TestEquipmentRegister:
    @pytest.mark.asyncio
    async def test_current_value_defaults_to_purchase_price(self, client, auth_headers, test_org):
        response = await client.post(
            f"/api/orgs/{test_org.id}/equipment",
            headers=auth_headers,
            json={"name": "Jaw crusher", "type": "processing_equipment", "purchase_price": 4200},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "operational"
        assert data["current_value"] == 4200.0

    @pytest.mark.asyncio
    async def test_list_is_sorted_by_name(self, client, auth_headers, test_org):
        for name in ("Water pump", "Compressor"):
            await client.post(
                f"/api/orgs/{test_org.id}/equipment",
                headers=auth_headers,
                json={"name": name, "type": "tools"},
            )

        response = await client.get(f"/api/orgs/{test_org.id}/equipment", headers=auth_headers)

        assert [e["name"] for e in response.json()] == ["Compressor", "Water pump"]

    @pytest.mark.asyncio
    async def test_update_status(self, client, auth_headers, test_org):
        created = (await client.post(
            f"/api/orgs/{test_org.id}/equipment",
            headers=auth_headers,
            json={"name": "Generator", "type": "heavy_machinery"},
        )).json()

        response = await client.patch(
            f"/api/orgs/{test_org.id}/equipment/{created['id']}",
            headers=auth_headers,
            json={"status": "maintenance", "next_maintenance_date": "2026-12-01", "name": None},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "maintenance"
        assert response.json()["next_maintenance_date"] == "2026-12-01"
        assert response.json()["name"] == "Generator"

    @pytest.mark.asyncio
    async def test_delete_equipment(self, client, auth_headers, test_org):
        created = (await client.post(
            f"/api/orgs/{test_org.id}/equipment",
            headers=auth_headers,
            json={"name": "Wheelbarrow", "type": "tools"},
        )).json()
        url = f"/api/orgs/{test_org.id}/equipment/{created['id']}"

        response = await client.delete(url, headers=auth_headers)
        assert response.json()["message"] == "Equipment deleted"
        assert (await client.get(url, headers=auth_headers)).status_code == 404


class TestEquipmentReadiness:
    @pytest.mark.asyncio
    async def test_needs_valid_mining_license(self, client, auth_headers, test_org):
        response = await client.get(f"/api/orgs/{test_org.id}/equipment/readiness", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "profile_complete": True,
            "production_data": True,
            "compliance_ready": False,
            "can_proceed": False,
        }

    @pytest.mark.asyncio
    async def test_expired_license_does_not_count(self, client, db_session, auth_headers, test_org):
        db_session.add(ComplianceDocument(
            org_id=test_org.id,
            type=ComplianceDocumentType.MINING_LICENSE,
            expiry_date=date.today() - timedelta(days=1),
        ))
        await db_session.commit()

        response = await client.get(f"/api/orgs/{test_org.id}/equipment/readiness", headers=auth_headers)

        assert response.json()["compliance_ready"] is False

    @pytest.mark.asyncio
    async def test_ready_with_license_and_consent(self, client, db_session, auth_headers, test_org):
        db_session.add(ComplianceDocument(
            org_id=test_org.id,
            type=ComplianceDocumentType.MINING_LICENSE,
            expiry_date=date.today() + timedelta(days=90),
        ))
        await db_session.commit()

        response = await client.get(
            f"/api/orgs/{test_org.id}/equipment/readiness",
            headers=auth_headers,
            params={"consent": "true"},
        )

        assert response.json()["compliance_ready"] is True
        assert response.json()["can_proceed"] is True
