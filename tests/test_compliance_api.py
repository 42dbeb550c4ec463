"""
EarthSafe API - Compliance API Tests

Licenses and permits, the compliance summary, incident reports and
safety checklists.
"""

from datetime import date, timedelta
from pathlib import Path

import pytest

from app.config import settings
from app.models.organization import OrgRole


def _in_days(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


async def _document(client, org, headers, doc_type="Mining License", days=365, files=None, **fields):
    data = {"type": doc_type, "expiry_date": _in_days(days), **fields}
    return await client.post(
        f"/api/orgs/{org.id}/compliance/documents",
        headers=headers,
        data=data,
        files=files,
    )


async def _incident(client, org, headers, **overrides):
    payload = {
        "type": "near_miss",
        "severity": "medium",
        "description": "Loose rock above the haulage",
        **overrides,
    }
    response = await client.post(f"/api/orgs/{org.id}/compliance/incidents", headers=headers, json=payload)
    assert response.status_code == 201
    return response.json()


class TestDocuments:
    @pytest.mark.asyncio
    async def test_create_document_form(self, client, auth_headers, test_org, test_user):
        response = await _document(
            client, test_org, auth_headers,
            number="ML-2026-77", issuer="Ministry of Mines",
            file_url="https://cdn.example.com/licence.pdf",
        )

        assert response.status_code == 201
        doc = response.json()
        assert doc["type"] == "Mining License"
        assert doc["status"] == "active"
        assert doc["days_left"] == 365
        assert doc["file_url"] == "https://cdn.example.com/licence.pdf"
        assert doc["uploaded_by_id"] == str(test_user.id)

    @pytest.mark.asyncio
    async def test_attached_file_is_stored(self, client, auth_headers, test_org):
        response = await _document(
            client, test_org, auth_headers,
            doc_type="Local Permit",
            files={"file": ("permit.pdf", b"%PDF-1.4 permit", "application/pdf")},
        )

        assert response.status_code == 201
        url = response.json()["file_url"]
        prefix = settings.uploads_url_prefix.rstrip("/") + "/"
        assert url.startswith(prefix)
        assert "/compliance/" in url
        assert (Path(settings.storage_local_path) / url[len(prefix):]).exists()

    @pytest.mark.asyncio
    async def test_unknown_type_rejected(self, client, auth_headers, test_org):
        response = await _document(client, test_org, auth_headers, doc_type="Fishing Permit")

        assert response.status_code == 422
        assert "Mining License" in response.json()["error"]["details"]["allowed"]

    @pytest.mark.asyncio
    async def test_status_is_derived_from_expiry(self, client, auth_headers, test_org):
        await _document(client, test_org, auth_headers, doc_type="Mining License", days=100)
        await _document(client, test_org, auth_headers, doc_type="Local Permit", days=10)
        await _document(client, test_org, auth_headers, doc_type="Prospecting License", days=0)

        response = await client.get(f"/api/orgs/{test_org.id}/compliance/documents", headers=auth_headers)

        assert response.status_code == 200
        # Ordered by expiry date, soonest first
        assert [(d["type"], d["status"]) for d in response.json()] == [
            ("Prospecting License", "expired"),
            ("Local Permit", "expiring"),
            ("Mining License", "active"),
        ]

    @pytest.mark.asyncio
    async def test_delete_document_removes_file(self, client, auth_headers, test_org):
        doc = (await _document(
            client, test_org, auth_headers,
            files={"file": ("licence.pdf", b"%PDF-1.4 licence", "application/pdf")},
        )).json()
        prefix = settings.uploads_url_prefix.rstrip("/") + "/"
        stored = Path(settings.storage_local_path) / doc["file_url"][len(prefix):]
        assert stored.exists()

        response = await client.delete(
            f"/api/orgs/{test_org.id}/compliance/documents/{doc['id']}",
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Document deleted"
        assert not stored.exists()


class TestComplianceSummary:
    @pytest.mark.asyncio
    async def test_summary_counts_valid_required_types(self, client, auth_headers, test_org):
        await _document(client, test_org, auth_headers, doc_type="Mining License", days=200)
        await _document(client, test_org, auth_headers, doc_type="Health and Safety Certification", days=5)
        await _document(client, test_org, auth_headers, doc_type="Local Permit", days=-30)

        response = await client.get(f"/api/orgs/{test_org.id}/compliance/summary", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 40
        assert data["valid_required"] == 2
        assert data["total_required"] == 5
        assert "Local Permit" in data["missing"]
        assert data["counts"] == {"active": 1, "expiring": 1, "expired": 1}

    @pytest.mark.asyncio
    async def test_summary_for_empty_org(self, client, auth_headers, test_org):
        response = await client.get(f"/api/orgs/{test_org.id}/compliance/summary", headers=auth_headers)

        assert response.json()["score"] == 0
        assert len(response.json()["missing"]) == 5


class TestIncidents:
    @pytest.mark.asyncio
    async def test_report_incident(self, client, auth_headers, test_org, test_user):
        incident = await _incident(client, test_org, auth_headers, photos=["https://cdn.example.com/p.jpg"])

        assert incident["status"] == "open"
        assert incident["reported_by_id"] == str(test_user.id)
        assert incident["photos"] == ["https://cdn.example.com/p.jpg"]

        listing = await client.get(f"/api/orgs/{test_org.id}/compliance/incidents", headers=auth_headers)
        assert [i["id"] for i in listing.json()] == [incident["id"]]

    @pytest.mark.asyncio
    async def test_reporter_can_resolve(self, client, test_org, other_user, other_headers, add_member):
        await add_member(test_org, other_user, OrgRole.MINER)
        incident = await _incident(client, test_org, other_headers)

        response = await client.patch(
            f"/api/orgs/{test_org.id}/compliance/incidents/{incident['id']}",
            headers=other_headers,
            json={"status": "resolved", "resolution_notes": "Scaled and barred down"},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "resolved"
        assert response.json()["severity"] == "medium"

    @pytest.mark.asyncio
    async def test_other_miner_cannot_edit(
        self, client, auth_headers, test_org, other_user, other_headers, add_member
    ):
        await add_member(test_org, other_user, OrgRole.MINER)
        incident = await _incident(client, test_org, auth_headers)

        response = await client.patch(
            f"/api/orgs/{test_org.id}/compliance/incidents/{incident['id']}",
            headers=other_headers,
            json={"severity": "low"},
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_can_delete_any_incident(
        self, client, auth_headers, test_org, other_user, other_headers, add_member
    ):
        await add_member(test_org, other_user, OrgRole.MINER)
        incident = await _incident(client, test_org, other_headers)

        response = await client.delete(
            f"/api/orgs/{test_org.id}/compliance/incidents/{incident['id']}",
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Incident deleted"

    @pytest.mark.asyncio
    async def test_incident_from_another_org(self, client, auth_headers, other_headers, test_org):
        incident = await _incident(client, test_org, auth_headers)
        other_org = (await client.post("/api/orgs", headers=other_headers, json={"name": "Other Mine"})).json()

        response = await client.delete(
            f"/api/orgs/{other_org['id']}/compliance/incidents/{incident['id']}",
            headers=other_headers,
        )

        assert response.status_code == 400


class TestSafetyChecklist:
    @pytest.mark.asyncio
    async def test_no_checklist_yet(self, client, auth_headers, test_org):
        response = await client.get(f"/api/orgs/{test_org.id}/compliance/checklist/today", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_submit_and_read_today(self, client, auth_headers, test_org):
        items = [
            {"id": "ppe", "label": "PPE worn", "checked": True},
            {"id": "ventilation", "label": "Ventilation checked", "checked": False, "notes": "Fan 2 down"},
        ]
        response = await client.post(
            f"/api/orgs/{test_org.id}/compliance/checklist",
            headers=auth_headers,
            json={"items": items},
        )

        assert response.status_code == 201
        checklist = response.json()
        assert checklist["status"] == "submitted"
        assert checklist["checklist_date"] == date.today().isoformat()

        today = await client.get(f"/api/orgs/{test_org.id}/compliance/checklist/today", headers=auth_headers)
        assert today.json()["id"] == checklist["id"]
        assert today.json()["items"][1]["notes"] == "Fan 2 down"

    @pytest.mark.asyncio
    async def test_checklist_needs_items(self, client, auth_headers, test_org):
        response = await client.post(
            f"/api/orgs/{test_org.id}/compliance/checklist",
            headers=auth_headers,
            json={"items": []},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_checklists_are_per_user(
        self, client, auth_headers, test_org, other_user, other_headers, add_member
    ):
        await add_member(test_org, other_user)
        await client.post(
            f"/api/orgs/{test_org.id}/compliance/checklist",
            headers=auth_headers,
            json={"items": [{"id": "ppe", "label": "PPE worn", "checked": True}]},
        )

        response = await client.get(f"/api/orgs/{test_org.id}/compliance/checklist/today", headers=other_headers)

        assert response.json() is None

    @pytest.mark.asyncio
    async def test_checklist_links_own_shift(self, client, auth_headers, test_org):
        shift = (await client.post(f"/api/orgs/{test_org.id}/shifts", headers=auth_headers, json={})).json()

        response = await client.post(
            f"/api/orgs/{test_org.id}/compliance/checklist",
            headers=auth_headers,
            json={"shift_id": shift["id"], "items": [{"id": "ppe", "label": "PPE worn", "checked": True}]},
        )

        assert response.status_code == 201
        assert response.json()["shift_id"] == shift["id"]

    @pytest.mark.asyncio
    async def test_checklist_rejects_foreign_shift(self, client, auth_headers, other_headers, test_org):
        other_org = (await client.post("/api/orgs", headers=other_headers, json={"name": "Other Mine"})).json()
        foreign_shift = (await client.post(
            f"/api/orgs/{other_org['id']}/shifts", headers=other_headers, json={}
        )).json()

        response = await client.post(
            f"/api/orgs/{test_org.id}/compliance/checklist",
            headers=auth_headers,
            json={"shift_id": foreign_shift["id"], "items": [{"id": "ppe", "label": "PPE worn", "checked": True}]},
        )

        assert response.status_code == 404
        today = await client.get(f"/api/orgs/{test_org.id}/compliance/checklist/today", headers=auth_headers)
        assert today.json() is None
