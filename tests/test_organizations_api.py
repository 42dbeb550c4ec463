"""
EarthSafe API - Organizations API Tests
"""

import pytest

from app.models.organization import OrganizationType, OrgRole


class TestCreateOrganization:
    @pytest.mark.asyncio
    async def test_creator_becomes_owner(self, client, auth_headers):
        response = await client.post(
            "/api/orgs",
            headers=auth_headers,
            json={"name": "Shurugwi Claims", "type": "mine", "location": "Shurugwi"},
        )

        assert response.status_code == 201
        org = response.json()
        assert org["name"] == "Shurugwi Claims"
        assert org["country"] == "Zimbabwe"
        assert org["commodity"] == ["gold"]
        assert org["status"] == "active"

        mine = await client.get("/api/orgs/my-orgs", headers=auth_headers)
        assert mine.status_code == 200
        entries = mine.json()
        assert len(entries) == 1
        assert entries[0]["organization"]["id"] == org["id"]
        assert entries[0]["role"] == "owner"

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        response = await client.post("/api/orgs", json={"name": "Nameless"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_rejects_unknown_type(self, client, auth_headers):
        response = await client.post(
            "/api/orgs",
            headers=auth_headers,
            json={"name": "Odd", "type": "bakery"},
        )

        assert response.status_code == 422


class TestReadOrganization:
    @pytest.mark.asyncio
    async def test_member_can_read(self, client, auth_headers, test_org):
        response = await client.get(f"/api/orgs/{test_org.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["mining_license_number"] == "ML-TEST-001"

    @pytest.mark.asyncio
    async def test_non_member_is_forbidden(self, client, other_headers, test_org):
        response = await client.get(f"/api/orgs/{test_org.id}", headers=other_headers)

        assert response.status_code == 403
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == 403
        assert body["error"]["message"] == "Not a member of this organization"

    @pytest.mark.asyncio
    async def test_buyers_lists_only_buyer_orgs(self, client, auth_headers, other_headers, test_org):
        await client.post(
            "/api/orgs",
            headers=other_headers,
            json={"name": "Fidelity Printers & Refiners", "type": OrganizationType.BUYER.value},
        )

        response = await client.get("/api/orgs/buyers", headers=auth_headers)

        assert response.status_code == 200
        names = [org["name"] for org in response.json()]
        assert names == ["Fidelity Printers & Refiners"]


class TestUpdateOrganization:
    @pytest.mark.asyncio
    async def test_owner_can_update(self, client, auth_headers, test_org):
        response = await client.patch(
            f"/api/orgs/{test_org.id}",
            headers=auth_headers,
            json={"location": "Gweru", "contact_phone": "+263775550000"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["location"] == "Gweru"
        assert data["contact_phone"] == "+263775550000"
        assert data["name"] == "Test Mine"

    @pytest.mark.asyncio
    async def test_miner_cannot_update(self, client, test_org, other_user, other_headers, add_member):
        await add_member(test_org, other_user, OrgRole.MINER)

        response = await client.patch(
            f"/api/orgs/{test_org.id}",
            headers=other_headers,
            json={"name": "Hijacked"},
        )

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Admin access required"


class TestMembers:
    @pytest.mark.asyncio
    async def test_add_and_list_members(self, client, auth_headers, test_org, other_user):
        response = await client.post(
            f"/api/orgs/{test_org.id}/members",
            headers=auth_headers,
            json={"email": other_user.email, "role": "supervisor"},
        )

        assert response.status_code == 201
        assert response.json()["role"] == "supervisor"
        assert response.json()["user_id"] == str(other_user.id)

        listing = await client.get(f"/api/orgs/{test_org.id}/members", headers=auth_headers)
        assert listing.status_code == 200
        emails = {m["email"] for m in listing.json()}
        assert emails == {"owner@example.com", "outsider@example.com"}

    @pytest.mark.asyncio
    async def test_add_unknown_user(self, client, auth_headers, test_org):
        response = await client.post(
            f"/api/orgs/{test_org.id}/members",
            headers=auth_headers,
            json={"email": "nobody@example.com"},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_add_existing_member(self, client, auth_headers, test_org, test_user):
        response = await client.post(
            f"/api/orgs/{test_org.id}/members",
            headers=auth_headers,
            json={"email": test_user.email},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_remove_member(self, client, auth_headers, test_org, other_user, other_headers, add_member):
        await add_member(test_org, other_user)

        response = await client.delete(
            f"/api/orgs/{test_org.id}/members/{other_user.id}",
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Member removed"

        # The removed user has lost access
        again = await client.get(f"/api/orgs/{test_org.id}", headers=other_headers)
        assert again.status_code == 403

    @pytest.mark.asyncio
    async def test_cannot_remove_self(self, client, auth_headers, test_org, test_user):
        response = await client.delete(
            f"/api/orgs/{test_org.id}/members/{test_user.id}",
            headers=auth_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_admin_cannot_remove_owner(
        self, client, test_org, test_user, other_user, make_headers, add_member
    ):
        await add_member(test_org, other_user, OrgRole.ADMIN)

        response = await client.delete(
            f"/api/orgs/{test_org.id}/members/{test_user.id}",
            headers=make_headers(other_user),
        )

        assert response.status_code == 403
