"""
EarthSafe API - Shifts API Tests

Shifts, timesheets, material movements and equipment usage.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from app.models.organization import OrgRole


async def _open_shift(client, org, headers, **overrides):
    payload = {"type": "day", "notes": "Level 3 stoping", **overrides}
    response = await client.post(f"/api/orgs/{org.id}/shifts", headers=headers, json=payload)
    assert response.status_code == 201
    return response.json()


class TestShifts:
    @pytest.mark.asyncio
    async def test_create_shift_defaults(self, client, auth_headers, test_org, test_user):
        shift = await _open_shift(client, test_org, auth_headers, weather_condition="sunny")

        assert shift["status"] == "open"
        assert shift["type"] == "day"
        assert shift["supervisor_id"] == str(test_user.id)
        assert shift["created_by_id"] == str(test_user.id)
        assert shift["start_time"] is not None
        assert shift["end_time"] is None

    @pytest.mark.asyncio
    async def test_list_shifts(self, client, auth_headers, test_org):
        await _open_shift(client, test_org, auth_headers)
        await _open_shift(client, test_org, auth_headers, type="night")

        response = await client.get(f"/api/orgs/{test_org.id}/shifts", headers=auth_headers)

        assert response.status_code == 200
        assert sorted(s["type"] for s in response.json()) == ["day", "night"]

    @pytest.mark.asyncio
    async def test_non_member_cannot_open_shift(self, client, other_headers, test_org):
        response = await client.post(
            f"/api/orgs/{test_org.id}/shifts",
            headers=other_headers,
            json={"type": "day"},
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_approving_records_approver(self, client, auth_headers, test_org, test_user):
        shift = await _open_shift(client, test_org, auth_headers)

        response = await client.patch(
            f"/api/orgs/{test_org.id}/shifts/{shift['id']}",
            headers=auth_headers,
            json={"status": "approved"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "approved"
        assert data["approved_by_id"] == str(test_user.id)
        assert data["approval_date"] is not None

    @pytest.mark.asyncio
    async def test_update_unknown_shift(self, client, auth_headers, test_org):
        response = await client.patch(
            f"/api/orgs/{test_org.id}/shifts/{uuid.uuid4()}",
            headers=auth_headers,
            json={"notes": "ghost"},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_shift_details_bundle_children(self, client, auth_headers, test_org):
        shift = await _open_shift(client, test_org, auth_headers)
        sid = shift["id"]

        await client.post(
            f"/api/shifts/{sid}/timesheets",
            headers=auth_headers,
            json={"worker_name": "Blessing", "role": "driller", "hours_worked": 8, "rate_per_shift": 10},
        )
        await client.post(
            f"/api/shifts/{sid}/material",
            headers=auth_headers,
            json={"type": "ore", "quantity": 12.5, "source": "Shaft 2", "destination": "Stockpile A"},
        )

        response = await client.get(f"/api/shifts/{sid}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["shift"]["id"] == sid
        assert len(data["timesheets"]) == 1
        assert len(data["materials"]) == 1
        assert data["materials"][0]["unit"] == "tons"
        assert data["equipment_usage"] == []

    @pytest.mark.asyncio
    async def test_outsider_cannot_read_details(self, client, auth_headers, other_headers, test_org):
        shift = await _open_shift(client, test_org, auth_headers)

        response = await client.get(f"/api/shifts/{shift['id']}", headers=other_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_delete_shift_requires_admin(
        self, client, auth_headers, test_org, other_user, other_headers, add_member
    ):
        await add_member(test_org, other_user, OrgRole.MINER)
        shift = await _open_shift(client, test_org, auth_headers)

        denied = await client.delete(f"/api/shifts/{shift['id']}", headers=other_headers)
        assert denied.status_code == 403

        response = await client.delete(f"/api/shifts/{shift['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Shift deleted"

        gone = await client.get(f"/api/shifts/{shift['id']}", headers=auth_headers)
        assert gone.status_code == 404


class TestTimesheets:
    @pytest.mark.asyncio
    async def test_total_pay_is_flat_rate(self, client, auth_headers, test_org):
        shift = await _open_shift(client, test_org, auth_headers)

        response = await client.post(
            f"/api/shifts/{shift['id']}/timesheets",
            headers=auth_headers,
            json={"worker_name": "Chipo", "role": "loader", "hours_worked": 6, "rate_per_shift": 12.5},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["total_pay"] == 12.5
        assert data["org_id"] == str(test_org.id)

    @pytest.mark.asyncio
    async def test_hours_are_bounded(self, client, auth_headers, test_org):
        shift = await _open_shift(client, test_org, auth_headers)

        response = await client.post(
            f"/api/shifts/{shift['id']}/timesheets",
            headers=auth_headers,
            json={"worker_name": "Chipo", "role": "loader", "hours_worked": 30},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_and_delete_timesheet(self, client, auth_headers, test_org):
        shift = await _open_shift(client, test_org, auth_headers)
        created = (await client.post(
            f"/api/shifts/{shift['id']}/timesheets",
            headers=auth_headers,
            json={"worker_name": "Chipo", "role": "loader", "hours_worked": 6},
        )).json()
        assert created["total_pay"] is None

        updated = await client.patch(
            f"/api/timesheets/{created['id']}",
            headers=auth_headers,
            json={"rate_per_shift": 15},
        )
        assert updated.status_code == 200
        assert updated.json()["total_pay"] == 15.0
        assert updated.json()["hours_worked"] == 6.0

        deleted = await client.delete(f"/api/timesheets/{created['id']}", headers=auth_headers)
        assert deleted.status_code == 200

    @pytest.mark.asyncio
    async def test_list_timesheets_filters_by_worker(self, client, auth_headers, test_org, test_user):
        shift = await _open_shift(client, test_org, auth_headers)
        await client.post(
            f"/api/shifts/{shift['id']}/timesheets",
            headers=auth_headers,
            json={"worker_name": "Tendai", "worker_id": str(test_user.id), "role": "supervisor", "hours_worked": 8},
        )
        await client.post(
            f"/api/shifts/{shift['id']}/timesheets",
            headers=auth_headers,
            json={"worker_name": "Casual", "role": "loader", "hours_worked": 8},
        )

        all_rows = await client.get(f"/api/orgs/{test_org.id}/timesheets", headers=auth_headers)
        assert len(all_rows.json()) == 2

        mine = await client.get(
            f"/api/orgs/{test_org.id}/timesheets",
            headers=auth_headers,
            params={"worker_id": str(test_user.id)},
        )
        assert [t["worker_name"] for t in mine.json()] == ["Tendai"]


    @pytest.mark.asyncio
    async def test_list_timesheets_by_date_range(self, client, auth_headers, test_org):
        shift = await _open_shift(client, test_org, auth_headers)
        await client.post(
            f"/api/shifts/{shift['id']}/timesheets",
            headers=auth_headers,
            json={"worker_name": "Chipo", "role": "loader", "hours_worked": 8},
        )
        # Row timestamps are stored in UTC
        today = datetime.now(timezone.utc).date()
        url = f"/api/orgs/{test_org.id}/timesheets"

        same_day = await client.get(
            url, headers=auth_headers,
            params={"start_date": today.isoformat(), "end_date": today.isoformat()},
        )
        before = await client.get(
            url, headers=auth_headers, params={"end_date": (today - timedelta(days=1)).isoformat()}
        )
        after = await client.get(
            url, headers=auth_headers, params={"start_date": (today + timedelta(days=1)).isoformat()}
        )

        assert [t["worker_name"] for t in same_day.json()] == ["Chipo"]
        assert before.json() == []
        assert after.json() == []


class TestEquipmentUsage:
    @pytest.mark.asyncio
    async def test_hours_used_is_meter_delta(self, client, auth_headers, test_org):
        shift = await _open_shift(client, test_org, auth_headers)

        response = await client.post(
            f"/api/shifts/{shift['id']}/equipment-usage",
            headers=auth_headers,
            json={"equipment_name": "Compressor", "hours_start": 1200, "hours_end": 1207.5},
        )

        assert response.status_code == 201
        assert response.json()["hours_used"] == 7.5

    @pytest.mark.asyncio
    async def test_meter_running_backwards_is_rejected(self, client, auth_headers, test_org):
        shift = await _open_shift(client, test_org, auth_headers)

        response = await client.post(
            f"/api/shifts/{shift['id']}/equipment-usage",
            headers=auth_headers,
            json={"equipment_name": "Compressor", "hours_start": 100, "hours_end": 90},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BUSINESS_RULE_VIOLATION"

    @pytest.mark.asyncio
    async def test_equipment_from_another_org_is_not_found(self, client, auth_headers, test_org):
        shift = await _open_shift(client, test_org, auth_headers)

        response = await client.post(
            f"/api/shifts/{shift['id']}/equipment-usage",
            headers=auth_headers,
            json={
                "equipment_id": str(uuid.uuid4()),
                "equipment_name": "Phantom",
                "hours_start": 1,
                "hours_end": 2,
            },
        )

        assert response.status_code == 404
