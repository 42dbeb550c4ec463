"""
EarthSafe API - Finance API Tests

Expenses, payroll, receipts and the financial dashboard.
"""

from pathlib import Path

import pytest

from app.config import settings


async def _expense(client, org, headers, **overrides):
    payload = {
        "date": "2026-05-04",
        "category": "fuel",
        "description": "Diesel for generator",
        "amount": 120.0,
        **overrides,
    }
    response = await client.post(f"/api/orgs/{org.id}/expenses", headers=headers, json=payload)
    assert response.status_code == 201
    return response.json()


async def _payroll(client, org, headers, **overrides):
    payload = {
        "employee_name": "Blessing Ncube",
        "payment_date": "2026-05-31",
        "amount": 200.0,
        **overrides,
    }
    response = await client.post(f"/api/orgs/{org.id}/payroll", headers=headers, json=payload)
    assert response.status_code == 201
    return response.json()


class TestExpenses:
    @pytest.mark.asyncio
    async def test_create_expense(self, client, auth_headers, test_org, test_user):
        expense = await _expense(client, test_org, auth_headers, supplier="Puma Kwekwe")

        assert expense["amount"] == 120.0
        assert expense["currency"] == "USD"
        assert expense["entered_by_id"] == str(test_user.id)

    @pytest.mark.asyncio
    async def test_rejects_negative_amount(self, client, auth_headers, test_org):
        response = await client.post(
            f"/api/orgs/{test_org.id}/expenses",
            headers=auth_headers,
            json={"date": "2026-05-04", "category": "fuel", "description": "x", "amount": -1},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_stats_group_by_category(self, client, auth_headers, test_org):
        await _expense(client, test_org, auth_headers, amount=100)
        await _expense(client, test_org, auth_headers, amount=50.5)
        await _expense(client, test_org, auth_headers, category="transport", amount=30)

        response = await client.get(f"/api/orgs/{test_org.id}/expenses/stats", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "total": 180.5,
            "count": 3,
            "by_category": {"fuel": 150.5, "transport": 30.0},
        }

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client, auth_headers, test_org):
        expense = await _expense(client, test_org, auth_headers)
        url = f"/api/orgs/{test_org.id}/expenses/{expense['id']}"

        updated = await client.patch(url, headers=auth_headers, json={"amount": 99.99, "notes": "corrected"})
        assert updated.status_code == 200
        assert updated.json()["amount"] == 99.99
        assert updated.json()["description"] == "Diesel for generator"

        deleted = await client.delete(url, headers=auth_headers)
        assert deleted.status_code == 200
        assert deleted.json()["message"] == "Expense deleted"

        missing = await client.get(url, headers=auth_headers)
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_list_filters_by_category_and_dates(self, client, auth_headers, test_org):
        await _expense(client, test_org, auth_headers, date="2026-05-01")
        await _expense(client, test_org, auth_headers, date="2026-05-10", description="Diesel top-up")
        await _expense(client, test_org, auth_headers, date="2026-05-10", category="transport")
        await _expense(client, test_org, auth_headers, date="2026-05-20")
        url = f"/api/orgs/{test_org.id}/expenses"

        fuel = await client.get(url, headers=auth_headers, params={"category": "fuel"})
        window = await client.get(
            url, headers=auth_headers, params={"start_date": "2026-05-02", "end_date": "2026-05-10"}
        )
        fuel_in_window = await client.get(
            url,
            headers=auth_headers,
            params={"category": "fuel", "start_date": "2026-05-10", "end_date": "2026-05-10"},
        )

        assert [e["date"] for e in fuel.json()] == ["2026-05-20", "2026-05-10", "2026-05-01"]
        assert sorted(e["category"] for e in window.json()) == ["fuel", "transport"]
        assert [e["description"] for e in fuel_in_window.json()] == ["Diesel top-up"]

    @pytest.mark.asyncio
    async def test_list_rejects_unknown_category(self, client, auth_headers, test_org):
        response = await client.get(
            f"/api/orgs/{test_org.id}/expenses", headers=auth_headers, params={"category": "champagne"}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_expenses_are_org_scoped(self, client, auth_headers, other_headers, test_org):
        expense = await _expense(client, test_org, auth_headers)

        other_org = (await client.post("/api/orgs", headers=other_headers, json={"name": "Other Mine"})).json()
        response = await client.get(
            f"/api/orgs/{other_org['id']}/expenses/{expense['id']}",
            headers=other_headers,
        )

        assert response.status_code == 404


class TestPayroll:
    @pytest.mark.asyncio
    async def test_net_pay_is_derived(self, client, auth_headers, test_org):
        record = await _payroll(client, test_org, auth_headers, bonuses=25, deductions=10)

        assert record["net_pay"] == 215.0
        assert record["status"] == "paid"
        assert record["payment_method"] == "cash"

    @pytest.mark.asyncio
    async def test_explicit_net_pay_is_kept(self, client, auth_headers, test_org):
        record = await _payroll(client, test_org, auth_headers, net_pay=180)

        assert record["net_pay"] == 180.0

    @pytest.mark.asyncio
    async def test_update_recomputes_net_pay(self, client, auth_headers, test_org):
        record = await _payroll(client, test_org, auth_headers)

        response = await client.patch(
            f"/api/orgs/{test_org.id}/payroll/{record['id']}",
            headers=auth_headers,
            json={"deductions": 20},
        )

        assert response.status_code == 200
        assert response.json()["net_pay"] == 180.0

    @pytest.mark.asyncio
    async def test_stats_count_paid_records_only(self, client, auth_headers, test_org):
        await _payroll(client, test_org, auth_headers)
        await _payroll(client, test_org, auth_headers, payment_date="2026-06-30", amount=150)
        await _payroll(client, test_org, auth_headers, employee_name="Rumbi", amount=90)
        await _payroll(client, test_org, auth_headers, employee_name="Rumbi", amount=500, status="pending")

        response = await client.get(f"/api/orgs/{test_org.id}/payroll/stats", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total_paid"] == 440.0
        assert data["total_records"] == 3
        assert data["by_employee"] == {
            "Blessing Ncube": {"count": 2, "total": 350.0},
            "Rumbi": {"count": 1, "total": 90.0},
        }

    @pytest.mark.asyncio
    async def test_delete_payroll(self, client, auth_headers, test_org):
        record = await _payroll(client, test_org, auth_headers)

        response = await client.delete(
            f"/api/orgs/{test_org.id}/payroll/{record['id']}",
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Payroll record deleted"


class TestReceipts:
    @pytest.mark.asyncio
    async def test_create_from_url(self, client, auth_headers, test_org):
        response = await client.post(
            f"/api/orgs/{test_org.id}/receipts",
            headers=auth_headers,
            json={"date": "2026-05-04", "file_url": "https://cdn.example.com/r/1.jpg", "total": 42.5},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "processed"
        assert data["total"] == 42.5

    @pytest.mark.asyncio
    async def test_upload_stores_file(self, client, auth_headers, test_org, test_user):
        response = await client.post(
            f"/api/orgs/{test_org.id}/receipts/upload",
            headers=auth_headers,
            files={"file": ("till slip.jpg", b"\xff\xd8\xff\xe0fake-jpeg", "image/jpeg")},
            data={"date": "2026-05-04", "vendor": "Hardware Hub", "total": "18.75"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["vendor"] == "Hardware Hub"
        assert data["date"] == "2026-05-04"
        assert data["uploaded_by_id"] == str(test_user.id)

        prefix = settings.uploads_url_prefix.rstrip("/") + "/"
        assert data["file_url"].startswith(prefix)
        assert data["file_url"].endswith("_till_slip.jpg")
        stored = Path(settings.storage_local_path) / data["file_url"][len(prefix):]
        assert stored.read_bytes() == b"\xff\xd8\xff\xe0fake-jpeg"

    @pytest.mark.asyncio
    async def test_upload_rejects_empty_file(self, client, auth_headers, test_org):
        response = await client.post(
            f"/api/orgs/{test_org.id}/receipts/upload",
            headers=auth_headers,
            files={"file": ("empty.jpg", b"", "image/jpeg")},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_mark_failed_with_extraction(self, client, auth_headers, test_org):
        receipt = (await client.post(
            f"/api/orgs/{test_org.id}/receipts",
            headers=auth_headers,
            json={"date": "2026-05-04", "file_url": "https://cdn.example.com/r/2.jpg"},
        )).json()

        response = await client.patch(
            f"/api/orgs/{test_org.id}/receipts/{receipt['id']}",
            headers=auth_headers,
            json={"status": "failed", "extracted_text": "TOTAL 18.75", "confidence_score": 0.12},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "failed"
        assert response.json()["confidence_score"] == 0.12


    @pytest.mark.asyncio
    async def test_delete_receipt_removes_file(self, client, auth_headers, test_org):
        receipt = (await client.post(
            f"/api/orgs/{test_org.id}/receipts/upload",
            headers=auth_headers,
            files={"file": ("slip.jpg", b"\xff\xd8\xff\xe0slip", "image/jpeg")},
        )).json()
        prefix = settings.uploads_url_prefix.rstrip("/") + "/"
        stored = Path(settings.storage_local_path) / receipt["file_url"][len(prefix):]
        assert stored.exists()

        response = await client.delete(f"/api/orgs/{test_org.id}/receipts/{receipt['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert not stored.exists()

    @pytest.mark.asyncio
    async def test_upload_over_size_limit(self, client, auth_headers, test_org, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_size_mb", 1)
        too_big = b"\x00" * (1024 * 1024 + 1)

        response = await client.post(
            f"/api/orgs/{test_org.id}/receipts/upload",
            headers=auth_headers,
            files={"file": ("scan.jpg", too_big, "image/jpeg")},
        )

        assert response.status_code == 413
        assert response.json()["error"]["code"] == "PAYLOAD_TOO_LARGE"
        listed = await client.get(f"/api/orgs/{test_org.id}/receipts", headers=auth_headers)
        assert listed.json() == []

    @pytest.mark.asyncio
    async def test_upload_at_size_limit_is_accepted(self, client, auth_headers, test_org, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_size_mb", 1)

        response = await client.post(
            f"/api/orgs/{test_org.id}/receipts/upload",
            headers=auth_headers,
            files={"file": ("scan.jpg", b"\x00" * (1024 * 1024), "image/jpeg")},
        )

        assert response.status_code == 201


class TestFinancialDashboard:
    @pytest.mark.asyncio
    async def test_empty_org(self, client, auth_headers, test_org):
        response = await client.get(f"/api/orgs/{test_org.id}/finance/dashboard", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total_income"] == 0
        assert data["net_profit"] == 0
        assert data["sales_count"] == 0

    @pytest.mark.asyncio
    async def test_net_profit(self, client, auth_headers, test_org):
        await _expense(client, test_org, auth_headers, amount=100)
        await _payroll(client, test_org, auth_headers, amount=250)
        await client.post(
            f"/api/orgs/{test_org.id}/sales",
            headers=auth_headers,
            json={"quantity": 10, "price_per_unit": 60, "receipt_number": "FPR-0001"},
        )
        await client.post(
            f"/api/orgs/{test_org.id}/receipts",
            headers=auth_headers,
            json={"date": "2026-05-04", "file_url": "https://cdn.example.com/r/3.jpg"},
        )

        response = await client.get(f"/api/orgs/{test_org.id}/finance/dashboard", headers=auth_headers)

        assert response.json() == {
            "total_expenses": 100.0,
            "expense_count": 1,
            "total_payroll": 250.0,
            "payroll_count": 1,
            "total_income": 600.0,
            "sales_count": 1,
            "total_receipts": 1,
            "net_profit": 250.0,
        }

    @pytest.mark.asyncio
    async def test_requires_membership(self, client, other_headers, test_org):
        response = await client.get(f"/api/orgs/{test_org.id}/finance/dashboard", headers=other_headers)

        assert response.status_code == 403
