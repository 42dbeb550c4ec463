"""
Static fixtures returned by EarthSafeClient in mock mode, or when a live
list call fails or comes back empty.

Shapes match the JSON the API returns.
"""

MOCK_ORG_ID = "6f1c2a9e-3b7d-4c55-9a0e-1d2b3c4d5e6f"

MOCK_USER = {
    "id": "0b8f4c1e-7a2d-4e6f-8c3b-5a9d1e2f3a4b",
    "first_name": "Demo",
    "last_name": "User",
    "email": "demo@earthsafe.com",
    "phone_number": "+263 77 123 4567",
    "role": "miner",
    "subscription_tier": "free",
    "is_active": True,
    "is_verified": True,
}

MOCK_AUTH = {
    "user": MOCK_USER,
    "access_token": "mock-access-token",
    "refresh_token": "mock-refresh-token",
    "token_type": "bearer",
    "expires_in": 3600,
}

MOCK_ORGANIZATION = {
    "id": MOCK_ORG_ID,
    "name": "Star Mining Co.",
    "type": "mine",
    "location": "12 Speke Ave, Harare",
    "country": "Zimbabwe",
    "commodity": ["gold"],
    "mining_license_number": "ML-2024-001",
    "contact_email": None,
    "contact_phone": "+263 77 123 4567",
    "status": "active",
}

MOCK_ORGS = [
    {"organization": MOCK_ORGANIZATION, "role": "admin", "status": "active"},
]

MOCK_BUYERS = [
    {
        "id": "9d3e7f10-2c4b-4a8e-b6d1-0f2e3a4b5c6d",
        "name": "Fidelity Printers & Refiners",
        "type": "buyer",
        "location": "Harare",
        "country": "Zimbabwe",
        "commodity": ["gold"],
        "status": "active",
    },
]

MOCK_SHIFTS = [
    {
        "id": "1a2b3c4d-0000-4000-8000-000000000001",
        "org_id": MOCK_ORG_ID,
        "date": "2024-03-01T06:00:00Z",
        "type": "day",
        "status": "approved",
        "notes": "Routine operations. Equipment running smoothly.",
        "weather_condition": "Sunny",
    },
    {
        "id": "1a2b3c4d-0000-4000-8000-000000000002",
        "org_id": MOCK_ORG_ID,
        "date": "2024-03-02T06:00:00Z",
        "type": "day",
        "status": "open",
        "notes": None,
        "weather_condition": "Cloudy",
    },
]

MOCK_SALES = [
    {
        "id": "2b3c4d5e-0000-4000-8000-000000000001",
        "org_id": MOCK_ORG_ID,
        "date": "2024-03-01T14:00:00Z",
        "source": "fidelity",
        "reference_id": "FPR-0001",
        "mineral_type": "gold",
        "grams": 42.5,
        "price_per_gram": 65.0,
        "total_value": 2762.5,
        "currency": "USD",
        "buyer_name": "Fidelity Printers & Refiners",
        "status": "verified",
    },
]

MOCK_EXPENSES = [
    {
        "id": "3c4d5e6f-0000-4000-8000-000000000001",
        "org_id": MOCK_ORG_ID,
        "date": "2024-03-01",
        "category": "fuel",
        "description": "Diesel for Generator (200L)",
        "amount": 320.0,
        "currency": "USD",
        "supplier": "Zuva Petroleum",
    },
]

MOCK_PAYROLL = [
    {
        "id": "4d5e6f70-0000-4000-8000-000000000001",
        "org_id": MOCK_ORG_ID,
        "employee_name": "Tinashe Moyo",
        "payment_date": "2024-03-01",
        "amount": 350.0,
        "deductions": 20.0,
        "bonuses": 0.0,
        "net_pay": 330.0,
        "currency": "USD",
        "payment_method": "cash",
        "status": "paid",
    },
]

MOCK_INVENTORY = [
    {
        "id": "5e6f7081-0000-4000-8000-000000000001",
        "org_id": MOCK_ORG_ID,
        "item_type": "gold",
        "name": "Gold Bullion",
        "quantity": 120.0,
        "unit": "grams",
        "value_per_unit": 65.0,
        "total_value": 7800.0,
        "location": "Site A",
    },
    {
        "id": "5e6f7081-0000-4000-8000-000000000002",
        "org_id": MOCK_ORG_ID,
        "item_type": "consumable",
        "name": "Diesel Fuel",
        "quantity": 500.0,
        "unit": "liters",
        "value_per_unit": 1.6,
        "total_value": 800.0,
        "location": "Site A",
    },
]

MOCK_COMPLIANCE_DOCUMENTS = [
    {
        "id": "6f708192-0000-4000-8000-000000000001",
        "org_id": MOCK_ORG_ID,
        "type": "Mining License",
        "number": "ML-2024-001",
        "issued_date": "2024-01-01",
        "expiry_date": "2025-12-31",
        "issuer": "Ministry of Mines and Mining Development",
        "file_url": None,
        "status": "active",
        "days_left": 300,
    },
    {
        "id": "6f708192-0000-4000-8000-000000000002",
        "org_id": MOCK_ORG_ID,
        "type": "Environmental Impact Assessment Certificate",
        "number": "EMA-EIA-0457",
        "issued_date": "2024-01-15",
        "expiry_date": "2024-04-15",
        "issuer": "Environmental Management Agency",
        "file_url": None,
        "status": "expiring",
        "days_left": 21,
    },
]

MOCK_LOANS = [
    {
        "id": "708192a3-0000-4000-8000-000000000001",
        "org_id": MOCK_ORG_ID,
        "amount": 15000.0,
        "purpose": "Excavator Purchase",
        "term": 24,
        "collateral": "Equipment (Crusher)",
        "institution": "EarthSafe Finance",
        "status": "repaying",
        "interest_rate": 8.0,
        "monthly_payment": 750.0,
    },
]

MOCK_FINANCIAL_HEALTH = {
    "org_id": MOCK_ORG_ID,
    "score": 79,
    "grade": "B",
    "factors": [
        {
            "name": "Revenue Volume",
            "score": 92.1,
            "weight": 0.5,
            "impact": "Positive",
            "explanation": "$2,762.50 in verified or pending sales",
        },
        {
            "name": "Transaction Frequency",
            "score": 10.0,
            "weight": 0.3,
            "impact": "Positive",
            "explanation": "1 sales recorded",
        },
    ],
    "model_version": "v1.0",
}
