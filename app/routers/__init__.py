"""
EarthSafe API - Routers Package

FastAPI route handlers.

Routers:
- auth: Users (register, login, tokens, profile, password reset)
- organizations: Organizations and memberships
- shifts: Shifts, timesheets, material movements, equipment usage
- equipment: Equipment register and finance readiness
- expenses, payroll, receipts: Finance records
- sales: Gold sales
- loans: Loans, credit score, repayments
- compliance: Documents, incidents, safety checklists
- inventory: Stock items
- dashboard: Financial dashboard
- demo: Demo data seeding
"""

from app.routers import (
    auth,
    organizations,
    shifts,
    equipment,
    expenses,
    payroll,
    receipts,
    sales,
    loans,
    compliance,
    inventory,
    dashboard,
    demo,
)

__all__ = [
    "auth",
    "organizations",
    "shifts",
    "equipment",
    "expenses",
    "payroll",
    "receipts",
    "sales",
    "loans",
    "compliance",
    "inventory",
    "dashboard",
    "demo",
]
