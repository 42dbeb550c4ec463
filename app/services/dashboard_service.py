"""
EarthSafe API - Dashboard Service

Aggregates across an organization's records:
- Financial dashboard (income, expenses, payroll, net profit)
- Readiness checklists shown before loan and equipment finance applications
"""

import uuid
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.compliance import ComplianceDocument, ComplianceDocumentType
from app.models.expense import Expense, Receipt
from app.models.organization import Organization
from app.models.payroll import Payroll
from app.models.sales import SalesTransaction
from app.models.user import User
from app.services.compliance_service import STATUS_EXPIRED, document_status
from app.services.organization_service import OrganizationService


def profile_complete(user: User, org: Organization) -> bool:
    return all([user.first_name, user.last_name, user.email, org.name])


class DashboardService:
    """Read-only aggregates for dashboards and readiness checks."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _sum_and_count(self, column, count_column, org_column, org_id: uuid.UUID):
        result = await self.db.execute(
            select(func.coalesce(func.sum(column), 0), func.count(count_column))
            .where(org_column == org_id)
        )
        total, count = result.one()
        return Decimal(str(total)), count

    async def get_financial_dashboard(self, org_id: uuid.UUID) -> Dict[str, Any]:
        total_expenses, expense_count = await self._sum_and_count(
            Expense.amount, Expense.id, Expense.org_id, org_id
        )
        total_payroll, payroll_count = await self._sum_and_count(
            Payroll.net_pay, Payroll.id, Payroll.org_id, org_id
        )
        total_income, sales_count = await self._sum_and_count(
            SalesTransaction.total_value, SalesTransaction.id, SalesTransaction.org_id, org_id
        )
        receipts = await self.db.execute(
            select(func.count(Receipt.id)).where(Receipt.org_id == org_id)
        )

        return {
            "total_expenses": float(total_expenses),
            "expense_count": expense_count,
            "total_payroll": float(total_payroll),
            "payroll_count": payroll_count,
            "total_income": float(total_income),
            "sales_count": sales_count,
            "total_receipts": receipts.scalar_one(),
            "net_profit": float(total_income - (total_expenses + total_payroll)),
        }

    async def get_loan_readiness(self, org_id: uuid.UUID, user: User, consent: bool) -> Dict[str, bool]:
        org = await OrganizationService(self.db).get_organization(org_id)
        return {
            "profile_complete": profile_complete(user, org),
            # Shift data is always available for lenders to review
            "production_data": True,
            "wallet_active": bool(org.contact_phone or user.phone_number),
            "compliance_ready": bool(org.mining_license_number),
            "can_proceed": consent,
        }

    async def get_equipment_readiness(self, org_id: uuid.UUID, user: User, consent: bool) -> Dict[str, bool]:
        """compliance_ready requires a Mining License that has not expired."""
        org = await OrganizationService(self.db).get_organization(org_id)

        result = await self.db.execute(
            select(ComplianceDocument.expiry_date).where(
                ComplianceDocument.org_id == org_id,
                ComplianceDocument.type == ComplianceDocumentType.MINING_LICENSE,
            )
        )
        licensed = any(
            document_status(expiry)[0] != STATUS_EXPIRED for expiry in result.scalars().all()
        )

        return {
            "profile_complete": profile_complete(user, org),
            "production_data": True,
            "compliance_ready": licensed,
            "can_proceed": consent,
        }
