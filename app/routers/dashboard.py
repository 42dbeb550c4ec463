"""
EarthSafe API - Finance Dashboard Router
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_org_membership
from app.models.organization import Membership
from app.schemas.finance import FinancialDashboardResponse
from app.services.dashboard_service import DashboardService


router = APIRouter(prefix="/orgs/{org_id}/finance", tags=["Dashboard"])


@router.get("/dashboard", response_model=FinancialDashboardResponse)
async def get_financial_dashboard(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    """Income, expenses, payroll and net profit for the organization."""
    return await DashboardService(db).get_financial_dashboard(org_id)
