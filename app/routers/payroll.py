"""
EarthSafe API - Payroll Router
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_user, get_org_membership
from app.models.organization import Membership
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.finance import (
    PayrollCreate,
    PayrollResponse,
    PayrollStatsResponse,
    PayrollUpdate,
)
from app.services.payroll_service import PayrollService


router = APIRouter(prefix="/orgs/{org_id}/payroll", tags=["Payroll"])


@router.post("", response_model=PayrollResponse, status_code=status.HTTP_201_CREATED)
async def create_payroll(
    org_id: UUID,
    request: PayrollCreate,
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    """Record a wage payment. net_pay defaults to amount + bonuses - deductions."""
    return await PayrollService(db).create_payroll(org_id, request, current_user)


@router.get("", response_model=List[PayrollResponse])
async def list_payroll(
    org_id: UUID,
    employee_name: Optional[str] = Query(None),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await PayrollService(db).list_payroll(org_id, employee_name)


@router.get("/stats", response_model=PayrollStatsResponse)
async def get_payroll_stats(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await PayrollService(db).get_stats(org_id)


@router.get("/{payroll_id}", response_model=PayrollResponse)
async def get_payroll(
    org_id: UUID,
    payroll_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await PayrollService(db).get_payroll(org_id, payroll_id)


@router.patch("/{payroll_id}", response_model=PayrollResponse)
async def update_payroll(
    org_id: UUID,
    payroll_id: UUID,
    request: PayrollUpdate,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await PayrollService(db).update_payroll(org_id, payroll_id, request)


@router.delete("/{payroll_id}", response_model=MessageResponse)
async def delete_payroll(
    org_id: UUID,
    payroll_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    await PayrollService(db).delete_payroll(org_id, payroll_id)
    return MessageResponse(message="Payroll record deleted")
