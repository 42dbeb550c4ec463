"""
EarthSafe API - Expenses Router
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_user, get_org_membership
from app.models.expense import ExpenseCategory
from app.models.organization import Membership
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.finance import (
    ExpenseCreate,
    ExpenseResponse,
    ExpenseStatsResponse,
    ExpenseUpdate,
)
from app.services.expense_service import ExpenseService


router = APIRouter(prefix="/orgs/{org_id}/expenses", tags=["Expenses"])


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    org_id: UUID,
    request: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ExpenseService(db).create_expense(org_id, request, current_user)


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    org_id: UUID,
    category: Optional[ExpenseCategory] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ExpenseService(db).list_expenses(org_id, category, start_date, end_date)


@router.get("/stats", response_model=ExpenseStatsResponse)
async def get_expense_stats(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ExpenseService(db).get_stats(org_id)


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    org_id: UUID,
    expense_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ExpenseService(db).get_expense(org_id, expense_id)


@router.patch("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    org_id: UUID,
    expense_id: UUID,
    request: ExpenseUpdate,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ExpenseService(db).update_expense(org_id, expense_id, request)


@router.delete("/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    org_id: UUID,
    expense_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    await ExpenseService(db).delete_expense(org_id, expense_id)
    return MessageResponse(message="Expense deleted")
