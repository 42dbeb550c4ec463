"""
EarthSafe API - Lending Router

Loan applications, credit scoring and repayment tracking.
"""

from typing import List, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_user, get_org_membership
from app.models.organization import Membership
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.loan import (
    CreditScoreResponse,
    LoanCreate,
    LoanReadinessResponse,
    LoanResponse,
    NoCreditScoreResponse,
    RepaymentCreate,
    RepaymentResponse,
    RepaymentSummaryResponse,
    RepaymentUpdate,
)
from app.services.dashboard_service import DashboardService
from app.services.loan_service import LoanService


router = APIRouter(prefix="/orgs/{org_id}", tags=["Lending"])


# ===========================================
# LOANS
# ===========================================

@router.post("/loans", response_model=LoanResponse, status_code=status.HTTP_201_CREATED)
async def apply_for_loan(
    org_id: UUID,
    request: LoanCreate,
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    """Small loans are approved immediately; larger ones wait for review."""
    return await LoanService(db).create_loan(org_id, request, current_user)


@router.get("/loans", response_model=List[LoanResponse])
async def list_loans(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await LoanService(db).list_loans(org_id)


@router.get("/loans/readiness", response_model=LoanReadinessResponse)
async def get_loan_readiness(
    org_id: UUID,
    consent: bool = Query(False),
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await DashboardService(db).get_loan_readiness(org_id, current_user, consent)


# ===========================================
# CREDIT SCORE
# ===========================================

@router.get("/financial-health", response_model=CreditScoreResponse)
async def get_financial_health(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    """Latest credit score, recomputed when the cached one is stale."""
    return await LoanService(db).get_financial_health(org_id)


@router.get("/credit-score", response_model=Union[CreditScoreResponse, NoCreditScoreResponse])
async def get_credit_score(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    score = await LoanService(db).get_latest_credit_score(org_id)
    if score is None:
        return NoCreditScoreResponse()
    return CreditScoreResponse.model_validate(score)


@router.post("/credit-score/calculate", response_model=CreditScoreResponse)
async def calculate_credit_score(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await LoanService(db).calculate_credit_score(org_id)


# ===========================================
# REPAYMENTS
# ===========================================

@router.post(
    "/loans/{loan_id}/repayments",
    response_model=RepaymentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_repayment(
    org_id: UUID,
    loan_id: UUID,
    request: RepaymentCreate,
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await LoanService(db).create_repayment(org_id, loan_id, request, current_user)


@router.get("/loans/{loan_id}/repayments", response_model=List[RepaymentResponse])
async def list_loan_repayments(
    org_id: UUID,
    loan_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    service = LoanService(db)
    await service.get_loan(org_id, loan_id)
    return await service.list_repayments(org_id, loan_id)


@router.get("/loans/{loan_id}/repayments/summary", response_model=RepaymentSummaryResponse)
async def get_repayment_summary(
    org_id: UUID,
    loan_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await LoanService(db).get_repayment_summary(org_id, loan_id)


@router.get("/repayments", response_model=List[RepaymentResponse])
async def list_repayments(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await LoanService(db).list_repayments(org_id)


@router.patch("/repayments/{repayment_id}", response_model=RepaymentResponse)
async def update_repayment(
    org_id: UUID,
    repayment_id: UUID,
    request: RepaymentUpdate,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await LoanService(db).update_repayment(org_id, repayment_id, request)


@router.delete("/repayments/{repayment_id}", response_model=MessageResponse)
async def delete_repayment(
    org_id: UUID,
    repayment_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    await LoanService(db).delete_repayment(org_id, repayment_id)
    return MessageResponse(message="Repayment deleted")
