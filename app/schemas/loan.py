"""
EarthSafe API - Lending Schemas

Loans, repayments, credit scores and loan readiness.
"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.loan import LoanStatus, RepaymentStatus


# ===========================================
# LOAN SCHEMAS
# ===========================================

class LoanCreate(BaseModel):
    amount: float = Field(..., gt=0)
    purpose: str = Field(..., min_length=1, max_length=500)
    term: int = Field(..., gt=0, le=360, description="Term in months")
    collateral: Optional[str] = Field(None, max_length=500)
    institution: Optional[str] = Field(None, max_length=200)
    documents: List[str] = Field(default_factory=list)
    notes: Optional[str] = None


class LoanResponse(BaseModel):
    id: UUID
    org_id: UUID
    applicant_id: Optional[UUID]
    amount: float
    purpose: str
    term: int
    collateral: Optional[str]
    institution: Optional[str]
    documents: List[str]
    notes: Optional[str]
    status: LoanStatus
    interest_rate: Optional[float]
    monthly_payment: Optional[float]
    approved_at: Optional[datetime]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LoanReadinessResponse(BaseModel):
    profile_complete: bool
    production_data: bool
    wallet_active: bool
    compliance_ready: bool
    can_proceed: bool


# ===========================================
# CREDIT SCORE SCHEMAS
# ===========================================

class CreditFactor(BaseModel):
    name: str
    score: float
    weight: float
    impact: str
    explanation: str


class CreditScoreResponse(BaseModel):
    id: UUID
    org_id: UUID
    score: int
    grade: str
    factors: List[CreditFactor]
    model_version: str
    calculated_at: datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())


class NoCreditScoreResponse(BaseModel):
    message: str = "No score calculated yet"
    score: None = None


# ===========================================
# REPAYMENT SCHEMAS
# ===========================================

class RepaymentCreate(BaseModel):
    amount: float = Field(..., gt=0)
    principal_paid: Optional[float] = Field(None, ge=0)
    interest_paid: Optional[float] = Field(None, ge=0)
    remaining_balance: Optional[float] = Field(None, ge=0)
    payment_date: Optional[date] = None
    payment_method: Optional[str] = Field(None, max_length=50)
    transaction_ref: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class RepaymentUpdate(BaseModel):
    amount: Optional[float] = Field(None, gt=0)
    principal_paid: Optional[float] = Field(None, ge=0)
    interest_paid: Optional[float] = Field(None, ge=0)
    remaining_balance: Optional[float] = Field(None, ge=0)
    payment_date: Optional[date] = None
    payment_method: Optional[str] = Field(None, max_length=50)
    transaction_ref: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    status: Optional[RepaymentStatus] = None


class RepaymentResponse(BaseModel):
    id: UUID
    org_id: UUID
    loan_id: UUID
    amount: float
    principal_paid: Optional[float]
    interest_paid: Optional[float]
    remaining_balance: Optional[float]
    payment_date: date
    payment_method: Optional[str]
    transaction_ref: Optional[str]
    notes: Optional[str]
    status: RepaymentStatus
    recorded_by_id: Optional[UUID]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RepaymentSummaryResponse(BaseModel):
    loan_id: UUID
    loan_amount: float
    total_paid: float
    remaining_balance: float
    repayment_count: int
    progress_percent: float
