"""
EarthSafe API - Loan Service

Business logic for:
- Loan applications (small loans are approved automatically)
- Credit scoring from sales history, cached for a day
- Loan repayments and outstanding balance tracking
"""

import logging
import math
import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.loan import CreditScore, Loan, LoanRepayment, LoanStatus, RepaymentStatus
from app.models.sales import SaleStatus, SalesTransaction
from app.models.user import User
from app.schemas.loan import LoanCreate, RepaymentCreate, RepaymentUpdate
from app.utils.error_handling import NotFoundException

logger = logging.getLogger(__name__)

CREDIT_MODEL_VERSION = "v1.0"
# Sales that count towards revenue for scoring
SCORED_SALE_STATUSES = (SaleStatus.VERIFIED, SaleStatus.PENDING)
REPAYMENT_MONEY_FIELDS = ("amount", "principal_paid", "interest_paid", "remaining_balance")


# ===========================================
# PURE CALCULATIONS
# ===========================================

def credit_grade(score: int) -> str:
    if score >= 90:
        return "A"
    if score >= 70:
        return "B"
    if score < 60:
        return "D"
    return "C"


def calculate_credit_score(revenue: float, transaction_count: int) -> Dict[str, Any]:
    """
    Score an organization from its sales history.

    Base 50, up to +30 for revenue (1 point per 100 USD) and up to +20 for
    transaction frequency (2 points per sale).
    """
    revenue = float(revenue)
    score = 50 + min(30, math.floor(revenue / 100)) + min(20, transaction_count * 2)

    factors = [
        {
            "name": "Revenue Volume",
            "score": round(min(100.0, revenue / 3000 * 100), 1),
            "weight": 0.5,
            "impact": "Positive" if revenue > 0 else "Neutral",
            "explanation": f"${revenue:,.2f} in verified or pending sales",
        },
        {
            "name": "Transaction Frequency",
            "score": round(min(100.0, transaction_count / 10 * 100), 1),
            "weight": 0.3,
            "impact": "Positive" if transaction_count > 0 else "Neutral",
            "explanation": f"{transaction_count} sales recorded",
        },
    ]

    return {
        "score": score,
        "grade": credit_grade(score),
        "factors": factors,
        "model_version": CREDIT_MODEL_VERSION,
    }


def auto_approval_terms(amount: float, term: int) -> Optional[Dict[str, Any]]:
    """
    Terms for a loan small enough to approve without review, else None.

    Monthly payment is the principal spread over the term plus a flat 10%.
    """
    if amount >= settings.loan_auto_approve_limit:
        return None
    monthly = (Decimal(str(amount)) / Decimal(term) * Decimal("1.1")).quantize(Decimal("0.01"))
    return {
        "status": LoanStatus.APPROVED,
        "interest_rate": settings.auto_approve_interest_rate,
        "monthly_payment": monthly,
        "approved_at": datetime.now(timezone.utc),
    }


def summarize_repayments(loan_amount, repayments: Sequence[LoanRepayment]) -> Dict[str, Any]:
    """
    Totals for a loan's repayments.

    `repayments` must be ordered newest first; the newest record's
    remaining_balance is the outstanding balance.
    """
    loan_amount = Decimal(str(loan_amount))
    total_paid = sum((Decimal(str(r.amount)) for r in repayments), Decimal("0"))

    if not repayments:
        remaining = loan_amount
    elif repayments[0].remaining_balance is not None:
        remaining = Decimal(str(repayments[0].remaining_balance))
    else:
        remaining = max(Decimal("0"), loan_amount - total_paid)

    progress = float(min(Decimal("100"), total_paid / loan_amount * 100)) if loan_amount else 0.0

    return {
        "loan_amount": float(loan_amount),
        "total_paid": float(total_paid),
        "remaining_balance": float(remaining),
        "repayment_count": len(repayments),
        "progress_percent": round(progress, 1),
    }


class LoanService:
    """Service for loans, credit scores and repayments."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ===========================================
    # LOAN OPERATIONS
    # ===========================================

    async def create_loan(self, org_id: uuid.UUID, data: LoanCreate, user: User) -> Loan:
        loan = Loan(
            org_id=org_id,
            applicant_id=user.id,
            amount=Decimal(str(data.amount)),
            purpose=data.purpose,
            term=data.term,
            collateral=data.collateral,
            institution=data.institution,
            documents=list(data.documents),
            notes=data.notes,
            status=LoanStatus.PENDING,
        )

        terms = auto_approval_terms(data.amount, data.term)
        if terms:
            for field, value in terms.items():
                setattr(loan, field, value)

        self.db.add(loan)
        await self.db.commit()
        await self.db.refresh(loan)

        logger.info(f"Loan {loan.id} for {loan.amount} created with status {loan.status.value}")
        return loan

    async def list_loans(self, org_id: uuid.UUID) -> List[Loan]:
        result = await self.db.execute(
            select(Loan).where(Loan.org_id == org_id).order_by(Loan.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_loan(self, org_id: uuid.UUID, loan_id: uuid.UUID) -> Loan:
        loan = await self.db.get(Loan, loan_id)
        if not loan or loan.org_id != org_id:
            raise NotFoundException("Loan", loan_id, message="Loan not found")
        return loan

    # ===========================================
    # CREDIT SCORE OPERATIONS
    # ===========================================

    async def get_latest_credit_score(
        self,
        org_id: uuid.UUID,
        max_age: Optional[timedelta] = None,
    ) -> Optional[CreditScore]:
        query = select(CreditScore).where(CreditScore.org_id == org_id)
        if max_age is not None:
            query = query.where(CreditScore.calculated_at >= datetime.now(timezone.utc) - max_age)
        result = await self.db.execute(
            query.order_by(CreditScore.calculated_at.desc()).limit(1)
        )
        return result.scalar_one_or_none()

    async def calculate_credit_score(self, org_id: uuid.UUID) -> CreditScore:
        """Compute a fresh score from scored sales and store it."""
        result = await self.db.execute(
            select(
                func.coalesce(func.sum(SalesTransaction.total_value), 0),
                func.count(SalesTransaction.id),
            ).where(
                SalesTransaction.org_id == org_id,
                SalesTransaction.status.in_(SCORED_SALE_STATUSES),
            )
        )
        revenue, count = result.one()

        computed = calculate_credit_score(float(revenue), count)
        score = CreditScore(
            org_id=org_id,
            calculated_at=datetime.now(timezone.utc),
            **computed,
        )
        self.db.add(score)
        await self.db.commit()
        await self.db.refresh(score)

        logger.info(f"Credit score for org {org_id}: {score.score} ({score.grade})")
        return score

    async def get_financial_health(self, org_id: uuid.UUID) -> CreditScore:
        """Serve the cached score if it is fresh, otherwise recompute."""
        cached = await self.get_latest_credit_score(
            org_id,
            max_age=timedelta(hours=settings.credit_score_cache_hours),
        )
        if cached:
            return cached
        return await self.calculate_credit_score(org_id)

    # ===========================================
    # REPAYMENT OPERATIONS
    # ===========================================

    async def create_repayment(
        self,
        org_id: uuid.UUID,
        loan_id: uuid.UUID,
        data: RepaymentCreate,
        user: User,
    ) -> LoanRepayment:
        await self.get_loan(org_id, loan_id)

        values = data.model_dump()
        for field in REPAYMENT_MONEY_FIELDS:
            if values[field] is not None:
                values[field] = Decimal(str(values[field]))
        values["payment_date"] = values["payment_date"] or date.today()

        repayment = LoanRepayment(
            org_id=org_id,
            loan_id=loan_id,
            recorded_by_id=user.id,
            status=RepaymentStatus.COMPLETED,
            **values,
        )
        self.db.add(repayment)
        await self.db.commit()
        await self.db.refresh(repayment)
        return repayment

    async def list_repayments(
        self,
        org_id: uuid.UUID,
        loan_id: Optional[uuid.UUID] = None,
    ) -> List[LoanRepayment]:
        query = select(LoanRepayment).where(LoanRepayment.org_id == org_id)
        if loan_id:
            query = query.where(LoanRepayment.loan_id == loan_id)
        result = await self.db.execute(
            query.order_by(LoanRepayment.payment_date.desc(), LoanRepayment.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_repayment(self, org_id: uuid.UUID, repayment_id: uuid.UUID) -> LoanRepayment:
        repayment = await self.db.get(LoanRepayment, repayment_id)
        if not repayment or repayment.org_id != org_id:
            raise NotFoundException("Repayment", repayment_id, message="Repayment not found")
        return repayment

    async def update_repayment(
        self,
        org_id: uuid.UUID,
        repayment_id: uuid.UUID,
        data: RepaymentUpdate,
    ) -> LoanRepayment:
        repayment = await self.get_repayment(org_id, repayment_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("amount", "payment_date", "status"):
                continue
            if field in REPAYMENT_MONEY_FIELDS and value is not None:
                value = Decimal(str(value))
            setattr(repayment, field, value)
        await self.db.commit()
        await self.db.refresh(repayment)
        return repayment

    async def delete_repayment(self, org_id: uuid.UUID, repayment_id: uuid.UUID) -> None:
        repayment = await self.get_repayment(org_id, repayment_id)
        await self.db.delete(repayment)
        await self.db.commit()

    async def get_repayment_summary(self, org_id: uuid.UUID, loan_id: uuid.UUID) -> Dict[str, Any]:
        loan = await self.get_loan(org_id, loan_id)
        repayments = await self.list_repayments(org_id, loan_id)
        return {"loan_id": loan.id, **summarize_repayments(loan.amount, repayments)}
