"""
EarthSafe API - Finance Schemas

Pydantic schemas for expenses, receipts, payroll and the financial
dashboard.
"""

from datetime import date as date_type, datetime
from typing import Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.expense import ExpenseCategory, ReceiptStatus
from app.models.payroll import PaymentMethod, PayrollStatus


# ===========================================
# EXPENSE SCHEMAS
# ===========================================

class ExpenseCreate(BaseModel):
    date: date_type
    category: ExpenseCategory
    description: str = Field(..., min_length=1, max_length=500)
    amount: float = Field(..., ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    supplier: Optional[str] = Field(None, max_length=200)
    receipt_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class ExpenseUpdate(BaseModel):
    date: Optional[date_type] = None
    category: Optional[ExpenseCategory] = None
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    amount: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    supplier: Optional[str] = Field(None, max_length=200)
    receipt_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class ExpenseResponse(BaseModel):
    id: UUID
    org_id: UUID
    date: date_type
    category: ExpenseCategory
    description: str
    amount: float
    currency: str
    supplier: Optional[str]
    receipt_url: Optional[str]
    entered_by_id: Optional[UUID]
    notes: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ExpenseStatsResponse(BaseModel):
    total: float
    count: int
    by_category: Dict[str, float]


# ===========================================
# RECEIPT SCHEMAS
# ===========================================

class ReceiptCreate(BaseModel):
    date: date_type
    file_url: str = Field(..., min_length=1, max_length=500)
    vendor: Optional[str] = Field(None, max_length=200)
    total: Optional[float] = Field(None, ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    extracted_text: Optional[str] = None
    confidence_score: Optional[float] = Field(None, ge=0, le=1)


class ReceiptUpdate(BaseModel):
    date: Optional[date_type] = None
    vendor: Optional[str] = Field(None, max_length=200)
    total: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    extracted_text: Optional[str] = None
    confidence_score: Optional[float] = Field(None, ge=0, le=1)
    status: Optional[ReceiptStatus] = None


class ReceiptResponse(BaseModel):
    id: UUID
    org_id: UUID
    date: date_type
    file_url: str
    vendor: Optional[str]
    total: Optional[float]
    currency: str
    extracted_text: Optional[str]
    confidence_score: Optional[float]
    status: ReceiptStatus
    uploaded_by_id: Optional[UUID]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ===========================================
# PAYROLL SCHEMAS
# ===========================================

class PayrollCreate(BaseModel):
    employee_name: str = Field(..., min_length=1, max_length=200)
    employee_id: Optional[str] = Field(None, max_length=100)
    payment_date: date_type
    amount: float = Field(..., ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    payment_method: PaymentMethod = PaymentMethod.CASH
    pay_period_start: Optional[date_type] = None
    pay_period_end: Optional[date_type] = None
    hours_worked: Optional[float] = Field(None, ge=0)
    hourly_rate: Optional[float] = Field(None, ge=0)
    deductions: float = Field(0, ge=0)
    bonuses: float = Field(0, ge=0)
    # Derived as amount + bonuses - deductions when omitted
    net_pay: Optional[float] = None
    receipt_url: Optional[str] = Field(None, max_length=500)
    transaction_ref: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    status: PayrollStatus = PayrollStatus.PAID


class PayrollUpdate(BaseModel):
    employee_name: Optional[str] = Field(None, min_length=1, max_length=200)
    employee_id: Optional[str] = Field(None, max_length=100)
    payment_date: Optional[date_type] = None
    amount: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    payment_method: Optional[PaymentMethod] = None
    pay_period_start: Optional[date_type] = None
    pay_period_end: Optional[date_type] = None
    hours_worked: Optional[float] = Field(None, ge=0)
    hourly_rate: Optional[float] = Field(None, ge=0)
    deductions: Optional[float] = Field(None, ge=0)
    bonuses: Optional[float] = Field(None, ge=0)
    net_pay: Optional[float] = None
    receipt_url: Optional[str] = Field(None, max_length=500)
    transaction_ref: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    status: Optional[PayrollStatus] = None


class PayrollResponse(BaseModel):
    id: UUID
    org_id: UUID
    employee_name: str
    employee_id: Optional[str]
    payment_date: date_type
    amount: float
    currency: str
    payment_method: PaymentMethod
    pay_period_start: Optional[date_type]
    pay_period_end: Optional[date_type]
    hours_worked: Optional[float]
    hourly_rate: Optional[float]
    deductions: float
    bonuses: float
    net_pay: float
    receipt_url: Optional[str]
    transaction_ref: Optional[str]
    notes: Optional[str]
    paid_by_id: Optional[UUID]
    status: PayrollStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EmployeePayTotals(BaseModel):
    count: int
    total: float


class PayrollStatsResponse(BaseModel):
    """Totals over paid records only."""
    total_paid: float
    total_records: int
    by_employee: Dict[str, EmployeePayTotals]


# ===========================================
# DASHBOARD SCHEMAS
# ===========================================

class FinancialDashboardResponse(BaseModel):
    total_expenses: float
    expense_count: int
    total_payroll: float
    payroll_count: int
    total_income: float
    sales_count: int
    total_receipts: int
    net_profit: float
