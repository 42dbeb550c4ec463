"""
EarthSafe API - Expense and Receipt Models
"""

import uuid
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import Date, Float, ForeignKey, Numeric, String, Text, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, OrgScopedMixin


class ExpenseCategory(str, Enum):
    FUEL = "fuel"
    LABOR = "labor"
    EQUIPMENT = "equipment"
    MAINTENANCE = "maintenance"
    CONSUMABLES = "consumables"
    TRANSPORT = "transport"
    OTHER = "other"


class ReceiptStatus(str, Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    FAILED = "failed"


class Expense(BaseModel, OrgScopedMixin):
    """Operating cost of a mine."""

    __tablename__ = "expenses"

    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    category: Mapped[ExpenseCategory] = mapped_column(SQLEnum(ExpenseCategory), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    supplier: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    receipt_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    entered_by_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Receipt(BaseModel, OrgScopedMixin):
    """
    Scanned purchase receipt.

    Text extraction happens on the device; the API stores what the client
    read along with its confidence.
    """

    __tablename__ = "receipts"

    date: Mapped[date] = mapped_column(Date, nullable=False)
    file_url: Mapped[str] = mapped_column(String(500), nullable=False)
    vendor: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    total: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=15, scale=2), nullable=True)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    extracted_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    confidence_score: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    status: Mapped[ReceiptStatus] = mapped_column(
        SQLEnum(ReceiptStatus),
        default=ReceiptStatus.PENDING,
        nullable=False,
    )
    uploaded_by_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
