"""
EarthSafe API - Sales Transaction Model

Mineral sales to licensed buyers. Sales to Fidelity Printers & Refiners are
the main source of verifiable revenue used for credit scoring.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, OrgScopedMixin


DEFAULT_BUYER_NAME = "Fidelity Printers & Refiners"


class SaleSource(str, Enum):
    FIDELITY = "fidelity"
    PRIVATE = "private"
    OTHER = "other"


class SaleStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    RECONCILED = "reconciled"   # Matched with production records
    FLAGGED = "flagged"


class SalesTransaction(BaseModel, OrgScopedMixin):
    __tablename__ = "sales_transactions"

    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    source: Mapped[SaleSource] = mapped_column(
        SQLEnum(SaleSource),
        default=SaleSource.FIDELITY,
        nullable=False,
    )
    # Receipt number or buyer transaction id
    reference_id: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    mineral_type: Mapped[str] = mapped_column(String(50), default="gold", nullable=False)
    grams: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=3), nullable=False)
    price_per_gram: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=15, scale=2), nullable=True)
    total_value: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    buyer_name: Mapped[str] = mapped_column(String(200), default=DEFAULT_BUYER_NAME, nullable=False)
    receipt_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    status: Mapped[SaleStatus] = mapped_column(
        SQLEnum(SaleStatus),
        default=SaleStatus.PENDING,
        nullable=False,
    )
    reconciled_with_shift_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("shifts.id", ondelete="SET NULL"),
        nullable=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
