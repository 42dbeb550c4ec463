"""
EarthSafe API - Shift Models

Production is recorded per shift. A shift collects:
- Timesheets: who worked and for how long
- Material movements: ore, waste and tailings moved between locations
- Equipment usage: machine hours and fuel burned
"""

import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, Numeric, String, Text, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, OrgScopedMixin


class ShiftType(str, Enum):
    DAY = "day"
    NIGHT = "night"
    OTHER = "other"


class ShiftStatus(str, Enum):
    OPEN = "open"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


class MaterialType(str, Enum):
    ORE = "ore"
    WASTE = "waste"
    TAILINGS = "tailings"
    CONCENTRATE = "concentrate"
    WATER = "water"


class Shift(BaseModel, OrgScopedMixin):
    """A single work shift at a mine site."""

    __tablename__ = "shifts"

    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    type: Mapped[ShiftType] = mapped_column(
        SQLEnum(ShiftType),
        default=ShiftType.DAY,
        nullable=False,
    )
    status: Mapped[ShiftStatus] = mapped_column(
        SQLEnum(ShiftStatus),
        default=ShiftStatus.OPEN,
        nullable=False,
    )
    supervisor_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    created_by_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    weather_condition: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    start_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    end_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_by_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=True,
    )
    approval_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class Timesheet(BaseModel, OrgScopedMixin):
    """Hours worked by one worker on one shift."""

    __tablename__ = "timesheets"

    shift_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("shifts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Workers are often not platform users, so the name is the primary key for reporting
    worker_name: Mapped[str] = mapped_column(String(200), nullable=False)
    worker_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(50), nullable=False)
    hours_worked: Mapped[float] = mapped_column(Float, nullable=False)
    rate_per_shift: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=15, scale=2), nullable=True)
    total_pay: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=15, scale=2), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class MaterialMovement(BaseModel, OrgScopedMixin):
    """Material hauled during a shift, e.g. ore from Pit A to the crusher."""

    __tablename__ = "material_movements"

    shift_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("shifts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[MaterialType] = mapped_column(SQLEnum(MaterialType), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=3), nullable=False)
    unit: Mapped[str] = mapped_column(String(20), default="tons", nullable=False)
    source: Mapped[str] = mapped_column(String(200), nullable=False)
    destination: Mapped[str] = mapped_column(String(200), nullable=False)
    grade_estimate: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
        comment="Estimated grade in g/t",
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class EquipmentUsage(BaseModel, OrgScopedMixin):
    """Hour-meter readings and fuel for a machine during a shift."""

    __tablename__ = "equipment_usage"

    shift_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("shifts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    equipment_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("equipment.id", ondelete="SET NULL"),
        nullable=True,
    )
    equipment_name: Mapped[str] = mapped_column(String(200), nullable=False)
    hours_start: Mapped[float] = mapped_column(Float, nullable=False)
    hours_end: Mapped[float] = mapped_column(Float, nullable=False)
    hours_used: Mapped[float] = mapped_column(Float, nullable=False)
    fuel_consumed_liters: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    operator_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
