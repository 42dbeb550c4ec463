"""
EarthSafe API - Equipment Model

Register of machines and tools owned by an organization.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import Date, Numeric, String, Text, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, OrgScopedMixin


class EquipmentType(str, Enum):
    HEAVY_MACHINERY = "heavy_machinery"
    TOOLS = "tools"
    VEHICLES = "vehicles"
    PROCESSING_EQUIPMENT = "processing_equipment"


class EquipmentStatus(str, Enum):
    OPERATIONAL = "operational"
    MAINTENANCE = "maintenance"
    BROKEN = "broken"
    RETIRED = "retired"


class Equipment(BaseModel, OrgScopedMixin):
    __tablename__ = "equipment"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[EquipmentType] = mapped_column(SQLEnum(EquipmentType), nullable=False)
    status: Mapped[EquipmentStatus] = mapped_column(
        SQLEnum(EquipmentStatus),
        default=EquipmentStatus.OPERATIONAL,
        nullable=False,
    )
    serial_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    purchase_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    purchase_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=15, scale=2), nullable=True)
    current_value: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=15, scale=2), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    last_maintenance_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    next_maintenance_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
