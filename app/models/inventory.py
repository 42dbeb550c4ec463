"""
EarthSafe API - Inventory Model

Stock held at the mine: gold, stockpiled ore, equipment and consumables.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Numeric, String, Text, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, OrgScopedMixin


class InventoryItemType(str, Enum):
    GOLD = "gold"
    ORE = "ore"
    EQUIPMENT = "equipment"
    CONSUMABLE = "consumable"


class InventoryItem(BaseModel, OrgScopedMixin):
    __tablename__ = "inventory_items"

    item_type: Mapped[InventoryItemType] = mapped_column(SQLEnum(InventoryItemType), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=3),
        default=Decimal("0"),
        nullable=False,
    )
    unit: Mapped[str] = mapped_column(String(20), nullable=False)
    value_per_unit: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        default=Decimal("0.00"),
        nullable=False,
    )
    total_value: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        default=Decimal("0.00"),
        nullable=False,
        comment="quantity * value_per_unit, maintained on every write",
    )
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_updated: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
