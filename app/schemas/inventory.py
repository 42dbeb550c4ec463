"""
EarthSafe API - Inventory Schemas

Pydantic schemas for inventory management.
"""

from datetime import datetime
from typing import Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict

from app.models.inventory import InventoryItemType


class InventoryItemCreate(BaseModel):
    """Schema for creating an inventory item."""
    item_type: InventoryItemType
    name: str = Field(..., min_length=1, max_length=200)
    quantity: float = Field(0, ge=0)
    unit: str = Field(..., min_length=1, max_length=20)
    value_per_unit: float = Field(0, ge=0)
    location: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = None


class InventoryItemUpdate(BaseModel):
    """Schema for updating an inventory item."""
    item_type: Optional[InventoryItemType] = None
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    quantity: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=20)
    value_per_unit: Optional[float] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = None


class InventoryItemResponse(BaseModel):
    """Response schema for inventory item."""
    id: UUID
    org_id: UUID
    item_type: InventoryItemType
    name: str
    quantity: float
    unit: str
    value_per_unit: float
    total_value: float
    location: Optional[str]
    notes: Optional[str]
    last_updated: Optional[datetime]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TypeTotals(BaseModel):
    count: int
    value: float


class InventoryStatsResponse(BaseModel):
    total_items: int
    total_value: float
    by_type: Dict[str, TypeTotals]
