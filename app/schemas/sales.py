"""
EarthSafe API - Sales Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.sales import DEFAULT_BUYER_NAME, SaleSource, SaleStatus


class SaleCreate(BaseModel):
    """Sale as captured on the device: quantity in grams, price per gram."""
    buyer_name: str = Field(DEFAULT_BUYER_NAME, min_length=1, max_length=200)
    quantity: float = Field(..., gt=0)
    price_per_unit: float = Field(..., ge=0)
    unit: str = Field("grams", max_length=20)
    receipt_number: str = Field(..., min_length=1, max_length=100)
    receipt_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None
    date: Optional[datetime] = None


class SaleUpdate(BaseModel):
    buyer_name: Optional[str] = Field(None, min_length=1, max_length=200)
    quantity: Optional[float] = Field(None, gt=0)
    price_per_unit: Optional[float] = Field(None, ge=0)
    status: Optional[SaleStatus] = None
    reconciled_with_shift_id: Optional[UUID] = None
    notes: Optional[str] = None


class SaleResponse(BaseModel):
    id: UUID
    org_id: UUID
    date: datetime
    source: SaleSource
    reference_id: str
    mineral_type: str
    grams: float
    price_per_gram: Optional[float]
    total_value: float
    currency: str
    buyer_name: str
    receipt_url: Optional[str]
    status: SaleStatus
    reconciled_with_shift_id: Optional[UUID]
    notes: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
