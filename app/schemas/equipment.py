"""
EarthSafe API - Equipment Schemas
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.equipment import EquipmentStatus, EquipmentType


class EquipmentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    type: EquipmentType
    status: EquipmentStatus = EquipmentStatus.OPERATIONAL
    serial_number: Optional[str] = Field(None, max_length=100)
    purchase_date: Optional[date] = None
    purchase_price: Optional[float] = Field(None, ge=0)
    current_value: Optional[float] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=200)
    last_maintenance_date: Optional[date] = None
    next_maintenance_date: Optional[date] = None
    notes: Optional[str] = None


class EquipmentCreate(EquipmentBase):
    """current_value defaults to purchase_price when omitted."""


class EquipmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[EquipmentType] = None
    status: Optional[EquipmentStatus] = None
    serial_number: Optional[str] = Field(None, max_length=100)
    purchase_date: Optional[date] = None
    purchase_price: Optional[float] = Field(None, ge=0)
    current_value: Optional[float] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=200)
    last_maintenance_date: Optional[date] = None
    next_maintenance_date: Optional[date] = None
    notes: Optional[str] = None


class EquipmentResponse(EquipmentBase):
    id: UUID
    org_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EquipmentReadinessResponse(BaseModel):
    """Checks shown before browsing equipment financing offers."""
    profile_complete: bool
    production_data: bool
    compliance_ready: bool
    can_proceed: bool
