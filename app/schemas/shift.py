"""
EarthSafe API - Shift Schemas

Shifts and the records captured during them (timesheets, material
movements, equipment usage).
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.shift import MaterialType, ShiftStatus, ShiftType


# ===========================================
# SHIFT SCHEMAS
# ===========================================

class ShiftCreate(BaseModel):
    type: ShiftType = ShiftType.DAY
    supervisor_id: Optional[UUID] = None
    notes: Optional[str] = None
    weather_condition: Optional[str] = Field(None, max_length=50)


class ShiftUpdate(BaseModel):
    type: Optional[ShiftType] = None
    status: Optional[ShiftStatus] = None
    notes: Optional[str] = None
    weather_condition: Optional[str] = Field(None, max_length=50)
    end_time: Optional[datetime] = None


class ShiftResponse(BaseModel):
    id: UUID
    org_id: UUID
    date: datetime
    type: ShiftType
    status: ShiftStatus
    supervisor_id: UUID
    created_by_id: UUID
    notes: Optional[str]
    weather_condition: Optional[str]
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    approved_by_id: Optional[UUID]
    approval_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ===========================================
# TIMESHEET SCHEMAS
# ===========================================

class TimesheetCreate(BaseModel):
    worker_name: str = Field(..., min_length=1, max_length=200)
    worker_id: Optional[UUID] = None
    role: str = Field(..., min_length=1, max_length=50)
    hours_worked: float = Field(..., ge=0, le=24)
    rate_per_shift: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class TimesheetUpdate(BaseModel):
    hours_worked: Optional[float] = Field(None, ge=0, le=24)
    rate_per_shift: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class TimesheetResponse(BaseModel):
    id: UUID
    shift_id: UUID
    org_id: UUID
    worker_name: str
    worker_id: Optional[UUID]
    role: str
    hours_worked: float
    rate_per_shift: Optional[float]
    total_pay: Optional[float]
    notes: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ===========================================
# MATERIAL MOVEMENT SCHEMAS
# ===========================================

class MaterialMovementCreate(BaseModel):
    type: MaterialType
    quantity: float = Field(..., ge=0)
    unit: str = Field("tons", max_length=20)
    source: str = Field(..., min_length=1, max_length=200)
    destination: str = Field(..., min_length=1, max_length=200)
    grade_estimate: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class MaterialMovementResponse(BaseModel):
    id: UUID
    shift_id: UUID
    org_id: UUID
    type: MaterialType
    quantity: float
    unit: str
    source: str
    destination: str
    grade_estimate: Optional[float]
    notes: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ===========================================
# EQUIPMENT USAGE SCHEMAS
# ===========================================

class EquipmentUsageCreate(BaseModel):
    equipment_id: Optional[UUID] = None
    equipment_name: str = Field(..., min_length=1, max_length=200)
    hours_start: float = Field(..., ge=0)
    hours_end: float = Field(..., ge=0)
    fuel_consumed_liters: Optional[float] = Field(None, ge=0)
    operator_name: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = None


class EquipmentUsageResponse(BaseModel):
    id: UUID
    shift_id: UUID
    org_id: UUID
    equipment_id: Optional[UUID]
    equipment_name: str
    hours_start: float
    hours_end: float
    hours_used: float
    fuel_consumed_liters: Optional[float]
    operator_name: Optional[str]
    notes: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ShiftDetailResponse(BaseModel):
    shift: ShiftResponse
    timesheets: List[TimesheetResponse]
    materials: List[MaterialMovementResponse]
    equipment_usage: List[EquipmentUsageResponse]
