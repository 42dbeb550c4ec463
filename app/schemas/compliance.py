"""
EarthSafe API - Compliance Schemas

Compliance documents, incident reports and safety checklists.
"""

from datetime import date as date_type, datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.compliance import (
    ChecklistStatus,
    ComplianceDocumentType,
    IncidentSeverity,
    IncidentStatus,
    IncidentType,
)


# ===========================================
# COMPLIANCE DOCUMENT SCHEMAS
# ===========================================

class ComplianceDocumentResponse(BaseModel):
    id: UUID
    org_id: UUID
    type: ComplianceDocumentType
    number: Optional[str]
    issued_date: Optional[date_type]
    expiry_date: date_type
    issuer: Optional[str]
    file_url: Optional[str]
    notes: Optional[str]
    uploaded_by_id: Optional[UUID]
    # Derived from expiry_date at read time
    status: str
    days_left: int
    created_at: datetime


class ComplianceSummaryResponse(BaseModel):
    score: int
    valid_required: int
    total_required: int
    missing: List[str]
    counts: Dict[str, int]


# ===========================================
# INCIDENT SCHEMAS
# ===========================================

class IncidentCreate(BaseModel):
    type: IncidentType
    severity: IncidentSeverity
    description: str = Field(..., min_length=1)
    location: Optional[str] = Field(None, max_length=200)
    date: Optional[datetime] = None
    photos: List[str] = Field(default_factory=list)


class IncidentUpdate(BaseModel):
    type: Optional[IncidentType] = None
    severity: Optional[IncidentSeverity] = None
    status: Optional[IncidentStatus] = None
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, max_length=200)
    photos: Optional[List[str]] = None
    resolution_notes: Optional[str] = None


class IncidentResponse(BaseModel):
    id: UUID
    org_id: UUID
    type: IncidentType
    severity: IncidentSeverity
    status: IncidentStatus
    date: datetime
    description: str
    location: Optional[str]
    photos: List[str]
    resolution_notes: Optional[str]
    reported_by_id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ===========================================
# SAFETY CHECKLIST SCHEMAS
# ===========================================

class ChecklistItem(BaseModel):
    id: str
    label: str
    checked: bool = False
    notes: Optional[str] = None


class SafetyChecklistCreate(BaseModel):
    items: List[ChecklistItem] = Field(..., min_length=1)
    shift_id: Optional[UUID] = None


class SafetyChecklistResponse(BaseModel):
    id: UUID
    org_id: UUID
    user_id: UUID
    shift_id: Optional[UUID]
    checklist_date: date_type
    items: List[ChecklistItem]
    status: ChecklistStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
