"""
EarthSafe API - Organization Schemas
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.organization import (
    MembershipStatus,
    OrganizationStatus,
    OrganizationType,
    OrgRole,
)


class OrganizationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: OrganizationType = OrganizationType.MINE
    location: Optional[str] = Field(None, max_length=255)
    country: str = Field("Zimbabwe", max_length=100)
    commodity: List[str] = Field(default_factory=lambda: ["gold"])
    mining_license_number: Optional[str] = Field(None, max_length=100)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, max_length=30)


class OrganizationUpdate(BaseModel):
    """Only these fields may be changed after creation."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, max_length=30)
    mining_license_number: Optional[str] = Field(None, max_length=100)


class OrganizationResponse(BaseModel):
    id: UUID
    name: str
    type: OrganizationType
    location: Optional[str]
    country: str
    commodity: List[str]
    mining_license_number: Optional[str]
    contact_email: Optional[str]
    contact_phone: Optional[str]
    status: OrganizationStatus
    created_by_id: Optional[UUID]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MyOrganizationResponse(BaseModel):
    """An organization the caller belongs to, with their role in it."""
    organization: OrganizationResponse
    role: OrgRole
    status: MembershipStatus


class MemberAdd(BaseModel):
    email: EmailStr
    role: OrgRole = OrgRole.MINER


class MemberResponse(BaseModel):
    membership_id: UUID
    user_id: UUID
    first_name: str
    last_name: str
    email: str
    role: OrgRole
    status: MembershipStatus
    joined_at: datetime
