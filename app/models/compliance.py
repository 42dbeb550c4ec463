"""
EarthSafe API - Compliance Models

Compliance Records:
- ComplianceDocument: licenses and permits with an expiry date
- Incident: safety incidents reported on site
- SafetyChecklist: the daily pre-shift safety checklist
"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import Date, DateTime, ForeignKey, JSON, String, Text, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, OrgScopedMixin


class ComplianceDocumentType(str, Enum):
    MINING_LICENSE = "Mining License"
    PROSPECTING_LICENSE = "Prospecting License"
    EIA_CERTIFICATE = "Environmental Impact Assessment Certificate"
    HEALTH_SAFETY_CERTIFICATION = "Health and Safety Certification"
    LOCAL_PERMIT = "Local Permit"


# Every one of these must be held and unexpired for a 100% compliance score
REQUIRED_DOCUMENT_TYPES = tuple(ComplianceDocumentType)


class IncidentType(str, Enum):
    ACCIDENT = "accident"
    INJURY = "injury"
    NEAR_MISS = "near_miss"
    HAZARD = "hazard"
    EQUIPMENT_FAILURE = "equipment_failure"


class IncidentSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IncidentStatus(str, Enum):
    OPEN = "open"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    CLOSED = "closed"


class ChecklistStatus(str, Enum):
    SUBMITTED = "submitted"
    VERIFIED = "verified"
    FLAGGED = "flagged"


class ComplianceDocument(BaseModel, OrgScopedMixin):
    """
    License or permit held by an organization.

    Status (active/expiring/expired) is not stored; it is derived from
    expiry_date whenever the document is read.
    """

    __tablename__ = "compliance_documents"

    type: Mapped[ComplianceDocumentType] = mapped_column(SQLEnum(ComplianceDocumentType), nullable=False)
    number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    issued_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    expiry_date: Mapped[date] = mapped_column(Date, nullable=False)
    issuer: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    file_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    uploaded_by_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )


class Incident(BaseModel, OrgScopedMixin):
    __tablename__ = "incidents"

    type: Mapped[IncidentType] = mapped_column(SQLEnum(IncidentType), nullable=False)
    severity: Mapped[IncidentSeverity] = mapped_column(SQLEnum(IncidentSeverity), nullable=False)
    status: Mapped[IncidentStatus] = mapped_column(
        SQLEnum(IncidentStatus),
        default=IncidentStatus.OPEN,
        nullable=False,
    )
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    photos: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    resolution_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reported_by_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
    )


class SafetyChecklist(BaseModel, OrgScopedMixin):
    __tablename__ = "safety_checklists"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    shift_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("shifts.id", ondelete="SET NULL"),
        nullable=True,
    )
    checklist_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    # [{"id", "label", "checked", "notes"}]
    items: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    status: Mapped[ChecklistStatus] = mapped_column(
        SQLEnum(ChecklistStatus),
        default=ChecklistStatus.SUBMITTED,
        nullable=False,
    )
