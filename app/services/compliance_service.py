"""
EarthSafe API - Compliance Service

Business logic for:
- Compliance documents (licenses, permits) and their expiry status
- The organization compliance score over the required document types
- Safety incident reports
- Daily safety checklists
"""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.compliance import (
    ChecklistStatus,
    ComplianceDocument,
    ComplianceDocumentType,
    Incident,
    IncidentStatus,
    REQUIRED_DOCUMENT_TYPES,
    SafetyChecklist,
)
from app.models.organization import Membership
from app.models.user import User
from app.schemas.compliance import IncidentCreate, IncidentUpdate, SafetyChecklistCreate
from app.services.file_storage_service import FileCategory, FileStorageService
from app.services.shift_service import ShiftService
from app.utils.error_handling import (
    AuthorizationException,
    BadRequestException,
    NotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

EXPIRING_WINDOW_DAYS = 30
RECENT_INCIDENTS_LIMIT = 50

STATUS_ACTIVE = "active"
STATUS_EXPIRING = "expiring"
STATUS_EXPIRED = "expired"


# ===========================================
# PURE CALCULATIONS
# ===========================================

def document_status(expiry_date: date, today: Optional[date] = None) -> Tuple[str, int]:
    """
    Return (status, days_left) for a document expiring on expiry_date.

    A document expiring today has no days left and counts as expired.
    """
    today = today or date.today()
    days_left = max(0, (expiry_date - today).days)
    if days_left <= 0:
        return STATUS_EXPIRED, days_left
    if days_left <= EXPIRING_WINDOW_DAYS:
        return STATUS_EXPIRING, days_left
    return STATUS_ACTIVE, days_left


def compute_compliance_summary(
    documents: Iterable[ComplianceDocument],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Score = share of required document types held with a non-expired
    document, as a rounded percentage.
    """
    counts = {STATUS_ACTIVE: 0, STATUS_EXPIRING: 0, STATUS_EXPIRED: 0}
    valid_types = set()

    for doc in documents:
        status, _ = document_status(doc.expiry_date, today)
        counts[status] += 1
        if status != STATUS_EXPIRED:
            valid_types.add(ComplianceDocumentType(doc.type))

    valid_required = sum(1 for t in REQUIRED_DOCUMENT_TYPES if t in valid_types)
    total_required = len(REQUIRED_DOCUMENT_TYPES)

    return {
        "score": round(valid_required / total_required * 100),
        "valid_required": valid_required,
        "total_required": total_required,
        "missing": [t.value for t in REQUIRED_DOCUMENT_TYPES if t not in valid_types],
        "counts": counts,
    }


def serialize_document(doc: ComplianceDocument, today: Optional[date] = None) -> Dict[str, Any]:
    status, days_left = document_status(doc.expiry_date, today)
    return {
        "id": doc.id,
        "org_id": doc.org_id,
        "type": doc.type,
        "number": doc.number,
        "issued_date": doc.issued_date,
        "expiry_date": doc.expiry_date,
        "issuer": doc.issuer,
        "file_url": doc.file_url,
        "notes": doc.notes,
        "uploaded_by_id": doc.uploaded_by_id,
        "status": status,
        "days_left": days_left,
        "created_at": doc.created_at,
    }


def parse_document_type(value: str) -> ComplianceDocumentType:
    try:
        return ComplianceDocumentType(value)
    except ValueError:
        raise ValidationException(
            f"Unknown document type '{value}'",
            details={"allowed": [t.value for t in ComplianceDocumentType]},
        )


class ComplianceService:
    """Service for compliance documents, incidents and safety checklists."""

    def __init__(self, db: AsyncSession, storage: Optional[FileStorageService] = None):
        self.db = db
        self.storage = storage

    def _storage(self) -> FileStorageService:
        if self.storage is None:
            self.storage = FileStorageService()
        return self.storage

    # ===========================================
    # DOCUMENT OPERATIONS
    # ===========================================

    async def create_document(
        self,
        org_id: uuid.UUID,
        user: User,
        doc_type: str,
        expiry_date: date,
        number: Optional[str] = None,
        issued_date: Optional[date] = None,
        issuer: Optional[str] = None,
        notes: Optional[str] = None,
        file: Optional[UploadFile] = None,
        file_url: Optional[str] = None,
    ) -> ComplianceDocument:
        """Create a document, storing the attached file if one was sent."""
        document_type = parse_document_type(doc_type)

        if file is not None and file.filename:
            content = await self._storage().read_upload(file)
            stored = await self._storage().upload_file(
                org_id=org_id,
                file_content=content,
                filename=file.filename,
                content_type=file.content_type,
                category=FileCategory.COMPLIANCE,
            )
            file_url = stored["url"]

        document = ComplianceDocument(
            org_id=org_id,
            type=document_type,
            number=number,
            issued_date=issued_date,
            expiry_date=expiry_date,
            issuer=issuer,
            file_url=file_url,
            notes=notes,
            uploaded_by_id=user.id,
        )
        self.db.add(document)
        await self.db.commit()
        await self.db.refresh(document)

        logger.info(f"Compliance document '{document_type.value}' added for org {org_id}")
        return document

    async def list_documents(self, org_id: uuid.UUID) -> List[ComplianceDocument]:
        result = await self.db.execute(
            select(ComplianceDocument)
            .where(ComplianceDocument.org_id == org_id)
            .order_by(ComplianceDocument.expiry_date.asc())
        )
        return list(result.scalars().all())

    async def get_document(self, org_id: uuid.UUID, document_id: uuid.UUID) -> ComplianceDocument:
        document = await self.db.get(ComplianceDocument, document_id)
        if not document or document.org_id != org_id:
            raise NotFoundException("ComplianceDocument", document_id, message="Document not found")
        return document

    async def delete_document(self, org_id: uuid.UUID, document_id: uuid.UUID) -> None:
        document = await self.get_document(org_id, document_id)
        file_id = self._storage().file_id_from_url(document.file_url)

        await self.db.delete(document)
        await self.db.commit()

        if file_id:
            self._storage().delete_file(file_id)

    async def get_summary(self, org_id: uuid.UUID) -> Dict[str, Any]:
        documents = await self.list_documents(org_id)
        return compute_compliance_summary(documents)

    # ===========================================
    # INCIDENT OPERATIONS
    # ===========================================

    async def create_incident(self, org_id: uuid.UUID, data: IncidentCreate, user: User) -> Incident:
        incident = Incident(
            org_id=org_id,
            type=data.type,
            severity=data.severity,
            status=IncidentStatus.OPEN,
            date=data.date or datetime.now(timezone.utc),
            description=data.description,
            location=data.location,
            photos=list(data.photos),
            reported_by_id=user.id,
        )
        self.db.add(incident)
        await self.db.commit()
        await self.db.refresh(incident)

        logger.info(f"Incident {incident.id} ({incident.severity.value}) reported for org {org_id}")
        return incident

    async def list_incidents(self, org_id: uuid.UUID, limit: int = RECENT_INCIDENTS_LIMIT) -> List[Incident]:
        result = await self.db.execute(
            select(Incident)
            .where(Incident.org_id == org_id)
            .order_by(Incident.date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def _get_editable_incident(
        self,
        org_id: uuid.UUID,
        incident_id: uuid.UUID,
        user: User,
        membership: Membership,
    ) -> Incident:
        incident = await self.db.get(Incident, incident_id)
        if not incident:
            raise NotFoundException("Incident", incident_id, message="Incident not found")
        if incident.org_id != org_id:
            raise BadRequestException("Incident does not belong to this organization")
        if incident.reported_by_id != user.id and not membership.is_admin:
            raise AuthorizationException("Only the reporter or an organization admin can modify this incident")
        return incident

    async def update_incident(
        self,
        org_id: uuid.UUID,
        incident_id: uuid.UUID,
        data: IncidentUpdate,
        user: User,
        membership: Membership,
    ) -> Incident:
        incident = await self._get_editable_incident(org_id, incident_id, user, membership)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("type", "severity", "status", "description", "photos"):
                continue
            setattr(incident, field, value)
        await self.db.commit()
        await self.db.refresh(incident)
        return incident

    async def delete_incident(
        self,
        org_id: uuid.UUID,
        incident_id: uuid.UUID,
        user: User,
        membership: Membership,
    ) -> None:
        incident = await self._get_editable_incident(org_id, incident_id, user, membership)
        await self.db.delete(incident)
        await self.db.commit()

    # ===========================================
    # SAFETY CHECKLIST OPERATIONS
    # ===========================================

    async def submit_checklist(
        self,
        org_id: uuid.UUID,
        data: SafetyChecklistCreate,
        user: User,
    ) -> SafetyChecklist:
        if data.shift_id is not None:
            await ShiftService(self.db).get_shift(data.shift_id, org_id)

        checklist = SafetyChecklist(
            org_id=org_id,
            user_id=user.id,
            shift_id=data.shift_id,
            checklist_date=date.today(),
            items=[item.model_dump() for item in data.items],
            status=ChecklistStatus.SUBMITTED,
        )
        self.db.add(checklist)
        await self.db.commit()
        await self.db.refresh(checklist)
        return checklist

    async def get_today_checklist(self, org_id: uuid.UUID, user: User) -> Optional[SafetyChecklist]:
        result = await self.db.execute(
            select(SafetyChecklist)
            .where(
                SafetyChecklist.org_id == org_id,
                SafetyChecklist.user_id == user.id,
                SafetyChecklist.checklist_date == date.today(),
            )
            .order_by(SafetyChecklist.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()
