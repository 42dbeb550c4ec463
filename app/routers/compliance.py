"""
EarthSafe API - Compliance Router

Licenses and permits, the compliance score, incident reports and daily
safety checklists.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_user, get_org_membership
from app.models.organization import Membership
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.compliance import (
    ComplianceDocumentResponse,
    ComplianceSummaryResponse,
    IncidentCreate,
    IncidentResponse,
    IncidentUpdate,
    SafetyChecklistCreate,
    SafetyChecklistResponse,
)
from app.services.compliance_service import ComplianceService, serialize_document


router = APIRouter(prefix="/orgs/{org_id}/compliance", tags=["Compliance"])


# ===========================================
# DOCUMENTS
# ===========================================

@router.post(
    "/documents",
    response_model=ComplianceDocumentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a license or permit",
)
async def create_document(
    org_id: UUID,
    doc_type: str = Form(..., alias="type"),
    expiry_date: date = Form(...),
    number: Optional[str] = Form(None),
    issued_date: Optional[date] = Form(None),
    issuer: Optional[str] = Form(None),
    notes: Optional[str] = Form(None),
    file_url: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    """Multipart form. An attached file takes precedence over file_url."""
    document = await ComplianceService(db).create_document(
        org_id,
        current_user,
        doc_type=doc_type,
        expiry_date=expiry_date,
        number=number,
        issued_date=issued_date,
        issuer=issuer,
        notes=notes,
        file=file,
        file_url=file_url,
    )
    return serialize_document(document)


@router.get("/documents", response_model=List[ComplianceDocumentResponse])
async def list_documents(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    documents = await ComplianceService(db).list_documents(org_id)
    today = date.today()
    return [serialize_document(doc, today) for doc in documents]


@router.delete("/documents/{document_id}", response_model=MessageResponse)
async def delete_document(
    org_id: UUID,
    document_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    await ComplianceService(db).delete_document(org_id, document_id)
    return MessageResponse(message="Document deleted")


@router.get("/summary", response_model=ComplianceSummaryResponse)
async def get_compliance_summary(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ComplianceService(db).get_summary(org_id)


# ===========================================
# INCIDENTS
# ===========================================

@router.post("/incidents", response_model=IncidentResponse, status_code=status.HTTP_201_CREATED)
async def report_incident(
    org_id: UUID,
    request: IncidentCreate,
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ComplianceService(db).create_incident(org_id, request, current_user)


@router.get("/incidents", response_model=List[IncidentResponse])
async def list_incidents(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ComplianceService(db).list_incidents(org_id)


@router.patch("/incidents/{incident_id}", response_model=IncidentResponse)
async def update_incident(
    org_id: UUID,
    incident_id: UUID,
    request: IncidentUpdate,
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ComplianceService(db).update_incident(
        org_id, incident_id, request, current_user, membership
    )


@router.delete("/incidents/{incident_id}", response_model=MessageResponse)
async def delete_incident(
    org_id: UUID,
    incident_id: UUID,
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    await ComplianceService(db).delete_incident(org_id, incident_id, current_user, membership)
    return MessageResponse(message="Incident deleted")


# ===========================================
# SAFETY CHECKLISTS
# ===========================================

@router.post("/checklist", response_model=SafetyChecklistResponse, status_code=status.HTTP_201_CREATED)
async def submit_checklist(
    org_id: UUID,
    request: SafetyChecklistCreate,
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ComplianceService(db).submit_checklist(org_id, request, current_user)


@router.get("/checklist/today", response_model=Optional[SafetyChecklistResponse])
async def get_today_checklist(
    org_id: UUID,
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    """The caller's checklist for today, or null if none was submitted."""
    return await ComplianceService(db).get_today_checklist(org_id, current_user)
