"""
EarthSafe API - Receipts Router

Scanned receipts. Text extraction happens on the device; the API stores
the image and whatever the device extracted.
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
from app.schemas.finance import ReceiptCreate, ReceiptResponse, ReceiptUpdate
from app.services.receipt_service import ReceiptService


router = APIRouter(prefix="/orgs/{org_id}/receipts", tags=["Receipts"])


@router.post("", response_model=ReceiptResponse, status_code=status.HTTP_201_CREATED)
async def create_receipt(
    org_id: UUID,
    request: ReceiptCreate,
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ReceiptService(db).create_receipt(org_id, request, current_user)


@router.post(
    "/upload",
    response_model=ReceiptResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a receipt image",
)
async def upload_receipt(
    org_id: UUID,
    file: UploadFile = File(...),
    receipt_date: Optional[date] = Form(None, alias="date"),
    vendor: Optional[str] = Form(None),
    total: Optional[float] = Form(None, ge=0),
    currency: str = Form("USD"),
    extracted_text: Optional[str] = Form(None),
    confidence_score: Optional[float] = Form(None, ge=0, le=1),
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ReceiptService(db).upload_receipt(
        org_id,
        file,
        current_user,
        receipt_date=receipt_date,
        vendor=vendor,
        total=total,
        currency=currency,
        extracted_text=extracted_text,
        confidence_score=confidence_score,
    )


@router.get("", response_model=List[ReceiptResponse])
async def list_receipts(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ReceiptService(db).list_receipts(org_id)


@router.get("/{receipt_id}", response_model=ReceiptResponse)
async def get_receipt(
    org_id: UUID,
    receipt_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ReceiptService(db).get_receipt(org_id, receipt_id)


@router.patch("/{receipt_id}", response_model=ReceiptResponse)
async def update_receipt(
    org_id: UUID,
    receipt_id: UUID,
    request: ReceiptUpdate,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ReceiptService(db).update_receipt(org_id, receipt_id, request)


@router.delete("/{receipt_id}", response_model=MessageResponse)
async def delete_receipt(
    org_id: UUID,
    receipt_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    await ReceiptService(db).delete_receipt(org_id, receipt_id)
    return MessageResponse(message="Receipt deleted")
