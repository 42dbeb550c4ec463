"""
EarthSafe API - Equipment Router

Equipment register and the equipment finance readiness check.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_user, get_org_membership
from app.models.organization import Membership
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.equipment import (
    EquipmentCreate,
    EquipmentReadinessResponse,
    EquipmentResponse,
    EquipmentUpdate,
)
from app.services.dashboard_service import DashboardService
from app.services.equipment_service import EquipmentService


router = APIRouter(prefix="/orgs/{org_id}/equipment", tags=["Equipment"])


@router.post("", response_model=EquipmentResponse, status_code=status.HTTP_201_CREATED)
async def create_equipment(
    org_id: UUID,
    request: EquipmentCreate,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await EquipmentService(db).create_equipment(org_id, request)


@router.get("", response_model=List[EquipmentResponse])
async def list_equipment(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await EquipmentService(db).list_equipment(org_id)


@router.get("/readiness", response_model=EquipmentReadinessResponse)
async def get_equipment_readiness(
    org_id: UUID,
    consent: bool = Query(False, description="Applicant consents to a data review"),
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    """Checklist shown before applying for equipment finance."""
    return await DashboardService(db).get_equipment_readiness(org_id, current_user, consent)


@router.get("/{equipment_id}", response_model=EquipmentResponse)
async def get_equipment(
    org_id: UUID,
    equipment_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await EquipmentService(db).get_equipment(org_id, equipment_id)


@router.patch("/{equipment_id}", response_model=EquipmentResponse)
async def update_equipment(
    org_id: UUID,
    equipment_id: UUID,
    request: EquipmentUpdate,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await EquipmentService(db).update_equipment(org_id, equipment_id, request)


@router.delete("/{equipment_id}", response_model=MessageResponse)
async def delete_equipment(
    org_id: UUID,
    equipment_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    await EquipmentService(db).delete_equipment(org_id, equipment_id)
    return MessageResponse(message="Equipment deleted")
