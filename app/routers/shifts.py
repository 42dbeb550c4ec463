"""
EarthSafe API - Shifts Router

Shifts and what is recorded on them: worker timesheets, material
movements and equipment usage.

Routes addressed by shift or timesheet id resolve the organization from
the record and then check the caller's membership in it.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import (
    ensure_org_admin,
    get_active_membership,
    get_current_user,
    get_org_membership,
    require_org_admin,
)
from app.models.organization import Membership
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.shift import (
    EquipmentUsageCreate,
    EquipmentUsageResponse,
    MaterialMovementCreate,
    MaterialMovementResponse,
    ShiftCreate,
    ShiftDetailResponse,
    ShiftResponse,
    ShiftUpdate,
    TimesheetCreate,
    TimesheetResponse,
    TimesheetUpdate,
)
from app.services.shift_service import ShiftService


router = APIRouter(tags=["Shifts"])


# ===========================================
# ORG-SCOPED SHIFT ENDPOINTS
# ===========================================

@router.post(
    "/orgs/{org_id}/shifts",
    response_model=ShiftResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_shift(
    org_id: UUID,
    request: ShiftCreate,
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    """Open a shift starting now; the caller supervises unless told otherwise."""
    return await ShiftService(db).create_shift(org_id, request, current_user)


@router.get("/orgs/{org_id}/shifts", response_model=List[ShiftResponse])
async def list_shifts(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ShiftService(db).list_shifts(org_id)


@router.patch("/orgs/{org_id}/shifts/{shift_id}", response_model=ShiftResponse)
async def update_shift(
    org_id: UUID,
    shift_id: UUID,
    request: ShiftUpdate,
    current_user: User = Depends(get_current_user),
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await ShiftService(db).update_shift(org_id, shift_id, request, current_user)


@router.get("/orgs/{org_id}/timesheets", response_model=List[TimesheetResponse])
async def list_timesheets(
    org_id: UUID,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    worker_id: Optional[UUID] = Query(None),
    membership: Membership = Depends(require_org_admin),
    db: AsyncSession = Depends(get_async_session),
):
    return await ShiftService(db).list_timesheets(org_id, start_date, end_date, worker_id)


# ===========================================
# SHIFT-ADDRESSED ENDPOINTS
# ===========================================

@router.get("/shifts/{shift_id}", response_model=ShiftDetailResponse)
async def get_shift_details(
    shift_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    service = ShiftService(db)
    shift = await service.get_shift(shift_id)
    await get_active_membership(db, current_user.id, shift.org_id)
    return await service.get_shift_details(shift)


@router.delete("/shifts/{shift_id}", response_model=MessageResponse)
async def delete_shift(
    shift_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    service = ShiftService(db)
    shift = await service.get_shift(shift_id)
    ensure_org_admin(await get_active_membership(db, current_user.id, shift.org_id))
    await service.delete_shift(shift)
    return MessageResponse(message="Shift deleted")


@router.post(
    "/shifts/{shift_id}/timesheets",
    response_model=TimesheetResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_timesheet(
    shift_id: UUID,
    request: TimesheetCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    service = ShiftService(db)
    shift = await service.get_shift(shift_id)
    await get_active_membership(db, current_user.id, shift.org_id)
    return await service.add_timesheet(shift, request)


@router.post(
    "/shifts/{shift_id}/material",
    response_model=MaterialMovementResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_material_movement(
    shift_id: UUID,
    request: MaterialMovementCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    service = ShiftService(db)
    shift = await service.get_shift(shift_id)
    await get_active_membership(db, current_user.id, shift.org_id)
    return await service.add_material_movement(shift, request)


@router.post(
    "/shifts/{shift_id}/equipment-usage",
    response_model=EquipmentUsageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_equipment_usage(
    shift_id: UUID,
    request: EquipmentUsageCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    service = ShiftService(db)
    shift = await service.get_shift(shift_id)
    await get_active_membership(db, current_user.id, shift.org_id)
    return await service.add_equipment_usage(shift, request)


# ===========================================
# TIMESHEET-ADDRESSED ENDPOINTS
# ===========================================

@router.patch("/timesheets/{timesheet_id}", response_model=TimesheetResponse)
async def update_timesheet(
    timesheet_id: UUID,
    request: TimesheetUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    service = ShiftService(db)
    timesheet = await service.get_timesheet(timesheet_id)
    ensure_org_admin(await get_active_membership(db, current_user.id, timesheet.org_id))
    return await service.update_timesheet(timesheet, request)


@router.delete("/timesheets/{timesheet_id}", response_model=MessageResponse)
async def delete_timesheet(
    timesheet_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    service = ShiftService(db)
    timesheet = await service.get_timesheet(timesheet_id)
    ensure_org_admin(await get_active_membership(db, current_user.id, timesheet.org_id))
    await service.delete_timesheet(timesheet)
    return MessageResponse(message="Timesheet deleted")
