"""
EarthSafe API - Shift Service

Business logic for shifts and the production records captured on them:
timesheets, material movements and equipment usage.
"""

import logging
import uuid
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.equipment import Equipment
from app.models.shift import (
    EquipmentUsage,
    MaterialMovement,
    Shift,
    ShiftStatus,
    Timesheet,
)
from app.models.user import User
from app.schemas.shift import (
    EquipmentUsageCreate,
    MaterialMovementCreate,
    ShiftCreate,
    ShiftUpdate,
    TimesheetCreate,
    TimesheetUpdate,
)
from app.utils.error_handling import BusinessRuleException, NotFoundException

logger = logging.getLogger(__name__)

RECENT_SHIFTS_LIMIT = 50


def compute_total_pay(rate_per_shift: Optional[float]) -> Optional[Decimal]:
    """Workers are paid a flat rate per shift regardless of hours."""
    if rate_per_shift is None:
        return None
    return Decimal(str(rate_per_shift)).quantize(Decimal("0.01"))


def compute_hours_used(hours_start: float, hours_end: float) -> float:
    """Hour-meter delta; a meter cannot run backwards."""
    hours_used = round(hours_end - hours_start, 2)
    if hours_used < 0:
        raise BusinessRuleException(
            "hours_end must be greater than or equal to hours_start",
            rule="hour_meter_monotonic",
        )
    return hours_used


class ShiftService:
    """Service for shift management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ===========================================
    # SHIFT OPERATIONS
    # ===========================================

    async def create_shift(self, org_id: uuid.UUID, data: ShiftCreate, user: User) -> Shift:
        """Open a new shift starting now."""
        now = datetime.now(timezone.utc)
        shift = Shift(
            org_id=org_id,
            date=now,
            type=data.type,
            supervisor_id=data.supervisor_id or user.id,
            created_by_id=user.id,
            status=ShiftStatus.OPEN,
            start_time=now,
            notes=data.notes,
            weather_condition=data.weather_condition,
        )
        self.db.add(shift)
        await self.db.commit()
        await self.db.refresh(shift)
        return shift

    async def list_shifts(self, org_id: uuid.UUID, limit: int = RECENT_SHIFTS_LIMIT) -> List[Shift]:
        result = await self.db.execute(
            select(Shift)
            .where(Shift.org_id == org_id)
            .order_by(Shift.date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_shift(self, shift_id: uuid.UUID, org_id: Optional[uuid.UUID] = None) -> Shift:
        shift = await self.db.get(Shift, shift_id)
        if not shift or (org_id is not None and shift.org_id != org_id):
            raise NotFoundException("Shift", shift_id, message="Shift not found")
        return shift

    async def get_shift_details(self, shift: Shift) -> Dict[str, Any]:
        timesheets = await self.db.execute(
            select(Timesheet).where(Timesheet.shift_id == shift.id).order_by(Timesheet.created_at)
        )
        materials = await self.db.execute(
            select(MaterialMovement)
            .where(MaterialMovement.shift_id == shift.id)
            .order_by(MaterialMovement.created_at)
        )
        usage = await self.db.execute(
            select(EquipmentUsage)
            .where(EquipmentUsage.shift_id == shift.id)
            .order_by(EquipmentUsage.created_at)
        )
        return {
            "shift": shift,
            "timesheets": list(timesheets.scalars().all()),
            "materials": list(materials.scalars().all()),
            "equipment_usage": list(usage.scalars().all()),
        }

    async def update_shift(
        self,
        org_id: uuid.UUID,
        shift_id: uuid.UUID,
        data: ShiftUpdate,
        user: User,
    ) -> Shift:
        shift = await self.get_shift(shift_id, org_id)
        updates = data.model_dump(exclude_unset=True)

        for field, value in updates.items():
            if value is None and field in ("type", "status"):
                continue
            setattr(shift, field, value)

        if updates.get("status") == ShiftStatus.APPROVED:
            shift.approved_by_id = user.id
            shift.approval_date = datetime.now(timezone.utc)

        await self.db.commit()
        await self.db.refresh(shift)
        return shift

    async def delete_shift(self, shift: Shift) -> None:
        """Delete a shift together with everything recorded on it."""
        for model in (Timesheet, MaterialMovement, EquipmentUsage):
            await self.db.execute(delete(model).where(model.shift_id == shift.id))
        await self.db.delete(shift)
        await self.db.commit()
        logger.info(f"Deleted shift {shift.id} and its records")

    # ===========================================
    # TIMESHEET OPERATIONS
    # ===========================================

    async def add_timesheet(self, shift: Shift, data: TimesheetCreate) -> Timesheet:
        timesheet = Timesheet(
            shift_id=shift.id,
            org_id=shift.org_id,
            worker_name=data.worker_name,
            worker_id=data.worker_id,
            role=data.role,
            hours_worked=data.hours_worked,
            rate_per_shift=(
                Decimal(str(data.rate_per_shift)) if data.rate_per_shift is not None else None
            ),
            total_pay=compute_total_pay(data.rate_per_shift),
            notes=data.notes,
        )
        self.db.add(timesheet)
        await self.db.commit()
        await self.db.refresh(timesheet)
        return timesheet

    async def list_timesheets(
        self,
        org_id: uuid.UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        worker_id: Optional[uuid.UUID] = None,
    ) -> List[Timesheet]:
        query = select(Timesheet).where(Timesheet.org_id == org_id)
        if start_date:
            query = query.where(Timesheet.created_at >= datetime.combine(start_date, time.min))
        if end_date:
            # Inclusive of the whole end day
            query = query.where(
                Timesheet.created_at < datetime.combine(end_date + timedelta(days=1), time.min)
            )
        if worker_id:
            query = query.where(Timesheet.worker_id == worker_id)

        result = await self.db.execute(query.order_by(Timesheet.created_at.desc()))
        return list(result.scalars().all())

    async def get_timesheet(self, timesheet_id: uuid.UUID) -> Timesheet:
        timesheet = await self.db.get(Timesheet, timesheet_id)
        if not timesheet:
            raise NotFoundException("Timesheet", timesheet_id, message="Timesheet not found")
        return timesheet

    async def update_timesheet(self, timesheet: Timesheet, data: TimesheetUpdate) -> Timesheet:
        updates = data.model_dump(exclude_unset=True)
        if "hours_worked" in updates and updates["hours_worked"] is not None:
            timesheet.hours_worked = updates["hours_worked"]
        if "rate_per_shift" in updates:
            rate = updates["rate_per_shift"]
            timesheet.rate_per_shift = Decimal(str(rate)) if rate is not None else None
            timesheet.total_pay = compute_total_pay(rate)
        if "notes" in updates:
            timesheet.notes = updates["notes"]

        await self.db.commit()
        await self.db.refresh(timesheet)
        return timesheet

    async def delete_timesheet(self, timesheet: Timesheet) -> None:
        await self.db.delete(timesheet)
        await self.db.commit()

    # ===========================================
    # MATERIAL / EQUIPMENT USAGE OPERATIONS
    # ===========================================

    async def add_material_movement(self, shift: Shift, data: MaterialMovementCreate) -> MaterialMovement:
        movement = MaterialMovement(
            shift_id=shift.id,
            org_id=shift.org_id,
            type=data.type,
            quantity=Decimal(str(data.quantity)),
            unit=data.unit or "tons",
            source=data.source,
            destination=data.destination,
            grade_estimate=data.grade_estimate,
            notes=data.notes,
        )
        self.db.add(movement)
        await self.db.commit()
        await self.db.refresh(movement)
        return movement

    async def add_equipment_usage(self, shift: Shift, data: EquipmentUsageCreate) -> EquipmentUsage:
        hours_used = compute_hours_used(data.hours_start, data.hours_end)

        if data.equipment_id:
            equipment = await self.db.get(Equipment, data.equipment_id)
            if not equipment or equipment.org_id != shift.org_id:
                raise NotFoundException("Equipment", data.equipment_id, message="Equipment not found")

        usage = EquipmentUsage(
            shift_id=shift.id,
            org_id=shift.org_id,
            equipment_id=data.equipment_id,
            equipment_name=data.equipment_name,
            hours_start=data.hours_start,
            hours_end=data.hours_end,
            hours_used=hours_used,
            fuel_consumed_liters=data.fuel_consumed_liters,
            operator_name=data.operator_name,
            notes=data.notes,
        )
        self.db.add(usage)
        await self.db.commit()
        await self.db.refresh(usage)
        return usage
