"""
EarthSafe API - Equipment Service
"""

import uuid
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.equipment import Equipment
from app.schemas.equipment import EquipmentCreate, EquipmentUpdate
from app.utils.error_handling import NotFoundException

MONEY_FIELDS = ("purchase_price", "current_value")


def _to_decimal(value: Optional[float]) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


class EquipmentService:
    """Service for the equipment register."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_equipment(self, org_id: uuid.UUID, data: EquipmentCreate) -> Equipment:
        values = data.model_dump()
        # A newly registered machine is worth what was paid for it
        if values.get("current_value") is None:
            values["current_value"] = values.get("purchase_price")
        for field in MONEY_FIELDS:
            values[field] = _to_decimal(values[field])

        equipment = Equipment(org_id=org_id, **values)
        self.db.add(equipment)
        await self.db.commit()
        await self.db.refresh(equipment)
        return equipment

    async def list_equipment(self, org_id: uuid.UUID) -> List[Equipment]:
        result = await self.db.execute(
            select(Equipment).where(Equipment.org_id == org_id).order_by(Equipment.name)
        )
        return list(result.scalars().all())

    async def get_equipment(self, org_id: uuid.UUID, equipment_id: uuid.UUID) -> Equipment:
        equipment = await self.db.get(Equipment, equipment_id)
        if not equipment or equipment.org_id != org_id:
            raise NotFoundException("Equipment", equipment_id, message="Equipment not found")
        return equipment

    async def update_equipment(
        self,
        org_id: uuid.UUID,
        equipment_id: uuid.UUID,
        data: EquipmentUpdate,
    ) -> Equipment:
        equipment = await self.get_equipment(org_id, equipment_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("name", "type", "status"):
                continue
            if field in MONEY_FIELDS:
                value = _to_decimal(value)
            setattr(equipment, field, value)
        await self.db.commit()
        await self.db.refresh(equipment)
        return equipment

    async def delete_equipment(self, org_id: uuid.UUID, equipment_id: uuid.UUID) -> None:
        equipment = await self.get_equipment(org_id, equipment_id)
        await self.db.delete(equipment)
        await self.db.commit()
