"""
EarthSafe API - Inventory Service

Business logic for stock held at the mine. Each item's total value is kept
equal to quantity * value_per_unit on every write.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.inventory import InventoryItem
from app.schemas.inventory import InventoryItemCreate, InventoryItemUpdate
from app.utils.error_handling import NotFoundException


def compute_item_value(quantity, value_per_unit) -> Decimal:
    return (Decimal(str(quantity)) * Decimal(str(value_per_unit))).quantize(Decimal("0.01"))


class InventoryService:
    """Service for inventory management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_item(self, org_id: uuid.UUID, data: InventoryItemCreate) -> InventoryItem:
        """Create a new inventory item."""
        item = InventoryItem(
            org_id=org_id,
            item_type=data.item_type,
            name=data.name,
            quantity=Decimal(str(data.quantity)),
            unit=data.unit,
            value_per_unit=Decimal(str(data.value_per_unit)),
            total_value=compute_item_value(data.quantity, data.value_per_unit),
            location=data.location,
            notes=data.notes,
            last_updated=datetime.now(timezone.utc),
        )
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def list_items(self, org_id: uuid.UUID) -> List[InventoryItem]:
        result = await self.db.execute(
            select(InventoryItem).where(InventoryItem.org_id == org_id)
        )
        # Native enum ordering differs between backends, so sort by the value
        return sorted(result.scalars().all(), key=lambda item: (item.item_type.value, item.name))

    async def get_item(self, org_id: uuid.UUID, item_id: uuid.UUID) -> InventoryItem:
        """Get an inventory item by ID."""
        item = await self.db.get(InventoryItem, item_id)
        if not item or item.org_id != org_id:
            raise NotFoundException("InventoryItem", item_id, message="Inventory item not found")
        return item

    async def update_item(
        self,
        org_id: uuid.UUID,
        item_id: uuid.UUID,
        data: InventoryItemUpdate,
    ) -> InventoryItem:
        item = await self.get_item(org_id, item_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("item_type", "name", "quantity", "unit", "value_per_unit"):
                continue
            if field in ("quantity", "value_per_unit"):
                value = Decimal(str(value))
            setattr(item, field, value)

        item.total_value = compute_item_value(item.quantity, item.value_per_unit)
        item.last_updated = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def delete_item(self, org_id: uuid.UUID, item_id: uuid.UUID) -> None:
        item = await self.get_item(org_id, item_id)
        await self.db.delete(item)
        await self.db.commit()

    async def get_stats(self, org_id: uuid.UUID) -> Dict[str, Any]:
        """Item count and stock value, overall and per item type."""
        items = await self.list_items(org_id)

        total_value = Decimal("0")
        by_type: Dict[str, Dict[str, Any]] = {}
        for item in items:
            value = Decimal(str(item.total_value))
            bucket = by_type.setdefault(item.item_type.value, {"count": 0, "value": Decimal("0")})
            bucket["count"] += 1
            bucket["value"] += value
            total_value += value

        return {
            "total_items": len(items),
            "total_value": float(total_value),
            "by_type": {
                item_type: {"count": bucket["count"], "value": float(bucket["value"])}
                for item_type, bucket in by_type.items()
            },
        }
