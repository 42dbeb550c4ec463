"""
EarthSafe API - Sales Service

Business logic for mineral sales. The buyer name determines the sale
source, which lenders use to weigh how verifiable the revenue is.
"""

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.sales import SaleSource, SaleStatus, SalesTransaction
from app.schemas.sales import SaleCreate, SaleUpdate
from app.services.shift_service import ShiftService
from app.utils.error_handling import ConflictException, NotFoundException

logger = logging.getLogger(__name__)

RECENT_SALES_LIMIT = 50


def classify_sale_source(buyer_name: Optional[str]) -> SaleSource:
    """Fidelity Printers & Refiners sales are verifiable; private buyers are not."""
    name = (buyer_name or "").lower()
    if "fidelity" in name:
        return SaleSource.FIDELITY
    if "private" in name:
        return SaleSource.PRIVATE
    return SaleSource.OTHER


def compute_total_value(quantity, price_per_unit) -> Decimal:
    total = Decimal(str(quantity)) * Decimal(str(price_per_unit))
    return total.quantize(Decimal("0.01"))


class SalesService:
    """Service for sales transactions."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _reference_exists(self, reference_id: str) -> bool:
        result = await self.db.execute(
            select(SalesTransaction.id).where(SalesTransaction.reference_id == reference_id)
        )
        return result.first() is not None

    async def create_sale(self, org_id: uuid.UUID, data: SaleCreate) -> SalesTransaction:
        reference_id = data.receipt_number.strip()
        if await self._reference_exists(reference_id):
            raise ConflictException(
                f"A sale with receipt number '{reference_id}' already exists",
                details={"reference_id": reference_id},
            )

        sale = SalesTransaction(
            org_id=org_id,
            buyer_name=data.buyer_name,
            grams=Decimal(str(data.quantity)),
            price_per_gram=Decimal(str(data.price_per_unit)),
            total_value=compute_total_value(data.quantity, data.price_per_unit),
            currency="USD",
            status=SaleStatus.PENDING,
            date=data.date or datetime.now(timezone.utc),
            reference_id=reference_id,
            mineral_type="gold",
            source=classify_sale_source(data.buyer_name),
            receipt_url=data.receipt_url,
            notes=data.notes,
        )
        self.db.add(sale)
        await self.db.commit()
        await self.db.refresh(sale)

        logger.info(f"Recorded sale {reference_id} for org {org_id}: {sale.total_value} USD")
        return sale

    async def list_sales(self, org_id: uuid.UUID, limit: int = RECENT_SALES_LIMIT) -> List[SalesTransaction]:
        result = await self.db.execute(
            select(SalesTransaction)
            .where(SalesTransaction.org_id == org_id)
            .order_by(SalesTransaction.date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_sale(self, org_id: uuid.UUID, sale_id: uuid.UUID) -> SalesTransaction:
        sale = await self.db.get(SalesTransaction, sale_id)
        if not sale or sale.org_id != org_id:
            raise NotFoundException("Sale", sale_id, message="Sale not found")
        return sale

    async def update_sale(self, org_id: uuid.UUID, sale_id: uuid.UUID, data: SaleUpdate) -> SalesTransaction:
        sale = await self.get_sale(org_id, sale_id)
        updates = data.model_dump(exclude_unset=True)

        if updates.get("buyer_name"):
            sale.buyer_name = updates["buyer_name"]
            sale.source = classify_sale_source(sale.buyer_name)
        if updates.get("quantity") is not None:
            sale.grams = Decimal(str(updates["quantity"]))
        if updates.get("price_per_unit") is not None:
            sale.price_per_gram = Decimal(str(updates["price_per_unit"]))
        if "quantity" in updates or "price_per_unit" in updates:
            sale.total_value = compute_total_value(sale.grams, sale.price_per_gram or 0)
        if updates.get("status") is not None:
            sale.status = updates["status"]
        if "reconciled_with_shift_id" in updates:
            shift_id = updates["reconciled_with_shift_id"]
            if shift_id is not None:
                await ShiftService(self.db).get_shift(shift_id, org_id)
            sale.reconciled_with_shift_id = shift_id
        if "notes" in updates:
            sale.notes = updates["notes"]

        await self.db.commit()
        await self.db.refresh(sale)
        return sale

    async def delete_sale(self, org_id: uuid.UUID, sale_id: uuid.UUID) -> None:
        sale = await self.get_sale(org_id, sale_id)
        await self.db.delete(sale)
        await self.db.commit()
