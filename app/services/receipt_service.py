"""
EarthSafe API - Receipt Service
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.expense import Receipt, ReceiptStatus
from app.models.user import User
from app.schemas.finance import ReceiptCreate, ReceiptUpdate
from app.services.file_storage_service import FileCategory, FileStorageService
from app.utils.error_handling import NotFoundException


class ReceiptService:
    """Service for scanned receipts."""

    def __init__(self, db: AsyncSession, storage: Optional[FileStorageService] = None):
        self.db = db
        self.storage = storage

    def _storage(self) -> FileStorageService:
        if self.storage is None:
            self.storage = FileStorageService()
        return self.storage

    async def create_receipt(self, org_id: uuid.UUID, data: ReceiptCreate, user: User) -> Receipt:
        values = data.model_dump()
        if values["total"] is not None:
            values["total"] = Decimal(str(values["total"]))
        # Extraction already ran on the device, so the receipt arrives processed
        receipt = Receipt(
            org_id=org_id,
            uploaded_by_id=user.id,
            status=ReceiptStatus.PROCESSED,
            **values,
        )
        self.db.add(receipt)
        await self.db.commit()
        await self.db.refresh(receipt)
        return receipt

    async def upload_receipt(
        self,
        org_id: uuid.UUID,
        file: UploadFile,
        user: User,
        receipt_date: Optional[date] = None,
        vendor: Optional[str] = None,
        total: Optional[float] = None,
        currency: str = "USD",
        extracted_text: Optional[str] = None,
        confidence_score: Optional[float] = None,
    ) -> Receipt:
        """Store an uploaded receipt image and create its record."""
        content = await self._storage().read_upload(file)
        stored = await self._storage().upload_file(
            org_id=org_id,
            file_content=content,
            filename=file.filename or "receipt",
            content_type=file.content_type,
            category=FileCategory.RECEIPT,
        )
        data = ReceiptCreate(
            date=receipt_date or date.today(),
            file_url=stored["url"],
            vendor=vendor,
            total=total,
            currency=currency,
            extracted_text=extracted_text,
            confidence_score=confidence_score,
        )
        return await self.create_receipt(org_id, data, user)

    async def list_receipts(self, org_id: uuid.UUID) -> List[Receipt]:
        result = await self.db.execute(
            select(Receipt)
            .where(Receipt.org_id == org_id)
            .order_by(Receipt.date.desc(), Receipt.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_receipt(self, org_id: uuid.UUID, receipt_id: uuid.UUID) -> Receipt:
        receipt = await self.db.get(Receipt, receipt_id)
        if not receipt or receipt.org_id != org_id:
            raise NotFoundException("Receipt", receipt_id, message="Receipt not found")
        return receipt

    async def update_receipt(self, org_id: uuid.UUID, receipt_id: uuid.UUID, data: ReceiptUpdate) -> Receipt:
        receipt = await self.get_receipt(org_id, receipt_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("date", "currency", "status"):
                continue
            if field == "total" and value is not None:
                value = Decimal(str(value))
            setattr(receipt, field, value)
        await self.db.commit()
        await self.db.refresh(receipt)
        return receipt

    async def delete_receipt(self, org_id: uuid.UUID, receipt_id: uuid.UUID) -> None:
        receipt = await self.get_receipt(org_id, receipt_id)
        file_id = self._storage().file_id_from_url(receipt.file_url)

        await self.db.delete(receipt)
        await self.db.commit()

        if file_id:
            self._storage().delete_file(file_id)
