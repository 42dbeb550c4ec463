"""
EarthSafe API - Expense Service

Business logic for operating expenses and their summary statistics.
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.expense import Expense, ExpenseCategory
from app.models.user import User
from app.schemas.finance import ExpenseCreate, ExpenseUpdate
from app.utils.error_handling import NotFoundException


class ExpenseService:
    """Service for expense tracking."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_expense(self, org_id: uuid.UUID, data: ExpenseCreate, user: User) -> Expense:
        values = data.model_dump()
        values["amount"] = Decimal(str(values["amount"]))
        expense = Expense(org_id=org_id, entered_by_id=user.id, **values)
        self.db.add(expense)
        await self.db.commit()
        await self.db.refresh(expense)
        return expense

    async def list_expenses(
        self,
        org_id: uuid.UUID,
        category: Optional[ExpenseCategory] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Expense]:
        query = select(Expense).where(Expense.org_id == org_id)
        if category:
            query = query.where(Expense.category == category)
        if start_date:
            query = query.where(Expense.date >= start_date)
        if end_date:
            query = query.where(Expense.date <= end_date)

        result = await self.db.execute(query.order_by(Expense.date.desc(), Expense.created_at.desc()))
        return list(result.scalars().all())

    async def get_expense(self, org_id: uuid.UUID, expense_id: uuid.UUID) -> Expense:
        expense = await self.db.get(Expense, expense_id)
        if not expense or expense.org_id != org_id:
            raise NotFoundException("Expense", expense_id, message="Expense not found")
        return expense

    async def update_expense(self, org_id: uuid.UUID, expense_id: uuid.UUID, data: ExpenseUpdate) -> Expense:
        expense = await self.get_expense(org_id, expense_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("date", "category", "description", "amount", "currency"):
                continue
            if field == "amount" and value is not None:
                value = Decimal(str(value))
            setattr(expense, field, value)
        await self.db.commit()
        await self.db.refresh(expense)
        return expense

    async def delete_expense(self, org_id: uuid.UUID, expense_id: uuid.UUID) -> None:
        expense = await self.get_expense(org_id, expense_id)
        await self.db.delete(expense)
        await self.db.commit()

    async def get_stats(self, org_id: uuid.UUID) -> Dict[str, Any]:
        """Total spend, record count and spend per category."""
        result = await self.db.execute(
            select(
                Expense.category,
                func.count(Expense.id),
                func.coalesce(func.sum(Expense.amount), 0),
            )
            .where(Expense.org_id == org_id)
            .group_by(Expense.category)
        )

        total = Decimal("0")
        count = 0
        by_category: Dict[str, float] = {}
        for category, category_count, category_total in result.all():
            category_total = Decimal(str(category_total))
            by_category[category.value] = float(category_total)
            total += category_total
            count += category_count

        return {"total": float(total), "count": count, "by_category": by_category}
