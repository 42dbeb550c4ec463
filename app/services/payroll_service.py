"""
EarthSafe API - Payroll Service

Wage payments to mine workers and payroll statistics.
"""

import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.payroll import Payroll, PayrollStatus
from app.models.user import User
from app.schemas.finance import PayrollCreate, PayrollUpdate
from app.utils.error_handling import NotFoundException

MONEY_FIELDS = ("amount", "hourly_rate", "deductions", "bonuses", "net_pay")
REQUIRED_FIELDS = ("employee_name", "payment_date", "amount", "currency", "payment_method",
                   "deductions", "bonuses", "net_pay", "status")


def compute_net_pay(amount, bonuses=0, deductions=0) -> Decimal:
    """Net pay = gross amount + bonuses - deductions."""
    net = Decimal(str(amount)) + Decimal(str(bonuses or 0)) - Decimal(str(deductions or 0))
    return net.quantize(Decimal("0.01"))


def _money(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


class PayrollService:
    """Service for payroll records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_payroll(self, org_id: uuid.UUID, data: PayrollCreate, user: User) -> Payroll:
        values = data.model_dump()
        if values["net_pay"] is None:
            values["net_pay"] = compute_net_pay(values["amount"], values["bonuses"], values["deductions"])
        for field in MONEY_FIELDS:
            values[field] = _money(values[field])

        record = Payroll(org_id=org_id, paid_by_id=user.id, **values)
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def list_payroll(self, org_id: uuid.UUID, employee_name: Optional[str] = None) -> List[Payroll]:
        query = select(Payroll).where(Payroll.org_id == org_id)
        if employee_name:
            query = query.where(Payroll.employee_name == employee_name)
        result = await self.db.execute(
            query.order_by(Payroll.payment_date.desc(), Payroll.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_payroll(self, org_id: uuid.UUID, payroll_id: uuid.UUID) -> Payroll:
        record = await self.db.get(Payroll, payroll_id)
        if not record or record.org_id != org_id:
            raise NotFoundException("Payroll", payroll_id, message="Payroll record not found")
        return record

    async def update_payroll(self, org_id: uuid.UUID, payroll_id: uuid.UUID, data: PayrollUpdate) -> Payroll:
        record = await self.get_payroll(org_id, payroll_id)
        updates = data.model_dump(exclude_unset=True)

        for field, value in updates.items():
            if value is None and field in REQUIRED_FIELDS:
                continue
            if field in MONEY_FIELDS:
                value = _money(value)
            setattr(record, field, value)

        # Keep net pay consistent when its inputs change and it was not set explicitly
        if updates.get("net_pay") is None and {"amount", "bonuses", "deductions"} & updates.keys():
            record.net_pay = compute_net_pay(record.amount, record.bonuses, record.deductions)

        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def delete_payroll(self, org_id: uuid.UUID, payroll_id: uuid.UUID) -> None:
        record = await self.get_payroll(org_id, payroll_id)
        await self.db.delete(record)
        await self.db.commit()

    async def get_stats(self, org_id: uuid.UUID) -> Dict[str, Any]:
        """Totals over paid records only, broken down by employee."""
        result = await self.db.execute(
            select(
                Payroll.employee_name,
                func.count(Payroll.id),
                func.coalesce(func.sum(Payroll.net_pay), 0),
            )
            .where(Payroll.org_id == org_id, Payroll.status == PayrollStatus.PAID)
            .group_by(Payroll.employee_name)
        )

        total_paid = Decimal("0")
        total_records = 0
        by_employee: Dict[str, Dict[str, Any]] = {}
        for name, count, total in result.all():
            total = Decimal(str(total))
            by_employee[name] = {"count": count, "total": float(total)}
            total_paid += total
            total_records += count

        return {
            "total_paid": float(total_paid),
            "total_records": total_records,
            "by_employee": by_employee,
        }
