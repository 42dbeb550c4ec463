"""
EarthSafe API - Demo Data Service

Resets "Star Mining Co." and fills it with a month of realistic operations
for product demos. Randomness is seeded, so two runs on the same day
produce the same figures.
"""

import logging
import random
import uuid
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Dict, List, Tuple

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.compliance import (
    ComplianceDocument,
    ComplianceDocumentType,
    Incident,
    SafetyChecklist,
)
from app.models.equipment import Equipment, EquipmentStatus, EquipmentType
from app.models.expense import Expense, ExpenseCategory, Receipt
from app.models.inventory import InventoryItem, InventoryItemType
from app.models.loan import CreditScore, Loan, LoanRepayment, LoanStatus, RepaymentStatus
from app.models.organization import (
    ADMIN_ROLES,
    Membership,
    MembershipStatus,
    Organization,
    OrganizationType,
    OrgRole,
)
from app.models.payroll import PaymentMethod, Payroll, PayrollStatus
from app.models.sales import SaleSource, SaleStatus, SalesTransaction
from app.models.shift import (
    EquipmentUsage,
    MaterialMovement,
    MaterialType,
    Shift,
    ShiftStatus,
    ShiftType,
    Timesheet,
)
from app.models.user import User
from app.services.inventory_service import compute_item_value
from app.utils.error_handling import NotFoundException

logger = logging.getLogger(__name__)

DEMO_ORG_NAME = "Star Mining Co."
DEMO_DAYS = 30
DEFAULT_SEED = 2024

FIRST_NAMES = [
    "Tinashe", "Kudakwashe", "Farai", "Tendai", "Nyasha", "Blessing", "Tatenda",
    "Simbarashe", "Chipo", "Rudo", "Tafadzwa", "Munyaradzi", "Tapiwa", "Fungai", "Rutendo",
]
SURNAMES = ["Moyo", "Ncube", "Dube", "Sibanda", "Ndlovu", "Maphosa", "Gumbo", "Chikovo", "Mutiza", "Marufu"]

# (role, monthly base pay)
CREW_ROLES = [("driller", 350), ("driller", 350), ("hauler", 300), ("hauler", 300),
              ("hauler", 300), ("general", 250), ("general", 250), ("general", 250)]

INVENTORY_ITEMS = [
    (InventoryItemType.EQUIPMENT, "Jaw Crusher", 1, "units", 12000),
    (InventoryItemType.EQUIPMENT, "Hammer Mill", 2, "units", 5000),
    (InventoryItemType.EQUIPMENT, "Diesel Generator", 1, "units", 3500),
    (InventoryItemType.CONSUMABLE, "Diesel Fuel", 500, "liters", 1.60),
    (InventoryItemType.CONSUMABLE, "Mercury (Retort)", 5, "kg", 80),
    (InventoryItemType.ORE, "Crushed Ore", 45, "tons", 30),
    (InventoryItemType.GOLD, "Gold Bullion", 120, "grams", 65),
]

EQUIPMENT_FLEET = [
    ("Jaw Crusher", EquipmentType.PROCESSING_EQUIPMENT, 12000),
    ("Hammer Mill", EquipmentType.PROCESSING_EQUIPMENT, 5000),
    ("Diesel Generator", EquipmentType.HEAVY_MACHINERY, 3500),
    ("Compressor", EquipmentType.HEAVY_MACHINERY, 4200),
    ("Toyota Hilux", EquipmentType.VEHICLES, 18000),
    ("Jackhammer Set", EquipmentType.TOOLS, 900),
]

# Tables cleared before reseeding, children before parents
ORG_SCOPED_MODELS = [
    LoanRepayment, Loan, CreditScore,
    Timesheet, MaterialMovement, EquipmentUsage, SafetyChecklist, SalesTransaction, Shift,
    Expense, Receipt, Payroll,
    ComplianceDocument, Incident,
    InventoryItem, Equipment,
]


def _money(value: float) -> Decimal:
    return Decimal(str(round(value, 2)))


class DemoDataService:
    """Seeds a demo organization for a given user."""

    def __init__(self, db: AsyncSession, seed: int = DEFAULT_SEED):
        self.db = db
        self.rng = random.Random(seed)

    async def _get_or_create_org(self, user: User) -> Organization:
        result = await self.db.execute(
            select(Organization).where(Organization.name == DEMO_ORG_NAME)
        )
        org = result.scalars().first()
        if not org:
            org = Organization(
                name=DEMO_ORG_NAME,
                type=OrganizationType.MINE,
                location="12 Speke Ave, Harare",
                country="Zimbabwe",
                commodity=["gold"],
                mining_license_number="ML-2024-001",
                contact_phone="+263 77 123 4567",
                created_by_id=user.id,
            )
            self.db.add(org)
            await self.db.flush()
            logger.info(f"Created demo organization {org.id}")

        result = await self.db.execute(
            select(Membership).where(Membership.user_id == user.id, Membership.org_id == org.id)
        )
        membership = result.scalar_one_or_none()
        if not membership:
            self.db.add(Membership(
                user_id=user.id,
                org_id=org.id,
                role=OrgRole.ADMIN,
                status=MembershipStatus.ACTIVE,
            ))
        else:
            if membership.role not in ADMIN_ROLES:
                membership.role = OrgRole.ADMIN
            membership.status = MembershipStatus.ACTIVE
        return org

    async def _clear_org_data(self, org_id: uuid.UUID) -> None:
        for model in ORG_SCOPED_MODELS:
            await self.db.execute(delete(model).where(model.org_id == org_id))

    def _crew(self) -> List[Tuple[str, str, int]]:
        return [
            (f"{self.rng.choice(FIRST_NAMES)} {self.rng.choice(SURNAMES)}", role, pay)
            for role, pay in CREW_ROLES
        ]

    async def _seed_operations(self, org_id: uuid.UUID, user: User, crew, today: date) -> Dict[str, int]:
        """Shifts with timesheets and material movements, plus periodic gold sales."""
        counts = {"shifts": 0, "timesheets": 0, "material_movements": 0, "sales": 0}
        unsold_grams = 0.0
        days_since_sale = 0

        for offset in range(DEMO_DAYS - 1, -1, -1):
            day = today - timedelta(days=offset)
            recent = offset < 3
            if self.rng.random() <= 0.15 and not recent:
                continue

            start = datetime.combine(day, time(6, 0), tzinfo=timezone.utc)
            shift = Shift(
                id=uuid.uuid4(),
                org_id=org_id,
                date=start,
                type=ShiftType.DAY,
                status=ShiftStatus.APPROVED,
                supervisor_id=user.id,
                created_by_id=user.id,
                approved_by_id=user.id,
                approval_date=start + timedelta(hours=13),
                start_time=start,
                end_time=start + timedelta(hours=12),
                notes="Routine operations. Equipment running smoothly.",
                weather_condition="Cloudy" if self.rng.random() > 0.8 else "Sunny",
            )
            self.db.add(shift)
            # No ORM relationships order the inserts, so the shift goes first
            await self.db.flush()
            counts["shifts"] += 1

            for name, role, _ in self.rng.sample(crew, self.rng.randint(5, 7)):
                self.db.add(Timesheet(
                    org_id=org_id,
                    shift_id=shift.id,
                    worker_name=name,
                    role=role,
                    hours_worked=12,
                    rate_per_shift=Decimal("10"),
                    total_pay=Decimal("10"),
                    notes="Full shift",
                ))
                counts["timesheets"] += 1

            self.db.add(MaterialMovement(
                org_id=org_id,
                shift_id=shift.id,
                type=MaterialType.ORE,
                quantity=Decimal(self.rng.randint(10, 60)),
                unit="tons",
                source="Shaft 1",
                destination="Crusher",
                grade_estimate=round(self.rng.uniform(2.0, 6.0), 2),
                notes="High grade ore",
            ))
            self.db.add(MaterialMovement(
                org_id=org_id,
                shift_id=shift.id,
                type=MaterialType.WASTE,
                quantity=Decimal(self.rng.randint(5, 25)),
                unit="tons",
                source="Shaft 1",
                destination="Dump",
                notes="Overburden removal",
            ))
            counts["material_movements"] += 2

            unsold_grams += self.rng.uniform(5, 20)
            days_since_sale += 1

            # Gold is sold to Fidelity roughly weekly, and always on the last day
            if days_since_sale >= 7 or offset == 0:
                price = self.rng.uniform(60, 70)
                grams = round(unsold_grams, 2)
                self.db.add(SalesTransaction(
                    org_id=org_id,
                    date=start + timedelta(hours=14),
                    source=SaleSource.FIDELITY,
                    reference_id=f"DEMO-{org_id.hex[:8]}-{day.isoformat()}",
                    mineral_type="gold",
                    grams=_money(grams),
                    price_per_gram=_money(price),
                    total_value=_money(grams * price),
                    currency="USD",
                    buyer_name="Fidelity Printers & Refiners",
                    status=SaleStatus.VERIFIED,
                    reconciled_with_shift_id=shift.id,
                ))
                counts["sales"] += 1
                unsold_grams = 0.0
                days_since_sale = 0

        return counts

    def _seed_finances(self, org_id: uuid.UUID, user: User, crew, today: date) -> Dict[str, int]:
        start = today - timedelta(days=DEMO_DAYS - 1)
        expenses = 0

        for week in range(0, DEMO_DAYS, 7):
            self.db.add(Expense(
                org_id=org_id,
                date=start + timedelta(days=week),
                category=ExpenseCategory.FUEL,
                description="Diesel for Generator (200L)",
                amount=Decimal("320"),
                currency="USD",
                supplier="Zuva Petroleum",
                entered_by_id=user.id,
            ))
            expenses += 1
            if self.rng.random() > 0.5:
                self.db.add(Expense(
                    org_id=org_id,
                    date=start + timedelta(days=week + self.rng.randint(0, 6)),
                    category=ExpenseCategory.MAINTENANCE,
                    description="Crusher Jaw Replacement",
                    amount=Decimal(self.rng.randint(50, 250)),
                    currency="USD",
                    supplier="Mine & Industrial Suppliers",
                    entered_by_id=user.id,
                ))
                expenses += 1

        for name, _, base_pay in crew:
            bonus = Decimal("50") if self.rng.random() > 0.8 else Decimal("0")
            deductions = Decimal("20")
            self.db.add(Payroll(
                org_id=org_id,
                employee_name=name,
                payment_date=today,
                amount=Decimal(base_pay),
                currency="USD",
                payment_method=self.rng.choice([PaymentMethod.CASH, PaymentMethod.MOBILE_MONEY]),
                pay_period_start=start,
                pay_period_end=today,
                hours_worked=180,
                hourly_rate=Decimal(str(round(base_pay / 180, 2))),
                deductions=deductions,
                bonuses=bonus,
                net_pay=Decimal(base_pay) + bonus - deductions,
                paid_by_id=user.id,
                status=PayrollStatus.PAID,
            ))

        return {"expenses": expenses, "payroll": len(crew)}

    def _seed_compliance(self, org_id: uuid.UUID, user: User, today: date) -> int:
        # (type, number, days until expiry); the local permit is left missing
        documents = [
            (ComplianceDocumentType.MINING_LICENSE, "ML-2024-001", 365),
            (ComplianceDocumentType.EIA_CERTIFICATE, "EMA-EIA-0457", 180),
            (ComplianceDocumentType.HEALTH_SAFETY_CERTIFICATION, "HSC-2211", 21),
            (ComplianceDocumentType.PROSPECTING_LICENSE, "PL-8831", -10),
        ]
        for doc_type, number, days in documents:
            self.db.add(ComplianceDocument(
                org_id=org_id,
                type=doc_type,
                number=number,
                issued_date=today - timedelta(days=365),
                expiry_date=today + timedelta(days=days),
                issuer="Ministry of Mines and Mining Development",
                notes="Demo document",
                uploaded_by_id=user.id,
            ))
        return len(documents)

    async def _seed_loans(self, org_id: uuid.UUID, user: User, today: date) -> Dict[str, int]:
        loan = Loan(
            id=uuid.uuid4(),
            org_id=org_id,
            applicant_id=user.id,
            amount=Decimal("15000"),
            purpose="Excavator Purchase",
            term=24,
            collateral="Equipment (Crusher)",
            institution="EarthSafe Finance",
            documents=[],
            notes="Demo active loan",
            status=LoanStatus.REPAYING,
            interest_rate=8.0,
            monthly_payment=Decimal("750"),
            approved_at=datetime.now(timezone.utc) - timedelta(days=120),
        )
        self.db.add(loan)
        await self.db.flush()

        balance = Decimal("15000")
        repayments = 0
        for month in range(3, 0, -1):
            principal = Decimal("650")
            balance -= principal
            self.db.add(LoanRepayment(
                org_id=org_id,
                loan_id=loan.id,
                amount=Decimal("750"),
                principal_paid=principal,
                interest_paid=Decimal("100"),
                remaining_balance=balance,
                payment_date=today - timedelta(days=30 * month - 5),
                payment_method="mobile_money",
                transaction_ref=f"RP-{loan.id.hex[:6]}-{4 - month}",
                status=RepaymentStatus.COMPLETED,
                recorded_by_id=user.id,
            ))
            repayments += 1

        return {"loans": 1, "repayments": repayments}

    def _seed_assets(self, org_id: uuid.UUID, today: date) -> Dict[str, int]:
        for item_type, name, quantity, unit, unit_value in INVENTORY_ITEMS:
            self.db.add(InventoryItem(
                org_id=org_id,
                item_type=item_type,
                name=name,
                quantity=Decimal(str(quantity)),
                unit=unit,
                value_per_unit=Decimal(str(unit_value)),
                total_value=compute_item_value(quantity, unit_value),
                location="Site A",
                last_updated=datetime.now(timezone.utc),
            ))

        for name, equipment_type, price in EQUIPMENT_FLEET:
            self.db.add(Equipment(
                org_id=org_id,
                name=name,
                type=equipment_type,
                status=EquipmentStatus.MAINTENANCE if self.rng.random() > 0.85 else EquipmentStatus.OPERATIONAL,
                purchase_date=today - timedelta(days=self.rng.randint(200, 900)),
                purchase_price=Decimal(price),
                current_value=_money(price * self.rng.uniform(0.55, 0.9)),
                location="Site A",
                last_maintenance_date=today - timedelta(days=self.rng.randint(5, 60)),
                next_maintenance_date=today + timedelta(days=self.rng.randint(10, 90)),
            ))

        return {"inventory": len(INVENTORY_ITEMS), "equipment": len(EQUIPMENT_FLEET)}

    async def seed(self, email: str) -> Dict[str, object]:
        """Reset the demo organization and return per-entity counts."""
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundException("User", message="User not found")

        logger.info(f"Seeding demo data for {user.email}")

        org = await self._get_or_create_org(user)
        await self._clear_org_data(org.id)

        today = date.today()
        crew = self._crew()

        counts: Dict[str, int] = {}
        counts.update(await self._seed_operations(org.id, user, crew, today))
        counts.update(self._seed_finances(org.id, user, crew, today))
        counts["compliance_documents"] = self._seed_compliance(org.id, user, today)
        counts.update(await self._seed_loans(org.id, user, today))
        counts.update(self._seed_assets(org.id, today))

        await self.db.commit()
        logger.info(f"Demo data seeded for {DEMO_ORG_NAME}: {counts}")

        return {
            "message": f"Demo data seeded successfully for {DEMO_ORG_NAME}",
            "org_id": org.id,
            "counts": counts,
        }
