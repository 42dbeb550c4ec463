"""
EarthSafe API - SQLAlchemy Models Package

This package contains all database models for the application.
"""

from app.models.base import BaseModel, TimestampMixin, OrgScopedMixin
from app.models.user import User, UserRole, SubscriptionTier
from app.models.organization import (
    Organization,
    OrganizationType,
    OrganizationStatus,
    Membership,
    OrgRole,
    MembershipStatus,
)
from app.models.shift import (
    Shift,
    ShiftType,
    ShiftStatus,
    Timesheet,
    MaterialMovement,
    MaterialType,
    EquipmentUsage,
)
from app.models.equipment import Equipment, EquipmentType, EquipmentStatus
from app.models.expense import Expense, ExpenseCategory, Receipt, ReceiptStatus
from app.models.payroll import Payroll, PayrollStatus, PaymentMethod
from app.models.sales import SalesTransaction, SaleSource, SaleStatus
from app.models.loan import Loan, LoanStatus, LoanRepayment, RepaymentStatus, CreditScore
from app.models.compliance import (
    ComplianceDocument,
    ComplianceDocumentType,
    REQUIRED_DOCUMENT_TYPES,
    Incident,
    IncidentType,
    IncidentSeverity,
    IncidentStatus,
    SafetyChecklist,
    ChecklistStatus,
)
from app.models.inventory import InventoryItem, InventoryItemType

__all__ = [
    # Base
    "BaseModel",
    "TimestampMixin",
    "OrgScopedMixin",
    # Accounts & tenancy
    "User",
    "UserRole",
    "SubscriptionTier",
    "Organization",
    "OrganizationType",
    "OrganizationStatus",
    "Membership",
    "OrgRole",
    "MembershipStatus",
    # Production
    "Shift",
    "ShiftType",
    "ShiftStatus",
    "Timesheet",
    "MaterialMovement",
    "MaterialType",
    "EquipmentUsage",
    "Equipment",
    "EquipmentType",
    "EquipmentStatus",
    # Finance
    "Expense",
    "ExpenseCategory",
    "Receipt",
    "ReceiptStatus",
    "Payroll",
    "PayrollStatus",
    "PaymentMethod",
    "SalesTransaction",
    "SaleSource",
    "SaleStatus",
    # Lending
    "Loan",
    "LoanStatus",
    "LoanRepayment",
    "RepaymentStatus",
    "CreditScore",
    # Compliance
    "ComplianceDocument",
    "ComplianceDocumentType",
    "REQUIRED_DOCUMENT_TYPES",
    "Incident",
    "IncidentType",
    "IncidentSeverity",
    "IncidentStatus",
    "SafetyChecklist",
    "ChecklistStatus",
    # Inventory
    "InventoryItem",
    "InventoryItemType",
]
