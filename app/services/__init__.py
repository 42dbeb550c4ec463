"""
EarthSafe API - Services Package

Business logic services.
"""

from app.services.auth_service import AuthService
from app.services.organization_service import OrganizationService
from app.services.shift_service import ShiftService
from app.services.equipment_service import EquipmentService
from app.services.expense_service import ExpenseService
from app.services.receipt_service import ReceiptService
from app.services.payroll_service import PayrollService
from app.services.sales_service import SalesService
from app.services.loan_service import LoanService
from app.services.compliance_service import ComplianceService
from app.services.inventory_service import InventoryService
from app.services.dashboard_service import DashboardService
from app.services.demo_data_service import DemoDataService
from app.services.file_storage_service import FileStorageService, FileCategory

# Outbound client used by scripts and the mobile-facing integration tests
from app.services.api_client import EarthSafeClient

__all__ = [
    "AuthService",
    "OrganizationService",
    "ShiftService",
    "EquipmentService",
    "ExpenseService",
    "ReceiptService",
    "PayrollService",
    "SalesService",
    "LoanService",
    "ComplianceService",
    "InventoryService",
    "DashboardService",
    "DemoDataService",
    "FileStorageService",
    "FileCategory",
    "EarthSafeClient",
]
