"""
EarthSafe API - Schemas Package

Pydantic schemas for request/response validation.
"""

from app.schemas.auth import (
    UserRegister,
    UserLogin,
    RefreshTokenRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    ProfileUpdate,
    UserResponse,
    TokenResponse,
    AuthResponse,
    MessageResponse,
)
from app.schemas.organization import (
    OrganizationCreate,
    OrganizationUpdate,
    OrganizationResponse,
    MyOrganizationResponse,
    MemberAdd,
    MemberResponse,
)
from app.schemas.shift import (
    ShiftCreate,
    ShiftUpdate,
    ShiftResponse,
    ShiftDetailResponse,
    TimesheetCreate,
    TimesheetUpdate,
    TimesheetResponse,
    MaterialMovementCreate,
    MaterialMovementResponse,
    EquipmentUsageCreate,
    EquipmentUsageResponse,
)
from app.schemas.equipment import (
    EquipmentCreate,
    EquipmentUpdate,
    EquipmentResponse,
    EquipmentReadinessResponse,
)
from app.schemas.finance import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    ExpenseStatsResponse,
    ReceiptCreate,
    ReceiptUpdate,
    ReceiptResponse,
    PayrollCreate,
    PayrollUpdate,
    PayrollResponse,
    PayrollStatsResponse,
    FinancialDashboardResponse,
)
from app.schemas.sales import SaleCreate, SaleUpdate, SaleResponse
from app.schemas.loan import (
    LoanCreate,
    LoanResponse,
    LoanReadinessResponse,
    CreditFactor,
    CreditScoreResponse,
    NoCreditScoreResponse,
    RepaymentCreate,
    RepaymentUpdate,
    RepaymentResponse,
    RepaymentSummaryResponse,
)
from app.schemas.compliance import (
    ComplianceDocumentResponse,
    ComplianceSummaryResponse,
    IncidentCreate,
    IncidentUpdate,
    IncidentResponse,
    ChecklistItem,
    SafetyChecklistCreate,
    SafetyChecklistResponse,
)
from app.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemUpdate,
    InventoryItemResponse,
    InventoryStatsResponse,
)
from app.schemas.demo import DemoSeedRequest, DemoSeedResponse
