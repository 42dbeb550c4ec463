"""Initial EarthSafe schema

Revision ID: 20260301_0900_initial_schema
Revises:
Create Date: 2026-03-01 09:00:00.000000

Creates every table:
- users, organizations, memberships
- shifts, timesheets, material_movements, equipment, equipment_usage
- expenses, receipts, payroll, sales_transactions
- loans, loan_repayments, credit_scores
- compliance_documents, incidents, safety_checklists
- inventory_items

Enum columns store the member NAME (e.g. 'MINING_LICENSE').
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '20260301_0900_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _id():
    return sa.Column('id', sa.Uuid(), primary_key=True)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _org_id():
    return sa.Column(
        'org_id', sa.Uuid(),
        sa.ForeignKey('organizations.id', ondelete='CASCADE'),
        nullable=False, index=True,
    )


def _user_fk(name, nullable=True, ondelete='SET NULL', index=False):
    return sa.Column(
        name, sa.Uuid(),
        sa.ForeignKey('users.id', ondelete=ondelete),
        nullable=nullable, index=index,
    )


def _money(name, nullable=True, **kwargs):
    return sa.Column(name, sa.Numeric(precision=15, scale=2), nullable=nullable, **kwargs)


def upgrade() -> None:
    """Create all tables."""

    # ===========================================
    # USERS & ORGANIZATIONS
    # ===========================================
    op.create_table(
        'users',
        _id(),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('phone_number', sa.String(30), nullable=True),
        sa.Column(
            'role',
            sa.Enum('MINER', 'BUYER', 'COOPERATIVE', 'GOVERNMENT', 'FINANCIAL_INSTITUTION', 'ADMIN',
                    name='userrole'),
            nullable=False,
        ),
        sa.Column('subscription_tier', sa.Enum('FREE', 'PRO', 'PREMIUM', name='subscriptiontier'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('password_version', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'organizations',
        _id(),
        sa.Column('name', sa.String(255), nullable=False, index=True),
        sa.Column('type', sa.Enum('MINE', 'COOPERATIVE', 'BUYER', 'PARTNER', name='organizationtype'), nullable=False),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('country', sa.String(100), nullable=False),
        sa.Column('commodity', sa.JSON(), nullable=False),
        sa.Column('mining_license_number', sa.String(100), nullable=True),
        sa.Column('contact_email', sa.String(255), nullable=True),
        sa.Column('contact_phone', sa.String(30), nullable=True),
        sa.Column('status', sa.Enum('ACTIVE', 'SUSPENDED', 'PENDING', name='organizationstatus'), nullable=False),
        _user_fk('created_by_id'),
        *_timestamps(),
    )

    op.create_table(
        'memberships',
        _id(),
        _user_fk('user_id', nullable=False, ondelete='CASCADE', index=True),
        _org_id(),
        sa.Column(
            'role',
            sa.Enum('OWNER', 'ADMIN', 'MINER', 'VIEWER', 'SUPERVISOR', name='orgrole'),
            nullable=False,
        ),
        sa.Column('status', sa.Enum('ACTIVE', 'INVITED', 'DISABLED', name='membershipstatus'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'org_id', name='uq_memberships_user_org'),
    )

    # ===========================================
    # PRODUCTION
    # ===========================================
    op.create_table(
        'shifts',
        _id(),
        _org_id(),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column('type', sa.Enum('DAY', 'NIGHT', 'OTHER', name='shifttype'), nullable=False),
        sa.Column(
            'status',
            sa.Enum('OPEN', 'SUBMITTED', 'APPROVED', 'REJECTED', name='shiftstatus'),
            nullable=False,
        ),
        sa.Column('supervisor_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('created_by_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('weather_condition', sa.String(50), nullable=True),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('approved_by_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('approval_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'timesheets',
        _id(),
        _org_id(),
        sa.Column('shift_id', sa.Uuid(), sa.ForeignKey('shifts.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('worker_name', sa.String(200), nullable=False),
        _user_fk('worker_id', index=True),
        sa.Column('role', sa.String(50), nullable=False),
        sa.Column('hours_worked', sa.Float(), nullable=False),
        _money('rate_per_shift'),
        _money('total_pay'),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'material_movements',
        _id(),
        _org_id(),
        sa.Column('shift_id', sa.Uuid(), sa.ForeignKey('shifts.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column(
            'type',
            sa.Enum('ORE', 'WASTE', 'TAILINGS', 'CONCENTRATE', 'WATER', name='materialtype'),
            nullable=False,
        ),
        sa.Column('quantity', sa.Numeric(precision=15, scale=3), nullable=False),
        sa.Column('unit', sa.String(20), nullable=False),
        sa.Column('source', sa.String(200), nullable=False),
        sa.Column('destination', sa.String(200), nullable=False),
        sa.Column('grade_estimate', sa.Float(), nullable=True, comment='Estimated grade in g/t'),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'equipment',
        _id(),
        _org_id(),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column(
            'type',
            sa.Enum('HEAVY_MACHINERY', 'TOOLS', 'VEHICLES', 'PROCESSING_EQUIPMENT', name='equipmenttype'),
            nullable=False,
        ),
        sa.Column(
            'status',
            sa.Enum('OPERATIONAL', 'MAINTENANCE', 'BROKEN', 'RETIRED', name='equipmentstatus'),
            nullable=False,
        ),
        sa.Column('serial_number', sa.String(100), nullable=True),
        sa.Column('purchase_date', sa.Date(), nullable=True),
        _money('purchase_price'),
        _money('current_value'),
        sa.Column('location', sa.String(200), nullable=True),
        sa.Column('last_maintenance_date', sa.Date(), nullable=True),
        sa.Column('next_maintenance_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'equipment_usage',
        _id(),
        _org_id(),
        sa.Column('shift_id', sa.Uuid(), sa.ForeignKey('shifts.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('equipment_id', sa.Uuid(), sa.ForeignKey('equipment.id', ondelete='SET NULL'), nullable=True),
        sa.Column('equipment_name', sa.String(200), nullable=False),
        sa.Column('hours_start', sa.Float(), nullable=False),
        sa.Column('hours_end', sa.Float(), nullable=False),
        sa.Column('hours_used', sa.Float(), nullable=False),
        sa.Column('fuel_consumed_liters', sa.Float(), nullable=True),
        sa.Column('operator_name', sa.String(200), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )

    # ===========================================
    # FINANCE
    # ===========================================
    op.create_table(
        'expenses',
        _id(),
        _org_id(),
        sa.Column('date', sa.Date(), nullable=False, index=True),
        sa.Column(
            'category',
            sa.Enum('FUEL', 'LABOR', 'EQUIPMENT', 'MAINTENANCE', 'CONSUMABLES', 'TRANSPORT', 'OTHER',
                    name='expensecategory'),
            nullable=False,
        ),
        sa.Column('description', sa.String(500), nullable=False),
        _money('amount', nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('supplier', sa.String(200), nullable=True),
        sa.Column('receipt_url', sa.String(500), nullable=True),
        _user_fk('entered_by_id'),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'receipts',
        _id(),
        _org_id(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('file_url', sa.String(500), nullable=False),
        sa.Column('vendor', sa.String(200), nullable=True),
        _money('total'),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('extracted_text', sa.Text(), nullable=True),
        sa.Column('confidence_score', sa.Float(), nullable=True),
        sa.Column('status', sa.Enum('PENDING', 'PROCESSED', 'FAILED', name='receiptstatus'), nullable=False),
        _user_fk('uploaded_by_id'),
        *_timestamps(),
    )

    op.create_table(
        'payroll',
        _id(),
        _org_id(),
        sa.Column('employee_name', sa.String(200), nullable=False, index=True),
        sa.Column('employee_id', sa.String(100), nullable=True),
        sa.Column('payment_date', sa.Date(), nullable=False, index=True),
        _money('amount', nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column(
            'payment_method',
            sa.Enum('CASH', 'MOBILE_MONEY', 'BANK_TRANSFER', name='paymentmethod'),
            nullable=False,
        ),
        sa.Column('pay_period_start', sa.Date(), nullable=True),
        sa.Column('pay_period_end', sa.Date(), nullable=True),
        sa.Column('hours_worked', sa.Float(), nullable=True),
        _money('hourly_rate'),
        _money('deductions', nullable=False),
        _money('bonuses', nullable=False),
        _money('net_pay', nullable=False, comment='amount + bonuses - deductions unless given explicitly'),
        sa.Column('receipt_url', sa.String(500), nullable=True),
        sa.Column('transaction_ref', sa.String(100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        _user_fk('paid_by_id'),
        sa.Column('status', sa.Enum('PENDING', 'PAID', 'CANCELLED', name='payrollstatus'), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'sales_transactions',
        _id(),
        _org_id(),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column('source', sa.Enum('FIDELITY', 'PRIVATE', 'OTHER', name='salesource'), nullable=False),
        sa.Column('reference_id', sa.String(100), nullable=False, unique=True),
        sa.Column('mineral_type', sa.String(50), nullable=False),
        sa.Column('grams', sa.Numeric(precision=15, scale=3), nullable=False),
        _money('price_per_gram'),
        _money('total_value', nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('buyer_name', sa.String(200), nullable=False),
        sa.Column('receipt_url', sa.String(500), nullable=True),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'VERIFIED', 'RECONCILED', 'FLAGGED', name='salestatus'),
            nullable=False,
        ),
        sa.Column(
            'reconciled_with_shift_id', sa.Uuid(),
            sa.ForeignKey('shifts.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )

    # ===========================================
    # LENDING
    # ===========================================
    op.create_table(
        'loans',
        _id(),
        _org_id(),
        _user_fk('applicant_id'),
        _money('amount', nullable=False),
        sa.Column('purpose', sa.String(500), nullable=False),
        sa.Column('term', sa.Integer(), nullable=False, comment='Term in months'),
        sa.Column('collateral', sa.String(500), nullable=True),
        sa.Column('institution', sa.String(200), nullable=True),
        sa.Column('documents', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'APPROVED', 'REJECTED', 'DISBURSED', 'REPAYING', 'COMPLETED', 'DEFAULTED',
                    name='loanstatus'),
            nullable=False,
        ),
        sa.Column('interest_rate', sa.Float(), nullable=True, comment='Annual %'),
        _money('monthly_payment'),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'loan_repayments',
        _id(),
        _org_id(),
        sa.Column('loan_id', sa.Uuid(), sa.ForeignKey('loans.id', ondelete='CASCADE'), nullable=False, index=True),
        _money('amount', nullable=False),
        _money('principal_paid'),
        _money('interest_paid'),
        _money('remaining_balance'),
        sa.Column('payment_date', sa.Date(), nullable=False, index=True),
        sa.Column('payment_method', sa.String(50), nullable=True),
        sa.Column('transaction_ref', sa.String(100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'COMPLETED', 'FAILED', name='repaymentstatus'),
            nullable=False,
        ),
        _user_fk('recorded_by_id'),
        *_timestamps(),
    )

    op.create_table(
        'credit_scores',
        _id(),
        _org_id(),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('grade', sa.String(2), nullable=False),
        sa.Column('factors', sa.JSON(), nullable=False),
        sa.Column('model_version', sa.String(20), nullable=False),
        sa.Column('calculated_at', sa.DateTime(timezone=True), nullable=False, index=True),
        *_timestamps(),
    )

    # ===========================================
    # COMPLIANCE
    # ===========================================
    op.create_table(
        'compliance_documents',
        _id(),
        _org_id(),
        sa.Column(
            'type',
            sa.Enum('MINING_LICENSE', 'PROSPECTING_LICENSE', 'EIA_CERTIFICATE',
                    'HEALTH_SAFETY_CERTIFICATION', 'LOCAL_PERMIT', name='compliancedocumenttype'),
            nullable=False,
        ),
        sa.Column('number', sa.String(100), nullable=True),
        sa.Column('issued_date', sa.Date(), nullable=True),
        sa.Column('expiry_date', sa.Date(), nullable=False),
        sa.Column('issuer', sa.String(200), nullable=True),
        sa.Column('file_url', sa.String(500), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        _user_fk('uploaded_by_id'),
        *_timestamps(),
    )

    op.create_table(
        'incidents',
        _id(),
        _org_id(),
        sa.Column(
            'type',
            sa.Enum('ACCIDENT', 'INJURY', 'NEAR_MISS', 'HAZARD', 'EQUIPMENT_FAILURE', name='incidenttype'),
            nullable=False,
        ),
        sa.Column('severity', sa.Enum('LOW', 'MEDIUM', 'HIGH', 'CRITICAL', name='incidentseverity'), nullable=False),
        sa.Column(
            'status',
            sa.Enum('OPEN', 'INVESTIGATING', 'RESOLVED', 'CLOSED', name='incidentstatus'),
            nullable=False,
        ),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location', sa.String(200), nullable=True),
        sa.Column('photos', sa.JSON(), nullable=False),
        sa.Column('resolution_notes', sa.Text(), nullable=True),
        sa.Column('reported_by_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'safety_checklists',
        _id(),
        _org_id(),
        _user_fk('user_id', nullable=False, ondelete='CASCADE', index=True),
        sa.Column('shift_id', sa.Uuid(), sa.ForeignKey('shifts.id', ondelete='SET NULL'), nullable=True),
        sa.Column('checklist_date', sa.Date(), nullable=False, index=True),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('SUBMITTED', 'VERIFIED', 'FLAGGED', name='checkliststatus'),
            nullable=False,
        ),
        *_timestamps(),
    )

    # ===========================================
    # INVENTORY
    # ===========================================
    op.create_table(
        'inventory_items',
        _id(),
        _org_id(),
        sa.Column(
            'item_type',
            sa.Enum('GOLD', 'ORE', 'EQUIPMENT', 'CONSUMABLE', name='inventoryitemtype'),
            nullable=False,
        ),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('quantity', sa.Numeric(precision=15, scale=3), nullable=False),
        sa.Column('unit', sa.String(20), nullable=False),
        _money('value_per_unit', nullable=False),
        _money('total_value', nullable=False, comment='quantity * value_per_unit, maintained on every write'),
        sa.Column('location', sa.String(200), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )


TABLES = [
    'inventory_items',
    'safety_checklists',
    'incidents',
    'compliance_documents',
    'credit_scores',
    'loan_repayments',
    'loans',
    'sales_transactions',
    'payroll',
    'receipts',
    'expenses',
    'equipment_usage',
    'equipment',
    'material_movements',
    'timesheets',
    'shifts',
    'memberships',
    'organizations',
    'users',
]

ENUMS = [
    'inventoryitemtype', 'checkliststatus', 'incidentstatus', 'incidentseverity', 'incidenttype',
    'compliancedocumenttype', 'repaymentstatus', 'loanstatus', 'salestatus', 'salesource',
    'payrollstatus', 'paymentmethod', 'receiptstatus', 'expensecategory', 'equipmentstatus',
    'equipmenttype', 'materialtype', 'shiftstatus', 'shifttype', 'membershipstatus', 'orgrole',
    'organizationstatus', 'organizationtype', 'subscriptiontier', 'userrole',
]


def downgrade() -> None:
    """Drop all tables, children first."""
    for table in TABLES:
        op.drop_table(table)

    if op.get_bind().dialect.name == 'postgresql':
        for enum_name in ENUMS:
            op.execute(f'DROP TYPE IF EXISTS {enum_name}')
