"""
EarthSafe API - Organization and Membership Models

Organizations are the tenants of the platform: a mine, a cooperative, a buyer
or a partner. Every operational record (shifts, sales, payroll...) belongs to
exactly one organization.

Membership Roles:
- Owner: Created the organization; can remove admins
- Admin: Manages members and approves records
- Supervisor: Runs shifts
- Miner: Records production and sales
- Viewer: Read-only
"""

import uuid
from enum import Enum
from typing import List, Optional

from sqlalchemy import ForeignKey, JSON, String, UniqueConstraint, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class OrganizationType(str, Enum):
    MINE = "mine"
    COOPERATIVE = "cooperative"
    BUYER = "buyer"
    PARTNER = "partner"


class OrganizationStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    PENDING = "pending"


class OrgRole(str, Enum):
    """Role of a user inside one organization."""
    OWNER = "owner"
    ADMIN = "admin"
    MINER = "miner"
    VIEWER = "viewer"
    SUPERVISOR = "supervisor"


class MembershipStatus(str, Enum):
    ACTIVE = "active"
    INVITED = "invited"
    DISABLED = "disabled"


ADMIN_ROLES = (OrgRole.OWNER, OrgRole.ADMIN)


class Organization(BaseModel):
    """Organization model - top-level tenant."""

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    type: Mapped[OrganizationType] = mapped_column(
        SQLEnum(OrganizationType),
        default=OrganizationType.MINE,
        nullable=False,
    )
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    country: Mapped[str] = mapped_column(String(100), default="Zimbabwe", nullable=False)
    commodity: Mapped[List[str]] = mapped_column(
        JSON,
        default=lambda: ["gold"],
        nullable=False,
    )
    mining_license_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    status: Mapped[OrganizationStatus] = mapped_column(
        SQLEnum(OrganizationStatus),
        default=OrganizationStatus.ACTIVE,
        nullable=False,
    )
    created_by_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name={self.name})>"


class Membership(BaseModel):
    """Links a user to an organization with an org-level role."""

    __tablename__ = "memberships"
    __table_args__ = (
        UniqueConstraint("user_id", "org_id", name="uq_memberships_user_org"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    org_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[OrgRole] = mapped_column(
        SQLEnum(OrgRole),
        default=OrgRole.MINER,
        nullable=False,
    )
    status: Mapped[MembershipStatus] = mapped_column(
        SQLEnum(MembershipStatus),
        default=MembershipStatus.ACTIVE,
        nullable=False,
    )

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES
