"""
EarthSafe API - User Model

Platform accounts for miners, buyers and back-office staff.

Platform roles describe what kind of participant the account is. What a user
may do inside a given mine or cooperative is decided by their Membership
role in that organization (see app.models.organization).
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Text, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class UserRole(str, Enum):
    """Platform-level participant role."""
    MINER = "miner"
    BUYER = "buyer"
    COOPERATIVE = "cooperative"
    GOVERNMENT = "government"
    FINANCIAL_INSTITUTION = "financial_institution"
    ADMIN = "admin"


class SubscriptionTier(str, Enum):
    FREE = "free"
    PRO = "pro"
    PREMIUM = "premium"


class User(BaseModel):
    """User account. Email is unique and stored lower-cased."""

    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole),
        default=UserRole.MINER,
        nullable=False,
    )
    subscription_tier: Mapped[SubscriptionTier] = mapped_column(
        SQLEnum(SubscriptionTier),
        default=SubscriptionTier.FREE,
        nullable=False,
    )

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Bumped on every password reset; reset tokens carry the value they were issued against
    password_version: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Current refresh token; cleared on logout and password reset
    refresh_token: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_login_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
