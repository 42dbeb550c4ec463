"""
EarthSafe API - Authentication Service

Business logic for registration, login, token rotation and password reset.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.user import User, UserRole
from app.schemas.auth import ProfileUpdate, UserRegister
from app.utils.error_handling import (
    AuthenticationException,
    AuthorizationException,
    BadRequestException,
    ConflictException,
    NotFoundException,
)
from app.utils.security import (
    create_access_token,
    create_password_reset_token,
    create_refresh_token,
    get_password_hash,
    verify_password,
    verify_password_reset_token,
    verify_refresh_token,
)

logger = logging.getLogger(__name__)


def resolve_role(role: Optional[str]) -> UserRole:
    """Map a free-text role to UserRole; anything unknown becomes miner."""
    if role:
        try:
            return UserRole(role.strip().lower())
        except ValueError:
            pass
    return UserRole.MINER


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email address."""
        result = await self.db.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.db.get(User, user_id)

    def _issue_tokens(self, user: User) -> Tuple[str, str]:
        claims = {"sub": str(user.id), "email": user.email, "role": user.role.value}
        access_token = create_access_token(data=claims)
        refresh_token = create_refresh_token(data={"sub": str(user.id), "jti": uuid.uuid4().hex})
        user.refresh_token = refresh_token
        return access_token, refresh_token

    async def register_user(self, data: UserRegister) -> Tuple[User, str, str]:
        """
        Create an account and sign it in.

        Raises:
            ConflictException: email already registered
        """
        if await self.get_user_by_email(data.email):
            raise ConflictException("User already exists")

        user = User(
            first_name=data.first_name.strip(),
            last_name=data.last_name.strip(),
            email=data.email.lower(),
            hashed_password=get_password_hash(data.password),
            phone_number=data.phone_number,
            role=resolve_role(data.role),
            is_active=True,
        )
        self.db.add(user)
        await self.db.flush()

        access_token, refresh_token = self._issue_tokens(user)
        user.last_login_at = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"Registered user {user.email} as {user.role.value}")
        return user, access_token, refresh_token

    async def login(self, email: str, password: str) -> Tuple[User, str, str]:
        """
        Authenticate with email and password.

        Raises:
            NotFoundException: no such user
            AuthorizationException: account deactivated
            AuthenticationException: wrong password
        """
        user = await self.get_user_by_email(email)
        if not user:
            raise NotFoundException("User", message="User not found")
        if not user.is_active:
            raise AuthorizationException("Account is deactivated")
        if not verify_password(password, user.hashed_password):
            raise AuthenticationException("Invalid credentials")

        access_token, refresh_token = self._issue_tokens(user)
        user.last_login_at = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"User {user.email} logged in")
        return user, access_token, refresh_token

    async def refresh(self, refresh_token: str) -> Tuple[User, str, str]:
        """Rotate a refresh token. The presented token must be the stored one."""
        if not refresh_token:
            raise BadRequestException("Refresh token is required")

        payload = verify_refresh_token(refresh_token)
        user = None
        if payload:
            try:
                user = await self.get_user_by_id(uuid.UUID(str(payload.get("sub"))))
            except ValueError:
                user = None
        if not user or not user.is_active or user.refresh_token != refresh_token:
            raise AuthenticationException("Invalid refresh token")

        access_token, new_refresh_token = self._issue_tokens(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user, access_token, new_refresh_token

    async def logout(self, user: User) -> None:
        user.refresh_token = None
        await self.db.commit()

    async def update_profile(self, user: User, data: ProfileUpdate) -> User:
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(user, field, value)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def request_password_reset(self, email: str) -> Optional[str]:
        """
        Issue a password reset token if the account exists.

        The caller must not reveal whether a token was issued.
        """
        user = await self.get_user_by_email(email)
        if not user or not user.is_active:
            logger.info("Password reset requested for unknown or inactive account")
            return None

        token = create_password_reset_token(
            data={"sub": str(user.id), "email": user.email, "pwv": user.password_version}
        )
        logger.info(f"Password reset token issued for user {user.id}")
        return token

    async def reset_password(self, token: str, new_password: str) -> User:
        payload = verify_password_reset_token(token)
        if not payload:
            raise BadRequestException("Invalid or expired reset token")

        try:
            user = await self.get_user_by_id(uuid.UUID(str(payload.get("sub"))))
        except ValueError:
            user = None
        # A token issued before the last reset is spent
        if not user or payload.get("pwv") != user.password_version:
            raise BadRequestException("Invalid or expired reset token")

        user.hashed_password = get_password_hash(new_password)
        user.password_version += 1
        user.refresh_token = None
        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"Password reset for user {user.id}")
        return user

    @staticmethod
    def token_expires_in() -> int:
        return settings.access_token_expire_minutes * 60
