"""
EarthSafe API - FastAPI Dependencies

Shared dependencies for authentication, database sessions, and
organization-level access control.

This module provides dependency injection for:
1. Current user authentication (Bearer JWT)
2. Organization membership checks
3. Organization role checks (admin/owner, sales roles)
"""

import uuid
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.models.organization import ADMIN_ROLES, Membership, MembershipStatus, OrgRole
from app.models.user import User
from app.utils.security import verify_access_token


# HTTP Bearer token security
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Get the current authenticated user from the Authorization header.

    Raises:
        HTTPException: If token is missing/invalid or user not found
    """
    if not credentials or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_uuid = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await db.get(User, user_uuid)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated",
        )

    return user


async def get_active_membership(
    db: AsyncSession,
    user_id: uuid.UUID,
    org_id: uuid.UUID,
) -> Membership:
    """
    Load the caller's active membership in an organization.

    Also used directly by routes whose organization is resolved from a
    child record (e.g. /shifts/{shift_id}).
    """
    result = await db.execute(
        select(Membership).where(
            Membership.user_id == user_id,
            Membership.org_id == org_id,
        )
    )
    membership = result.scalar_one_or_none()
    if not membership or membership.status != MembershipStatus.ACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not a member of this organization",
        )
    return membership


def ensure_org_admin(membership: Membership) -> Membership:
    if membership.role not in ADMIN_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return membership


async def get_org_membership(
    org_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Membership:
    """Require that the current user is an active member of {org_id}."""
    return await get_active_membership(db, current_user.id, org_id)


async def require_org_admin(
    membership: Membership = Depends(get_org_membership),
) -> Membership:
    """Require owner or admin role in {org_id}."""
    return ensure_org_admin(membership)


def require_org_roles(*roles: OrgRole):
    """
    Dependency factory requiring one of the given org roles.

    Usage:
        @router.post("/...", dependencies=[Depends(require_org_roles(OrgRole.MINER))])
    """
    allowed = set(roles)

    async def role_checker(
        membership: Membership = Depends(get_org_membership),
    ) -> Membership:
        if membership.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return membership

    return role_checker
