"""
EarthSafe API - Organizations Router

Organizations (mines, cooperatives, buyers) and their memberships.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_user, get_org_membership, require_org_admin
from app.models.organization import Membership
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.organization import (
    MemberAdd,
    MemberResponse,
    MyOrganizationResponse,
    OrganizationCreate,
    OrganizationResponse,
    OrganizationUpdate,
)
from app.services.organization_service import OrganizationService


router = APIRouter(prefix="/orgs", tags=["Organizations"])


def _member_response(membership: Membership, user: User) -> MemberResponse:
    return MemberResponse(
        membership_id=membership.id,
        user_id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        role=membership.role,
        status=membership.status,
        joined_at=membership.created_at,
    )


@router.post("", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED)
async def create_organization(
    request: OrganizationCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Create an organization; the caller becomes its owner."""
    return await OrganizationService(db).create_organization(request, current_user)


@router.get("/my-orgs", response_model=List[MyOrganizationResponse])
async def list_my_organizations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    rows = await OrganizationService(db).get_user_organizations(current_user.id)
    return [
        MyOrganizationResponse(
            organization=OrganizationResponse.model_validate(org),
            role=membership.role,
            status=membership.status,
        )
        for org, membership in rows
    ]


@router.get("/buyers", response_model=List[OrganizationResponse])
async def list_buyers(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    return await OrganizationService(db).list_buyers()


@router.get("/{org_id}", response_model=OrganizationResponse)
async def get_organization(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await OrganizationService(db).get_organization(org_id)


@router.patch("/{org_id}", response_model=OrganizationResponse)
async def update_organization(
    org_id: UUID,
    request: OrganizationUpdate,
    membership: Membership = Depends(require_org_admin),
    db: AsyncSession = Depends(get_async_session),
):
    return await OrganizationService(db).update_organization(org_id, request)


# ===========================================
# MEMBERS
# ===========================================

@router.post("/{org_id}/members", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def add_member(
    org_id: UUID,
    request: MemberAdd,
    membership: Membership = Depends(require_org_admin),
    db: AsyncSession = Depends(get_async_session),
):
    new_membership, user = await OrganizationService(db).add_member(org_id, request.email, request.role)
    return _member_response(new_membership, user)


@router.get("/{org_id}/members", response_model=List[MemberResponse])
async def list_members(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    rows = await OrganizationService(db).list_members(org_id)
    return [_member_response(m, u) for m, u in rows]


@router.delete("/{org_id}/members/{user_id}", response_model=MessageResponse)
async def remove_member(
    org_id: UUID,
    user_id: UUID,
    membership: Membership = Depends(require_org_admin),
    db: AsyncSession = Depends(get_async_session),
):
    await OrganizationService(db).remove_member(org_id, user_id, membership)
    return MessageResponse(message="Member removed")
