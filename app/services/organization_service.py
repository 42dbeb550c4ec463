"""
EarthSafe API - Organization Service

Organizations and their memberships.
"""

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import (
    ADMIN_ROLES,
    Membership,
    MembershipStatus,
    Organization,
    OrganizationStatus,
    OrganizationType,
    OrgRole,
)
from app.models.user import User
from app.schemas.organization import OrganizationCreate, OrganizationUpdate
from app.utils.error_handling import (
    AuthorizationException,
    BadRequestException,
    NotFoundException,
)

logger = logging.getLogger(__name__)


class OrganizationService:
    """Service for organization and membership management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_organization(self, data: OrganizationCreate, owner: User) -> Organization:
        """Create an organization and make the creator its owner."""
        org = Organization(
            name=data.name.strip(),
            type=data.type,
            location=data.location,
            country=data.country,
            commodity=data.commodity or ["gold"],
            mining_license_number=data.mining_license_number,
            contact_email=data.contact_email,
            contact_phone=data.contact_phone,
            status=OrganizationStatus.ACTIVE,
            created_by_id=owner.id,
        )
        self.db.add(org)
        await self.db.flush()

        self.db.add(Membership(
            user_id=owner.id,
            org_id=org.id,
            role=OrgRole.OWNER,
            status=MembershipStatus.ACTIVE,
        ))
        await self.db.commit()
        await self.db.refresh(org)

        logger.info(f"Organization '{org.name}' created by {owner.email}")
        return org

    async def get_organization(self, org_id: uuid.UUID) -> Organization:
        org = await self.db.get(Organization, org_id)
        if not org:
            raise NotFoundException("Organization", org_id, message="Organization not found")
        return org

    async def get_user_organizations(self, user_id: uuid.UUID) -> List[Tuple[Organization, Membership]]:
        result = await self.db.execute(
            select(Organization, Membership)
            .join(Membership, Membership.org_id == Organization.id)
            .where(
                Membership.user_id == user_id,
                Membership.status == MembershipStatus.ACTIVE,
            )
            .order_by(Organization.name)
        )
        return [(org, membership) for org, membership in result.all()]

    async def list_buyers(self) -> List[Organization]:
        result = await self.db.execute(
            select(Organization)
            .where(
                Organization.type == OrganizationType.BUYER,
                Organization.status == OrganizationStatus.ACTIVE,
            )
            .order_by(Organization.name)
        )
        return list(result.scalars().all())

    async def update_organization(self, org_id: uuid.UUID, data: OrganizationUpdate) -> Organization:
        org = await self.get_organization(org_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "name" and not value:
                continue
            setattr(org, field, value)
        await self.db.commit()
        await self.db.refresh(org)
        return org

    # ===========================================
    # MEMBERSHIP OPERATIONS
    # ===========================================

    async def get_membership(self, org_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Membership]:
        result = await self.db.execute(
            select(Membership).where(
                Membership.org_id == org_id,
                Membership.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def add_member(self, org_id: uuid.UUID, email: str, role: OrgRole = OrgRole.MINER) -> Tuple[Membership, User]:
        """
        Add an existing user to the organization.

        Raises:
            NotFoundException: no account with this email
            BadRequestException: already a member
        """
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundException("User", message="User not found")

        if await self.get_membership(org_id, user.id):
            raise BadRequestException("User is already a member")

        membership = Membership(
            user_id=user.id,
            org_id=org_id,
            role=role,
            status=MembershipStatus.ACTIVE,
        )
        self.db.add(membership)
        await self.db.commit()
        await self.db.refresh(membership)

        logger.info(f"Added {user.email} to organization {org_id} as {role.value}")
        return membership, user

    async def list_members(self, org_id: uuid.UUID) -> List[Tuple[Membership, User]]:
        result = await self.db.execute(
            select(Membership, User)
            .join(User, User.id == Membership.user_id)
            .where(
                Membership.org_id == org_id,
                Membership.status == MembershipStatus.ACTIVE,
            )
            .order_by(User.first_name, User.last_name)
        )
        return [(membership, user) for membership, user in result.all()]

    async def remove_member(
        self,
        org_id: uuid.UUID,
        user_id: uuid.UUID,
        acting_membership: Membership,
    ) -> None:
        """
        Hard-delete a membership.

        Only owners may remove admins or other owners, and nobody may remove
        themselves.
        """
        if acting_membership.user_id == user_id:
            raise BadRequestException("You cannot remove yourself from the organization")

        target = await self.get_membership(org_id, user_id)
        if not target:
            raise NotFoundException("Membership", user_id, message="Member not found")

        if target.role in ADMIN_ROLES and acting_membership.role != OrgRole.OWNER:
            raise AuthorizationException("Only owners can remove admins or owners")

        await self.db.delete(target)
        await self.db.commit()
        logger.info(f"Removed user {user_id} from organization {org_id}")
