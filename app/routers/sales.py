"""
EarthSafe API - Sales Router

Gold sales recorded by the mine.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_org_membership, require_org_admin, require_org_roles
from app.models.organization import Membership, OrgRole
from app.schemas.auth import MessageResponse
from app.schemas.sales import SaleCreate, SaleResponse, SaleUpdate
from app.services.sales_service import SalesService


router = APIRouter(prefix="/orgs/{org_id}/sales", tags=["Sales"])

# Roles allowed to record a sale
SALES_ROLES = (OrgRole.OWNER, OrgRole.ADMIN, OrgRole.MINER)


@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
async def create_sale(
    org_id: UUID,
    request: SaleCreate,
    membership: Membership = Depends(require_org_roles(*SALES_ROLES)),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Record a sale. The receipt number becomes the sale's unique reference,
    and the buyer name decides whether the sale counts as Fidelity or private.
    """
    return await SalesService(db).create_sale(org_id, request)


@router.get("", response_model=List[SaleResponse])
async def list_sales(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await SalesService(db).list_sales(org_id)


@router.patch("/{sale_id}", response_model=SaleResponse)
async def update_sale(
    org_id: UUID,
    sale_id: UUID,
    request: SaleUpdate,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await SalesService(db).update_sale(org_id, sale_id, request)


@router.delete("/{sale_id}", response_model=MessageResponse)
async def delete_sale(
    org_id: UUID,
    sale_id: UUID,
    membership: Membership = Depends(require_org_admin),
    db: AsyncSession = Depends(get_async_session),
):
    await SalesService(db).delete_sale(org_id, sale_id)
    return MessageResponse(message="Sale deleted")
