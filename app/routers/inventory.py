"""
EarthSafe API - Inventory Router
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_org_membership
from app.models.organization import Membership
from app.schemas.auth import MessageResponse
from app.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
    InventoryStatsResponse,
)
from app.services.inventory_service import InventoryService


router = APIRouter(prefix="/orgs/{org_id}/inventory", tags=["Inventory"])


@router.post("", response_model=InventoryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    org_id: UUID,
    request: InventoryItemCreate,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await InventoryService(db).create_item(org_id, request)


@router.get("", response_model=List[InventoryItemResponse])
async def list_items(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await InventoryService(db).list_items(org_id)


@router.get("/stats", response_model=InventoryStatsResponse)
async def get_inventory_stats(
    org_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await InventoryService(db).get_stats(org_id)


@router.get("/{item_id}", response_model=InventoryItemResponse)
async def get_item(
    org_id: UUID,
    item_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await InventoryService(db).get_item(org_id, item_id)


@router.patch("/{item_id}", response_model=InventoryItemResponse)
async def update_item(
    org_id: UUID,
    item_id: UUID,
    request: InventoryItemUpdate,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    return await InventoryService(db).update_item(org_id, item_id, request)


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_item(
    org_id: UUID,
    item_id: UUID,
    membership: Membership = Depends(get_org_membership),
    db: AsyncSession = Depends(get_async_session),
):
    await InventoryService(db).delete_item(org_id, item_id)
    return MessageResponse(message="Inventory item deleted")
