"""
EarthSafe API - Demo Data Router

Resets the "Star Mining Co." demo organization with generated records.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.demo import DemoSeedRequest, DemoSeedResponse
from app.services.demo_data_service import DemoDataService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/demo", tags=["Demo"])


@router.post("/seed", response_model=DemoSeedResponse)
async def seed_demo_data(
    request: DemoSeedRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    logger.info(f"Demo seed requested by {current_user.email} for {request.email}")
    return await DemoDataService(db).seed(request.email)
