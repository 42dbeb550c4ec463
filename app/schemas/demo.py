"""
EarthSafe API - Demo Data Schemas
"""

from typing import Dict
from uuid import UUID

from pydantic import BaseModel, EmailStr


class DemoSeedRequest(BaseModel):
    email: EmailStr


class DemoSeedResponse(BaseModel):
    message: str
    org_id: UUID
    counts: Dict[str, int]
