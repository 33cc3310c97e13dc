# foodconnect/schemas/application.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from foodconnect.schemas.common import PaginatedResponse


class ApplicationCreate(BaseModel):
    campaign_id: int
    message: Optional[str] = Field(None, max_length=1000)
    proposed_timeline: Optional[str] = Field(None, max_length=200)
    portfolio_examples: List[str] = Field(default_factory=list, max_length=10)


class ApplicationProcess(BaseModel):
    action: Literal["accept", "reject"]


class ApplicationOut(BaseModel):
    id: int
    campaign_id: int
    campaign_title: Optional[str] = None
    influencer_id: int
    influencer_name: Optional[str] = None
    influencer_tier: Optional[str] = None
    message: Optional[str] = None
    proposed_timeline: Optional[str] = None
    portfolio_examples: List[str] = []
    status: str
    responded_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaginatedApplications(PaginatedResponse[ApplicationOut]):
    pass
