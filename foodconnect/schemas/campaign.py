# foodconnect/schemas/campaign.py
from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from foodconnect.schemas.application import ApplicationOut
from foodconnect.schemas.common import PaginatedResponse
from foodconnect.schemas.profile import DietaryCategories
from foodconnect.utils.dates import to_naive_utc

TierName = Literal["emerging", "growing", "established", "large", "major", "mega"]


class BudgetAllocation(BaseModel):
    tier: TierName
    amount: float = Field(..., ge=0)


class CampaignBase(BaseModel):
    location: Optional[str] = Field(None, max_length=200)
    dietary_categories: DietaryCategories = None
    target_tiers: Optional[List[TierName]] = None
    budget_allocations: Optional[List[BudgetAllocation]] = None

    @field_validator("deadline", mode="after", check_fields=False)
    @classmethod
    def normalize_deadline(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class CampaignCreate(CampaignBase):
    title: str = Field(..., min_length=5, max_length=100)
    description: str = Field(..., min_length=20, max_length=500)
    brief: str = Field(..., min_length=50)
    total_budget: float = Field(..., gt=0)
    deadline: datetime
    max_influencers: int = Field(5, ge=1, le=20)
    publish_immediately: bool = False


class CampaignDraft(CampaignBase):
    """Work-in-progress campaign, only the title is mandatory."""
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    brief: Optional[str] = None
    total_budget: Optional[float] = Field(None, ge=0)
    deadline: Optional[datetime] = None
    max_influencers: int = Field(5, ge=1, le=20)


class CampaignUpdate(CampaignBase):
    title: Optional[str] = Field(None, min_length=5, max_length=100)
    description: Optional[str] = Field(None, min_length=20, max_length=500)
    brief: Optional[str] = Field(None, min_length=50)
    total_budget: Optional[float] = Field(None, gt=0)
    deadline: Optional[datetime] = None
    max_influencers: Optional[int] = Field(None, ge=1, le=20)
    status: Optional[Literal["draft", "published", "closed"]] = None


class ApplicationStats(BaseModel):
    total: int = 0
    pending: int = 0
    accepted: int = 0
    rejected: int = 0


class CampaignOut(BaseModel):
    id: int
    restaurant_id: int
    restaurant_name: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    title: str
    description: Optional[str] = None
    brief: Optional[str] = None
    total_budget: float
    deadline: Optional[datetime] = None
    location: Optional[str] = None
    dietary_categories: List[str] = []
    target_tiers: List[str] = []
    budget_allocations: List[BudgetAllocation] = []
    max_influencers: int
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CampaignWithStats(CampaignOut):
    application_stats: ApplicationStats = ApplicationStats()


class CampaignDetail(CampaignWithStats):
    # Only visible to the owning restaurant and admins
    applications: Optional[List[ApplicationOut]] = None
    user_application_status: Optional[str] = None
    can_apply: Optional[bool] = None


class CampaignBrowseItem(CampaignOut):
    # Filled only for influencer callers
    user_application_status: Optional[str] = None
    can_apply: Optional[bool] = None


class PaginatedCampaigns(PaginatedResponse[CampaignWithStats]):
    pass


class PaginatedBrowseCampaigns(PaginatedResponse[CampaignBrowseItem]):
    pass


class CampaignFormData(BaseModel):
    dietary_categories: Dict[str, str]
    influencer_tiers: Dict[str, str]
    status_labels: Dict[str, str]
    malaysian_states: List[str]
    budget_suggestions: Dict[str, Dict[str, int]]
    min_campaign_budget: float
    max_campaign_duration_days: int
    max_influencers_limit: int = 20
