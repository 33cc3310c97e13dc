# foodconnect/schemas/profile.py
from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from foodconnect.core.constants import DIETARY_CATEGORIES, MALAYSIAN_STATES
from foodconnect.schemas.common import PaginatedResponse


def _check_state(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in MALAYSIAN_STATES:
        raise ValueError(f"State must be one of: {', '.join(MALAYSIAN_STATES)}")
    return value


def _check_dietary(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return values
    unknown = [v for v in values if v not in DIETARY_CATEGORIES]
    if unknown:
        raise ValueError(f"Unknown dietary categories: {', '.join(unknown)}")
    return values


MalaysianState = Annotated[Optional[str], AfterValidator(_check_state)]
DietaryCategories = Annotated[Optional[List[str]], AfterValidator(_check_dietary)]


# --- Restaurant ---

class RestaurantProfile(BaseModel):
    id: int
    user_id: int
    business_name: str
    description: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    google_maps_link: Optional[str] = None
    website: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    dietary_categories: List[str] = []
    approved_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RestaurantPublic(BaseModel):
    id: int
    business_name: str
    description: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    google_maps_link: Optional[str] = None
    website: Optional[str] = None
    dietary_categories: List[str] = []

    model_config = ConfigDict(from_attributes=True)


class RestaurantProfileUpdate(BaseModel):
    """Fields a restaurant may change on its own profile."""
    business_name: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    phone: Optional[str] = None
    address: Optional[str] = None
    google_maps_link: Optional[str] = None
    website: Optional[str] = None
    city: Optional[str] = None
    state: MalaysianState = None
    dietary_categories: DietaryCategories = None

    model_config = ConfigDict(extra="ignore")


# --- Influencer ---

class InfluencerProfile(BaseModel):
    id: int
    user_id: int
    display_name: str
    phone: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    instagram_username: Optional[str] = None
    instagram_link: Optional[str] = None
    instagram_followers: int = 0
    tiktok_username: Optional[str] = None
    tiktok_link: Optional[str] = None
    tiktok_followers: int = 0
    xhs_username: Optional[str] = None
    xhs_link: Optional[str] = None
    xhs_followers: int = 0
    youtube_channel: Optional[str] = None
    youtube_followers: int = 0
    tier: str
    approved_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InfluencerPublic(BaseModel):
    id: int
    display_name: str
    bio: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    instagram_username: Optional[str] = None
    instagram_followers: int = 0
    tiktok_username: Optional[str] = None
    tiktok_followers: int = 0
    xhs_username: Optional[str] = None
    xhs_followers: int = 0
    youtube_channel: Optional[str] = None
    youtube_followers: int = 0
    tier: str

    model_config = ConfigDict(from_attributes=True)


class PaginatedInfluencers(PaginatedResponse[InfluencerPublic]):
    pass


class InfluencerProfileUpdate(BaseModel):
    """
    Fields an influencer may change on its own profile.
    Follower counts go through FollowerUpdateRequest instead.
    """
    display_name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=1000)
    location: Optional[str] = None
    city: Optional[str] = None
    state: MalaysianState = None
    instagram_username: Optional[str] = None
    instagram_link: Optional[str] = None
    tiktok_username: Optional[str] = None
    tiktok_link: Optional[str] = None
    xhs_username: Optional[str] = None
    xhs_link: Optional[str] = None
    youtube_channel: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


# --- Follower updates ---

class FollowerUpdateRequest(BaseModel):
    platform: Literal["instagram", "tiktok", "xhs", "youtube"]
    requested_count: int = Field(..., ge=0)
    proof_url: Optional[str] = None


class FollowerUpdateOut(BaseModel):
    id: int
    influencer_id: int
    platform: str
    current_count: int
    requested_count: int
    proof_url: Optional[str] = None
    status: str
    admin_notes: Optional[str] = None
    processed_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdminFollowerUpdateItem(FollowerUpdateOut):
    influencer_name: Optional[str] = None
    influencer_tier: Optional[str] = None


class PaginatedFollowerUpdates(PaginatedResponse[AdminFollowerUpdateItem]):
    pass


class FollowerUpdateProcess(BaseModel):
    action: Literal["approve", "reject"]
    admin_notes: Optional[str] = None
