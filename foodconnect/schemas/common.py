# foodconnect/schemas/common.py
from typing import Dict, Generic, List, TypeVar
from pydantic import BaseModel

DataType = TypeVar('DataType')


class PaginatedResponse(BaseModel, Generic[DataType]):
    """
    Generic schema for paginated responses.
    """
    total_items: int
    total_pages: int
    current_page: int
    size: int
    items: List[DataType]


class StatusMessage(BaseModel):
    status: str = "ok"
    message: str | None = None


class RegistrationData(BaseModel):
    """Reference lists used by the registration forms."""
    malaysian_states: List[str]
    dietary_categories: Dict[str, str]
    influencer_tiers: Dict[str, str]
    follower_platforms: List[str]
