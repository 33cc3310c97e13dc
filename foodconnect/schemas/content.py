# foodconnect/schemas/content.py
import re
from datetime import datetime
from typing import Annotated, Dict, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from foodconnect.core.constants import CONTENT_PLATFORM_IDS
from foodconnect.schemas.common import PaginatedResponse

VIDEO_URL_PATTERNS = [
    re.compile(r"^https?://(www\.)?(youtube\.com|youtu\.be)/.+"),
    re.compile(r"^https?://(www\.)?tiktok\.com/.+"),
    re.compile(r"^https?://(www\.)?instagram\.com/.+"),
    re.compile(r"^https?://(www\.)?facebook\.com/.+"),
    re.compile(r"\.(mp4|mov|avi|wmv|flv|webm)$", re.IGNORECASE),
]


def is_valid_video_url(url: str) -> bool:
    return any(pattern.search(url) for pattern in VIDEO_URL_PATTERNS)


def _check_video_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not is_valid_video_url(value):
        raise ValueError("Invalid video URL. Use a YouTube, TikTok, Instagram or Facebook link, or a direct video file URL")
    return value


def _check_platforms(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return values
    if not values:
        raise ValueError("At least one platform is required")
    unknown = [v for v in values if v not in CONTENT_PLATFORM_IDS]
    if unknown:
        raise ValueError(f"Unsupported platforms: {', '.join(unknown)}")
    # Keep order, drop duplicates
    return list(dict.fromkeys(values))


VideoUrl = Annotated[Optional[str], AfterValidator(_check_video_url)]
Platforms = Annotated[Optional[List[str]], AfterValidator(_check_platforms)]


class ContentCreate(BaseModel):
    application_id: int
    video_url: Annotated[str, AfterValidator(_check_video_url)]
    description: Optional[str] = Field(None, max_length=1000)
    platforms: Annotated[List[str], AfterValidator(_check_platforms)]


class ContentUpdate(BaseModel):
    video_url: VideoUrl = None
    description: Optional[str] = Field(None, max_length=1000)
    platforms: Platforms = None


class ContentReview(BaseModel):
    action: Literal["approve", "reject"]
    feedback: Optional[str] = Field(None, max_length=1000)


class ContentPosted(BaseModel):
    platforms: Platforms = None


class ContentOut(BaseModel):
    id: int
    application_id: int
    campaign_id: int
    campaign_title: Optional[str] = None
    restaurant_id: int
    restaurant_name: Optional[str] = None
    influencer_id: int
    influencer_name: Optional[str] = None
    video_url: str
    description: Optional[str] = None
    platforms: List[str] = []
    status: str
    feedback: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    posted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ContentDetail(BaseModel):
    content: ContentOut
    workflow: List[Dict]
    status_labels: Dict[str, str]
    platforms: List[Dict[str, str]]


class ContentSummary(BaseModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    posted: int = 0


class PaginatedContent(PaginatedResponse[ContentOut]):
    summary: ContentSummary = ContentSummary()


class ContentStats(BaseModel):
    by_status: Dict[str, int]
    total: int
    submitted_last_7_days: int
    average_review_hours: Optional[float] = None


class UploadResponse(BaseModel):
    url: str
    filename: str
    original_name: str
    size: int
    content_type: Optional[str] = None
