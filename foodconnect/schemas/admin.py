# foodconnect/schemas/admin.py
from datetime import datetime
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from foodconnect.schemas.common import PaginatedResponse
from foodconnect.schemas.payment import PaymentStats
from foodconnect.schemas.profile import InfluencerProfile, RestaurantProfile
from foodconnect.schemas.user import UserOut


class DashboardOverview(BaseModel):
    total_users: int
    total_restaurants: int
    total_influencers: int
    total_campaigns: int
    published_campaigns: int
    total_applications: int
    pending_approvals: int
    pending_follower_updates: int
    pending_content_reviews: int
    pending_payments: int


class AdminDashboardStats(BaseModel):
    overview: DashboardOverview
    users_by_status: Dict[str, int]
    campaigns_by_status: Dict[str, int]
    applications_by_status: Dict[str, int]
    content_by_status: Dict[str, int]
    payments: PaymentStats
    generated_at: datetime


class AdminUserListItem(UserOut):
    display_name: str
    profile: Optional[Union[RestaurantProfile, InfluencerProfile]] = None


class PaginatedAdminUsers(PaginatedResponse[AdminUserListItem]):
    pass


class ApprovalRequest(BaseModel):
    """Approve or reject a pending registration."""
    action: Literal["approve", "reject"]
    admin_notes: Optional[str] = Field(None, max_length=1000)


class UserStatusUpdate(BaseModel):
    status: Literal["active", "suspended", "approved"]
    reason: Optional[str] = Field(None, max_length=1000)


class PendingApprovals(BaseModel):
    restaurants: List[AdminUserListItem]
    influencers: List[AdminUserListItem]
    total: int


class TaskInfo(BaseModel):
    """One background job available for manual runs."""
    task_name: str
    description: str


class TaskRunRequest(BaseModel):
    task_name: Literal[
        "all",
        "close_expired_campaigns",
        "cleanup_old_notifications",
        "purge_expired_tokens",
    ]
