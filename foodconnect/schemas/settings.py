# foodconnect/schemas/settings.py
from pydantic import BaseModel, Field
from typing import Optional

class PlatformSettings(BaseModel):
    platform_fee_percentage: float
    min_campaign_budget: float
    max_campaign_duration_days: int
    auto_approve_restaurants: bool
    auto_approve_influencers: bool
    touch_n_go_business_account: str
    admin_email: str
    site_maintenance_mode: bool


class PlatformSettingsUpdate(BaseModel):
    """
    Partial update, every field is optional.
    """
    platform_fee_percentage: Optional[float] = Field(None, ge=0, le=100)
    min_campaign_budget: Optional[float] = Field(None, ge=0)
    max_campaign_duration_days: Optional[int] = Field(None, ge=1, le=365)
    auto_approve_restaurants: Optional[bool] = None
    auto_approve_influencers: Optional[bool] = None
    touch_n_go_business_account: Optional[str] = None
    admin_email: Optional[str] = None
    site_maintenance_mode: Optional[bool] = None
