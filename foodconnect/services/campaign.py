# foodconnect/services/campaign.py

import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from foodconnect.core import locales
from foodconnect.core.constants import (
    BUDGET_SUGGESTIONS,
    CAMPAIGN_STATUS_LABELS,
    DIETARY_CATEGORIES,
    MALAYSIAN_STATES,
    TIER_LABELS,
)
from foodconnect.crud import application as crud_application
from foodconnect.crud import campaign as crud_campaign
from foodconnect.crud import profile as crud_profile
from foodconnect.models.campaign import Campaign
from foodconnect.models.influencer import Influencer
from foodconnect.models.restaurant import Restaurant
from foodconnect.models.user import User
from foodconnect.schemas.campaign import (
    ApplicationStats,
    CampaignBrowseItem,
    CampaignCreate,
    CampaignDetail,
    CampaignDraft,
    CampaignFormData,
    CampaignUpdate,
    CampaignWithStats,
    PaginatedBrowseCampaigns,
    PaginatedCampaigns,
)
from foodconnect.schemas.settings import PlatformSettings
from foodconnect.services import settings as settings_service
from foodconnect.utils.dates import utcnow

logger = logging.getLogger(__name__)

# Allowed status moves through update; anything else is rejected
STATUS_TRANSITIONS = {
    "draft": {"published"},
    "published": {"closed"},
    "closed": set(),
}


# --- Validation helpers ---

def _check_budget(total_budget: Optional[float], platform_settings: PlatformSettings):
    if total_budget is None or total_budget < platform_settings.min_campaign_budget:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Total budget must be at least RM {platform_settings.min_campaign_budget:g}",
        )


def _check_deadline(deadline: Optional[datetime], platform_settings: PlatformSettings):
    now = utcnow()
    if deadline is None or deadline <= now:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Deadline must be in the future")
    max_days = platform_settings.max_campaign_duration_days
    if deadline > now + timedelta(days=max_days):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Deadline cannot be more than {max_days} days from now",
        )


def _ensure_publishable(campaign: Campaign, platform_settings: PlatformSettings):
    """A draft may be incomplete; publishing needs every field a full campaign needs."""
    if not campaign.description or len(campaign.description) < 20:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Description must be at least 20 characters to publish")
    if not campaign.brief or len(campaign.brief) < 50:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Brief must be at least 50 characters to publish")
    if len(campaign.title or "") < 5:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title must be at least 5 characters to publish")
    _check_budget(campaign.total_budget, platform_settings)
    _check_deadline(campaign.deadline, platform_settings)


def _list_fields(data: dict) -> dict:
    for field in ("dietary_categories", "target_tiers", "budget_allocations"):
        if field in data and data[field] is None:
            data[field] = []
    return data


def _get_campaign_or_404(db: Session, campaign_id: int) -> Campaign:
    campaign = crud_campaign.get_campaign(db, campaign_id)
    if not campaign:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_CAMPAIGN_NOT_FOUND)
    return campaign


def get_owned_campaign(db: Session, campaign_id: int, restaurant: Restaurant) -> Campaign:
    campaign = _get_campaign_or_404(db, campaign_id)
    if campaign.restaurant_id != restaurant.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=locales.ERROR_ACCESS_DENIED)
    return campaign


def with_stats(db: Session, campaigns: list[Campaign]) -> list[CampaignWithStats]:
    stats = crud_campaign.get_application_stats(db, [c.id for c in campaigns])
    items = []
    for campaign in campaigns:
        item = CampaignWithStats.model_validate(campaign)
        item.application_stats = ApplicationStats(**stats.get(campaign.id, {}))
        items.append(item)
    return items


# --- Restaurant operations ---

def create_campaign(db: Session, restaurant: Restaurant, data: CampaignCreate) -> Campaign:
    platform_settings = settings_service.get_platform_settings(db)
    _check_budget(data.total_budget, platform_settings)
    _check_deadline(data.deadline, platform_settings)

    campaign_data = _list_fields(data.model_dump(exclude={"publish_immediately"}))
    campaign_data["status"] = "published" if data.publish_immediately else "draft"

    campaign = crud_campaign.create_campaign(db, restaurant.id, campaign_data)
    logger.info(f"Restaurant {restaurant.id} created campaign {campaign.id} ({campaign.status}).")
    return campaign


def save_draft(db: Session, restaurant: Restaurant, data: CampaignDraft) -> Campaign:
    campaign_data = _list_fields(data.model_dump())
    if campaign_data.get("total_budget") is None:
        campaign_data["total_budget"] = 0
    if campaign_data.get("description") is None:
        campaign_data["description"] = ""
    campaign_data["status"] = "draft"
    campaign = crud_campaign.create_campaign(db, restaurant.id, campaign_data)
    logger.info(f"Restaurant {restaurant.id} saved draft campaign {campaign.id}.")
    return campaign


def get_restaurant_campaigns(
    db: Session, restaurant: Restaurant, page: int, size: int, status_filter: str | None = None
) -> PaginatedCampaigns:
    skip = (page - 1) * size
    campaigns = crud_campaign.get_restaurant_campaigns(db, restaurant.id, skip=skip, limit=size, status=status_filter)
    total_items = crud_campaign.count_restaurant_campaigns(db, restaurant.id, status=status_filter)
    total_pages = math.ceil(total_items / size) if total_items > 0 else 1
    return PaginatedCampaigns(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        size=size,
        items=with_stats(db, campaigns),
    )


def update_campaign(db: Session, campaign_id: int, restaurant: Restaurant, data: CampaignUpdate) -> Campaign:
    campaign = get_owned_campaign(db, campaign_id, restaurant)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    new_status = changes.pop("status", None)

    if changes and campaign.status != "draft" and crud_application.count_applications(db, campaign.id) > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot edit a published campaign that already has applications",
        )

    platform_settings = settings_service.get_platform_settings(db)
    if "deadline" in changes:
        _check_deadline(changes["deadline"], platform_settings)
    if "total_budget" in changes:
        _check_budget(changes["total_budget"], platform_settings)

    for field, value in changes.items():
        setattr(campaign, field, value)

    if new_status and new_status != campaign.status:
        _apply_status(campaign, new_status, platform_settings)

    db.commit()
    db.refresh(campaign)
    logger.info(f"Campaign {campaign.id} updated by restaurant {restaurant.id}: {list(changes.keys())} status={campaign.status}")
    return campaign


def _apply_status(campaign: Campaign, new_status: str, platform_settings: PlatformSettings):
    if new_status not in STATUS_TRANSITIONS.get(campaign.status, set()):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot change campaign status from '{campaign.status}' to '{new_status}'",
        )
    if new_status == "published":
        _ensure_publishable(campaign, platform_settings)
    campaign.status = new_status


def change_status(db: Session, campaign_id: int, restaurant: Restaurant, new_status: str) -> Campaign:
    campaign = get_owned_campaign(db, campaign_id, restaurant)
    _apply_status(campaign, new_status, settings_service.get_platform_settings(db))
    db.commit()
    db.refresh(campaign)
    logger.info(f"Campaign {campaign.id} moved to '{new_status}' by restaurant {restaurant.id}.")
    return campaign


# --- Viewing ---

def _application_state(campaign: Campaign, influencer: Influencer, existing_status: str | None) -> bool:
    """Whether the influencer could apply to this campaign right now."""
    if existing_status is not None:
        return False
    if campaign.status != "published":
        return False
    if campaign.deadline is not None and campaign.deadline <= utcnow():
        return False
    if campaign.target_tiers and influencer.tier not in campaign.target_tiers:
        return False
    return influencer.user.status in ("approved", "active")


def get_campaign_detail(db: Session, campaign_id: int, user: User) -> CampaignDetail:
    campaign = _get_campaign_or_404(db, campaign_id)
    is_owner = user.user_type == "restaurant" and campaign.restaurant.user_id == user.id

    if user.user_type == "restaurant" and not is_owner:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=locales.ERROR_ACCESS_DENIED)
    if user.user_type == "influencer" and campaign.status == "draft":
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_CAMPAIGN_NOT_FOUND)

    detail = CampaignDetail.model_validate(campaign)
    stats = crud_campaign.get_application_stats(db, [campaign.id]).get(campaign.id, {})
    detail.application_stats = ApplicationStats(**stats)

    if not (is_owner or user.user_type == "admin"):
        detail.applications = None

    if user.user_type == "influencer":
        influencer = crud_profile.get_influencer_by_user_id(db, user.id)
        if influencer:
            application = crud_application.get_application_for(db, campaign.id, influencer.id)
            detail.user_application_status = application.status if application else None
            detail.can_apply = _application_state(campaign, influencer, detail.user_application_status)
    return detail


def browse_campaigns(
    db: Session,
    user: Optional[User],
    page: int,
    size: int,
    city: str | None = None,
    state: str | None = None,
    dietary_category: str | None = None,
    target_tier: str | None = None,
    min_budget: float | None = None,
    max_budget: float | None = None,
    search: str | None = None,
) -> PaginatedBrowseCampaigns:
    """Published campaigns that are still open, newest first."""
    campaigns = crud_campaign.get_open_campaigns(
        db, utcnow(), city=city, state=state, min_budget=min_budget, max_budget=max_budget, search=search
    )
    if dietary_category:
        campaigns = [c for c in campaigns if dietary_category in (c.dietary_categories or [])]
    if target_tier:
        # Campaigns without target tiers are open to every tier
        campaigns = [c for c in campaigns if not c.target_tiers or target_tier in c.target_tiers]

    total_items = len(campaigns)
    skip = (page - 1) * size
    page_items = campaigns[skip:skip + size]

    items = [CampaignBrowseItem.model_validate(c) for c in page_items]

    influencer = None
    if user is not None and user.user_type == "influencer":
        influencer = crud_profile.get_influencer_by_user_id(db, user.id)
    if influencer is not None:
        statuses = crud_application.get_influencer_statuses(db, influencer.id, [c.id for c in page_items])
        for item, campaign in zip(items, page_items):
            item.user_application_status = statuses.get(campaign.id)
            item.can_apply = _application_state(campaign, influencer, item.user_application_status)

    total_pages = math.ceil(total_items / size) if total_items > 0 else 1
    return PaginatedBrowseCampaigns(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        size=size,
        items=items,
    )


def get_form_data(db: Session) -> CampaignFormData:
    platform_settings = settings_service.get_platform_settings(db)
    return CampaignFormData(
        dietary_categories=DIETARY_CATEGORIES,
        influencer_tiers=TIER_LABELS,
        status_labels=CAMPAIGN_STATUS_LABELS,
        malaysian_states=MALAYSIAN_STATES,
        budget_suggestions=BUDGET_SUGGESTIONS,
        min_campaign_budget=platform_settings.min_campaign_budget,
        max_campaign_duration_days=platform_settings.max_campaign_duration_days,
    )


def get_admin_campaigns(
    db: Session,
    page: int,
    size: int,
    status_filter: str | None = None,
    restaurant_id: int | None = None,
    search: str | None = None,
) -> PaginatedCampaigns:
    skip = (page - 1) * size
    filters = {"status": status_filter, "restaurant_id": restaurant_id, "search": search}
    campaigns = crud_campaign.get_all_campaigns(db, skip=skip, limit=size, **filters)
    total_items = crud_campaign.count_all_campaigns(db, **filters)
    total_pages = math.ceil(total_items / size) if total_items > 0 else 1
    return PaginatedCampaigns(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        size=size,
        items=with_stats(db, campaigns),
    )


# --- Background job ---

def close_expired_campaigns(db: Session) -> int:
    """Closes published campaigns whose deadline has passed. Returns the number closed."""
    expired = crud_campaign.get_expired_published_campaigns(db, utcnow())
    for campaign in expired:
        campaign.status = "closed"
    db.commit()
    if expired:
        logger.info(f"Closed {len(expired)} expired campaigns: {[c.id for c in expired]}")
    return len(expired)
