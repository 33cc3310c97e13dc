# foodconnect/services/profiles.py

import logging
import math
from typing import Any, Dict, List

from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from foodconnect.core.constants import DEFAULT_TIER, TIER_THRESHOLDS
from foodconnect.crud import profile as crud_profile
from foodconnect.models.influencer import FollowerUpdate, Influencer
from foodconnect.models.user import User
from foodconnect.schemas.profile import (
    FollowerUpdateRequest,
    InfluencerProfile,
    InfluencerProfileUpdate,
    PaginatedFollowerUpdates,
    PaginatedInfluencers,
    RestaurantProfile,
    RestaurantProfileUpdate,
)
from foodconnect.schemas.user import MeResponse, UserOut
from foodconnect.services import notification as notification_service
from foodconnect.utils.dates import utcnow

logger = logging.getLogger(__name__)


def calculate_tier(max_followers: int) -> str:
    """Influencer tier from the largest follower count across platforms."""
    for threshold, tier in TIER_THRESHOLDS:
        if max_followers >= threshold:
            return tier
    return DEFAULT_TIER


def recalculate_tier(influencer: Influencer) -> str:
    influencer.tier = calculate_tier(influencer.max_followers)
    return influencer.tier


def serialize_profile(user: User):
    if user.user_type == "restaurant" and user.restaurant:
        return RestaurantProfile.model_validate(user.restaurant)
    if user.user_type == "influencer" and user.influencer:
        return InfluencerProfile.model_validate(user.influencer)
    return None


def get_me(user: User) -> MeResponse:
    return MeResponse(user=UserOut.model_validate(user), profile=serialize_profile(user))


def update_profile(db: Session, user: User, payload: Dict[str, Any]) -> MeResponse:
    """
    Applies the whitelisted profile fields for the user's type; anything else is ignored.
    """
    if user.user_type == "restaurant":
        profile = user.restaurant
        update_schema = RestaurantProfileUpdate
    elif user.user_type == "influencer":
        profile = user.influencer
        update_schema = InfluencerProfileUpdate
    else:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Admin accounts have no profile")

    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

    try:
        changes = update_schema.model_validate(payload).model_dump(exclude_unset=True, exclude_none=True)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False),
        )
    if not changes:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No valid fields to update")

    for field, value in changes.items():
        setattr(profile, field, value)
    db.commit()
    db.refresh(user)
    logger.info(f"User {user.id} updated profile fields: {list(changes.keys())}")
    return get_me(user)


# --- Public profiles ---

def get_restaurant(db: Session, restaurant_id: int):
    restaurant = crud_profile.get_restaurant_by_id(db, restaurant_id)
    if not restaurant or restaurant.user.status not in ("approved", "active"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Restaurant not found")
    return restaurant


def get_influencer(db: Session, influencer_id: int):
    influencer = crud_profile.get_influencer_by_id(db, influencer_id)
    if not influencer or influencer.user.status not in ("approved", "active"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Influencer not found")
    return influencer


def search_influencers(
    db: Session,
    page: int,
    size: int,
    tier: str | None = None,
    city: str | None = None,
    state: str | None = None,
    search: str | None = None,
) -> PaginatedInfluencers:
    skip = (page - 1) * size
    filters = {"tier": tier, "city": city, "state": state, "search": search}
    influencers = crud_profile.search_influencers(db, skip=skip, limit=size, **filters)
    total_items = crud_profile.count_search_influencers(db, **filters)
    total_pages = math.ceil(total_items / size) if total_items > 0 else 1
    return PaginatedInfluencers(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        size=size,
        items=influencers,
    )


# --- Follower updates ---

def request_follower_update(db: Session, influencer: Influencer, data: FollowerUpdateRequest) -> FollowerUpdate:
    if crud_profile.get_pending_follower_update(db, influencer.id, data.platform):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"You already have a pending follower update for {data.platform}",
        )
    current_count = getattr(influencer, f"{data.platform}_followers") or 0
    follower_update = crud_profile.create_follower_update(
        db,
        influencer_id=influencer.id,
        platform=data.platform,
        current_count=current_count,
        requested_count=data.requested_count,
        proof_url=data.proof_url,
    )
    logger.info(
        f"Influencer {influencer.id} requested {data.platform} followers {current_count} -> {data.requested_count}"
    )
    return follower_update


def get_my_follower_updates(db: Session, influencer: Influencer) -> List[FollowerUpdate]:
    return crud_profile.get_follower_updates_for_influencer(db, influencer.id)


def get_paginated_follower_updates(db: Session, page: int, size: int, status_filter: str | None) -> PaginatedFollowerUpdates:
    skip = (page - 1) * size
    items = crud_profile.get_follower_updates(db, skip=skip, limit=size, status=status_filter)
    total_items = crud_profile.count_follower_updates(db, status=status_filter)
    total_pages = math.ceil(total_items / size) if total_items > 0 else 1
    return PaginatedFollowerUpdates(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        size=size,
        items=items,
    )


def process_follower_update(
    db: Session, update_id: int, action: str, admin: User, admin_notes: str | None = None
) -> FollowerUpdate:
    """Approve applies the requested count and recalculates the tier; reject only closes the request."""
    follower_update = crud_profile.get_follower_update(db, update_id)
    if not follower_update:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Follower update not found")
    if follower_update.status != "pending":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Follower update has already been processed")

    influencer = follower_update.influencer
    follower_update.status = "approved" if action == "approve" else "rejected"
    follower_update.admin_notes = admin_notes
    follower_update.processed_by = admin.id
    follower_update.processed_at = utcnow()

    if action == "approve":
        setattr(influencer, f"{follower_update.platform}_followers", follower_update.requested_count)
        old_tier = influencer.tier
        new_tier = recalculate_tier(influencer)
        logger.info(f"Influencer {influencer.id} tier {old_tier} -> {new_tier} after follower update {update_id}")

    db.commit()
    db.refresh(follower_update)

    notification_service.notify(
        db,
        user_id=influencer.user_id,
        type=f"follower_update_{follower_update.status}",
        title=f"Follower update {follower_update.status}",
        message=(
            f"Your {follower_update.platform} follower count update to {follower_update.requested_count} "
            f"was {follower_update.status}." + (f" Notes: {admin_notes}" if admin_notes else "")
        ),
        related_entity_id=follower_update.id,
    )
    return follower_update

