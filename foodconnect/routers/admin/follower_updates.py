# foodconnect/routers/admin/follower_updates.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_admin_user, get_db
from foodconnect.models.user import User
from foodconnect.schemas.profile import AdminFollowerUpdateItem, FollowerUpdateProcess, PaginatedFollowerUpdates
from foodconnect.services import profiles as profile_service

router = APIRouter()


@router.get("", response_model=PaginatedFollowerUpdates)
def get_follower_updates(
    status_filter: Optional[str] = Query("pending", alias="status", description="pending, approved, rejected or all"),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """[ADMIN] Follower count change requests from influencers."""
    return profile_service.get_paginated_follower_updates(db, page, size, status_filter)


@router.post("/{update_id}/process", response_model=AdminFollowerUpdateItem)
def process_follower_update(
    update_id: int,
    data: FollowerUpdateProcess,
    admin_user: User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """
    [ADMIN] Approving applies the requested count and recalculates the tier.
    """
    return profile_service.process_follower_update(db, update_id, data.action, admin_user, data.admin_notes)
