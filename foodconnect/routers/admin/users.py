# foodconnect/routers/admin/users.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_admin_user, get_db
from foodconnect.models.user import User
from foodconnect.schemas.admin import (
    AdminUserListItem,
    ApprovalRequest,
    PaginatedAdminUsers,
    PendingApprovals,
    UserStatusUpdate,
)
from foodconnect.services import admin as admin_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=PaginatedAdminUsers)
def get_users_list(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    user_type: Optional[str] = Query(None, description="restaurant, influencer or admin"),
    status_filter: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Search by ID, email, business or display name"),
    db: Session = Depends(get_db),
):
    """
    [ADMIN] Paginated list of users with filters and search.
    """
    return admin_service.get_users(db, page, size, user_type=user_type, status_filter=status_filter, search=search)


@router.get("/pending", response_model=PendingApprovals)
def get_pending_approvals(db: Session = Depends(get_db)):
    """[ADMIN] Registrations waiting for a decision, with their profiles."""
    return admin_service.get_pending_approvals(db)


@router.get("/{user_id}", response_model=AdminUserListItem)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return admin_service.get_user(db, user_id)


@router.post("/{user_id}/approval", response_model=AdminUserListItem)
def process_approval(
    user_id: int,
    data: ApprovalRequest,
    admin_user: User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """
    [ADMIN] Approves or rejects a pending registration.
    The user is notified of the decision.
    """
    return admin_service.process_approval(db, user_id, data, admin_user)


@router.put("/{user_id}/status", response_model=AdminUserListItem)
def update_user_status(
    user_id: int,
    data: UserStatusUpdate,
    admin_user: User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """[ADMIN] Suspends or reactivates an account."""
    return admin_service.update_user_status(db, user_id, data, admin_user)
