# foodconnect/routers/notifications.py

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_current_user, get_db
from foodconnect.models.user import User
from foodconnect.schemas.notification import PaginatedNotifications
from foodconnect.services import notification as notification_service

router = APIRouter()


@router.get("/notifications", response_model=PaginatedNotifications)
def get_user_notifications(
    unread_only: bool = Query(False, description="Only unread notifications"),
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(20, ge=1, le=100, description="Notifications per page"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Paginated notifications of the current user.
    Use ?unread_only=true to get only new ones.
    """
    return notification_service.get_paginated(db, current_user, page, size, unread_only)


@router.post("/notifications/{notification_id}/read", status_code=204)
def read_notification(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    notification_service.mark_as_read(db, current_user, notification_id)
    return Response(status_code=204)


@router.post("/notifications/read-all", status_code=204)
def read_all_notifications(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Marks every notification of the user as read."""
    notification_service.mark_all_as_read(db, current_user)
    return Response(status_code=204)
