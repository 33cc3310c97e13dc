# foodconnect/services/notification.py
import logging
import math

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from foodconnect.crud import notification as crud_notification
from foodconnect.models.user import User
from foodconnect.schemas.notification import PaginatedNotifications

logger = logging.getLogger(__name__)


def notify(
    db: Session,
    user_id: int,
    type: str,
    title: str,
    message: str | None = None,
    related_entity_id: int | str | None = None,
    action_url: str | None = None,
):
    """
    Creates an in-app notification. A failure here is logged and never
    breaks the operation that triggered it.
    """
    try:
        crud_notification.create_notification(
            db,
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            related_entity_id=str(related_entity_id) if related_entity_id is not None else None,
            action_url=action_url,
        )
        logger.info(f"Notification '{type}' created for user {user_id}.")
    except Exception:
        logger.error(f"Failed to create notification '{type}' for user {user_id}", exc_info=True)
        db.rollback()


def get_paginated(db: Session, user: User, page: int, size: int, unread_only: bool) -> PaginatedNotifications:
    """Builds the paginated notifications response."""
    skip = (page - 1) * size

    notifications = crud_notification.get_notifications(
        db, user_id=user.id, skip=skip, limit=size, unread_only=unread_only
    )
    total_items = crud_notification.count_notifications(db, user_id=user.id, unread_only=unread_only)
    total_pages = math.ceil(total_items / size) if total_items > 0 else 1

    return PaginatedNotifications(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        size=size,
        items=notifications
    )

def mark_as_read(db: Session, user: User, notification_id: int):
    notification = crud_notification.mark_notification_as_read(db, user_id=user.id, notification_id=notification_id)
    if notification is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return notification

def mark_all_as_read(db: Session, user: User) -> int:
    return crud_notification.mark_all_notifications_as_read(db, user_id=user.id)
