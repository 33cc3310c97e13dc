# foodconnect/crud/notification.py
from datetime import timedelta
from typing import List

from sqlalchemy import and_, or_, update
from sqlalchemy.orm import Query, Session

from foodconnect.models.notification import Notification
from foodconnect.utils.dates import utcnow


def _for_user(db: Session, user_id: int, unread_only: bool = False) -> Query:
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        query = query.filter(Notification.is_read.is_(False))
    return query


def create_notification(
    db: Session,
    user_id: int,
    type: str,
    title: str,
    message: str | None = None,
    related_entity_id: str | None = None,
    action_url: str | None = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        related_entity_id=related_entity_id,
        action_url=action_url,
    )
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification


def get_notifications(
    db: Session, user_id: int, skip: int = 0, limit: int = 20, unread_only: bool = False
) -> List[Notification]:
    """Newest first."""
    return (
        _for_user(db, user_id, unread_only)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def count_notifications(db: Session, user_id: int, unread_only: bool = False) -> int:
    return _for_user(db, user_id, unread_only).count()


def mark_notification_as_read(db: Session, user_id: int, notification_id: int) -> Notification | None:
    """Returns None when the notification does not exist or belongs to someone else."""
    notification = _for_user(db, user_id).filter(Notification.id == notification_id).first()
    if notification is not None and not notification.is_read:
        notification.is_read = True
        db.commit()
        db.refresh(notification)
    return notification


def mark_all_notifications_as_read(db: Session, user_id: int) -> int:
    result = db.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        .values(is_read=True)
    )
    db.commit()
    return result.rowcount or 0


def delete_old_notifications(db: Session, read_older_than_days: int, any_older_than_days: int) -> int:
    """
    Deletes read notifications older than `read_older_than_days` and every
    notification older than `any_older_than_days`. Returns the number deleted.
    """
    now = utcnow()
    stale_read = and_(
        Notification.is_read.is_(True),
        Notification.created_at < now - timedelta(days=read_older_than_days),
    )
    expired = Notification.created_at < now - timedelta(days=any_older_than_days)

    deleted = db.query(Notification).filter(or_(stale_read, expired)).delete(synchronize_session=False)
    db.commit()
    return deleted
