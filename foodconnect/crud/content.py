# foodconnect/crud/content.py
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from foodconnect.models.content import ContentSubmission


def get_content(db: Session, content_id: int) -> ContentSubmission | None:
    return db.query(ContentSubmission).filter(ContentSubmission.id == content_id).first()

def get_active_content_for_application(db: Session, application_id: int) -> ContentSubmission | None:
    """Latest submission for the application that was not rejected."""
    return (
        db.query(ContentSubmission)
        .filter(ContentSubmission.application_id == application_id, ContentSubmission.status != "rejected")
        .first()
    )

def create_content(db: Session, data: Dict[str, Any]) -> ContentSubmission:
    db_content = ContentSubmission(**data)
    db.add(db_content)
    db.commit()
    db.refresh(db_content)
    return db_content

def update_content(db: Session, content: ContentSubmission, data: Dict[str, Any]) -> ContentSubmission:
    for field, value in data.items():
        setattr(content, field, value)
    db.commit()
    db.refresh(content)
    return content


def _party_query(db: Session, restaurant_id: int | None, influencer_id: int | None, status: str | None, campaign_id: int | None):
    query = db.query(ContentSubmission)
    if restaurant_id is not None:
        query = query.filter(ContentSubmission.restaurant_id == restaurant_id)
    if influencer_id is not None:
        query = query.filter(ContentSubmission.influencer_id == influencer_id)
    if campaign_id is not None:
        query = query.filter(ContentSubmission.campaign_id == campaign_id)
    if status and status != "all":
        query = query.filter(ContentSubmission.status == status)
    return query

def get_contents(
    db: Session,
    skip: int = 0,
    limit: int = 20,
    restaurant_id: int | None = None,
    influencer_id: int | None = None,
    status: str | None = None,
    campaign_id: int | None = None,
) -> List[ContentSubmission]:
    query = _party_query(db, restaurant_id, influencer_id, status, campaign_id)
    return query.order_by(ContentSubmission.created_at.desc(), ContentSubmission.id.desc()).offset(skip).limit(limit).all()

def count_contents(
    db: Session,
    restaurant_id: int | None = None,
    influencer_id: int | None = None,
    status: str | None = None,
    campaign_id: int | None = None,
) -> int:
    return _party_query(db, restaurant_id, influencer_id, status, campaign_id).count()

def count_contents_by_status(
    db: Session, restaurant_id: int | None = None, influencer_id: int | None = None
) -> Dict[str, int]:
    query = db.query(ContentSubmission.status, func.count(ContentSubmission.id))
    if restaurant_id is not None:
        query = query.filter(ContentSubmission.restaurant_id == restaurant_id)
    if influencer_id is not None:
        query = query.filter(ContentSubmission.influencer_id == influencer_id)
    rows = query.group_by(ContentSubmission.status).all()
    return {status: count for status, count in rows}

def count_contents_since(db: Session, since: datetime) -> int:
    return db.query(ContentSubmission).filter(ContentSubmission.created_at >= since).count()

def get_reviewed_contents(db: Session) -> List[ContentSubmission]:
    return db.query(ContentSubmission).filter(ContentSubmission.reviewed_at.isnot(None)).all()
