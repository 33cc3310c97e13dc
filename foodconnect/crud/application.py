# foodconnect/crud/application.py
from typing import Any, Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from foodconnect.models.campaign import Application, Campaign


def get_application(db: Session, application_id: int) -> Application | None:
    return db.query(Application).filter(Application.id == application_id).first()

def get_application_for(db: Session, campaign_id: int, influencer_id: int) -> Application | None:
    return db.query(Application).filter_by(campaign_id=campaign_id, influencer_id=influencer_id).first()

def create_application(db: Session, campaign_id: int, influencer_id: int, data: Dict[str, Any]) -> Application:
    db_application = Application(campaign_id=campaign_id, influencer_id=influencer_id, **data)
    db.add(db_application)
    db.commit()
    db.refresh(db_application)
    return db_application

def count_applications(db: Session, campaign_id: int, status: str | None = None) -> int:
    query = db.query(func.count(Application.id)).filter(Application.campaign_id == campaign_id)
    if status:
        query = query.filter(Application.status == status)
    return query.scalar()

def get_campaign_applications(db: Session, campaign_id: int, status: str | None = None) -> List[Application]:
    query = db.query(Application).filter(Application.campaign_id == campaign_id)
    if status and status != "all":
        query = query.filter(Application.status == status)
    return query.order_by(Application.created_at.desc(), Application.id.desc()).all()

def get_influencer_applications(
    db: Session, influencer_id: int, skip: int = 0, limit: int = 20, status: str | None = None
) -> List[Application]:
    query = db.query(Application).filter(Application.influencer_id == influencer_id)
    if status and status != "all":
        query = query.filter(Application.status == status)
    return query.order_by(Application.created_at.desc(), Application.id.desc()).offset(skip).limit(limit).all()

def count_influencer_applications(db: Session, influencer_id: int, status: str | None = None) -> int:
    query = db.query(func.count(Application.id)).filter(Application.influencer_id == influencer_id)
    if status and status != "all":
        query = query.filter(Application.status == status)
    return query.scalar()

def get_influencer_statuses(db: Session, influencer_id: int, campaign_ids: List[int]) -> Dict[int, str]:
    """Maps campaign_id to this influencer's application status."""
    if not campaign_ids:
        return {}
    rows = (
        db.query(Application.campaign_id, Application.status)
        .filter(Application.influencer_id == influencer_id, Application.campaign_id.in_(campaign_ids))
        .all()
    )
    return {campaign_id: status for campaign_id, status in rows}

def count_applications_by_status(db: Session) -> Dict[str, int]:
    rows = db.query(Application.status, func.count(Application.id)).group_by(Application.status).all()
    return {status: count for status, count in rows}

def get_restaurant_applications(db: Session, restaurant_id: int) -> List[Application]:
    """All applications across the restaurant's campaigns, newest first."""
    return (
        db.query(Application)
        .join(Campaign, Application.campaign_id == Campaign.id)
        .filter(Campaign.restaurant_id == restaurant_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )

def has_applied(db: Session, campaign_id: int, influencer_id: int) -> bool:
    return db.query(Application.id).filter_by(campaign_id=campaign_id, influencer_id=influencer_id).first() is not None
