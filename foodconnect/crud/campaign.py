# foodconnect/crud/campaign.py
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from foodconnect.models.campaign import Application, Campaign
from foodconnect.models.restaurant import Restaurant


def get_campaign(db: Session, campaign_id: int) -> Campaign | None:
    return db.query(Campaign).filter(Campaign.id == campaign_id).first()

def create_campaign(db: Session, restaurant_id: int, data: Dict[str, Any]) -> Campaign:
    db_campaign = Campaign(restaurant_id=restaurant_id, **data)
    db.add(db_campaign)
    db.commit()
    db.refresh(db_campaign)
    return db_campaign

def update_campaign(db: Session, campaign: Campaign, data: Dict[str, Any]) -> Campaign:
    for field, value in data.items():
        setattr(campaign, field, value)
    db.commit()
    db.refresh(campaign)
    return campaign


def get_restaurant_campaigns(
    db: Session, restaurant_id: int, skip: int = 0, limit: int = 20, status: str | None = None
) -> List[Campaign]:
    query = db.query(Campaign).filter(Campaign.restaurant_id == restaurant_id)
    if status and status != "all":
        query = query.filter(Campaign.status == status)
    return query.order_by(Campaign.created_at.desc(), Campaign.id.desc()).offset(skip).limit(limit).all()

def count_restaurant_campaigns(db: Session, restaurant_id: int, status: str | None = None) -> int:
    query = db.query(func.count(Campaign.id)).filter(Campaign.restaurant_id == restaurant_id)
    if status and status != "all":
        query = query.filter(Campaign.status == status)
    return query.scalar()


def get_open_campaigns(
    db: Session,
    now: datetime,
    city: str | None = None,
    state: str | None = None,
    min_budget: float | None = None,
    max_budget: float | None = None,
    search: str | None = None,
) -> List[Campaign]:
    """
    Published campaigns whose deadline has not passed.
    JSON list filters (dietary category, tier) are applied by the caller.
    """
    query = (
        db.query(Campaign)
        .join(Restaurant, Restaurant.id == Campaign.restaurant_id)
        .filter(Campaign.status == "published")
        .filter(or_(Campaign.deadline.is_(None), Campaign.deadline > now))
    )
    if city:
        query = query.filter(Restaurant.city.ilike(f"%{city}%"))
    if state:
        query = query.filter(Restaurant.state == state)
    if min_budget is not None:
        query = query.filter(Campaign.total_budget >= min_budget)
    if max_budget is not None:
        query = query.filter(Campaign.total_budget <= max_budget)
    if search:
        search_query = f"%{search}%"
        query = query.filter(or_(
            Campaign.title.ilike(search_query),
            Campaign.description.ilike(search_query),
            Restaurant.business_name.ilike(search_query),
        ))
    return query.order_by(Campaign.created_at.desc(), Campaign.id.desc()).all()


def _admin_campaigns_query(db: Session, status: str | None, restaurant_id: int | None, search: str | None):
    query = db.query(Campaign).join(Restaurant, Restaurant.id == Campaign.restaurant_id)
    if status and status != "all":
        query = query.filter(Campaign.status == status)
    if restaurant_id:
        query = query.filter(Campaign.restaurant_id == restaurant_id)
    if search:
        search_query = f"%{search}%"
        query = query.filter(or_(
            Campaign.title.ilike(search_query),
            Restaurant.business_name.ilike(search_query),
        ))
    return query

def get_all_campaigns(
    db: Session,
    skip: int = 0,
    limit: int = 20,
    status: str | None = None,
    restaurant_id: int | None = None,
    search: str | None = None,
) -> List[Campaign]:
    query = _admin_campaigns_query(db, status, restaurant_id, search)
    return query.order_by(Campaign.created_at.desc(), Campaign.id.desc()).offset(skip).limit(limit).all()

def count_all_campaigns(
    db: Session, status: str | None = None, restaurant_id: int | None = None, search: str | None = None
) -> int:
    return _admin_campaigns_query(db, status, restaurant_id, search).count()


def count_campaigns_by_status(db: Session) -> Dict[str, int]:
    rows = db.query(Campaign.status, func.count(Campaign.id)).group_by(Campaign.status).all()
    return {status: count for status, count in rows}


def get_expired_published_campaigns(db: Session, now: datetime) -> List[Campaign]:
    return db.query(Campaign).filter(
        Campaign.status == "published",
        Campaign.deadline.isnot(None),
        Campaign.deadline <= now,
    ).all()


def get_application_stats(db: Session, campaign_ids: List[int]) -> Dict[int, Dict[str, int]]:
    """Application counts per status for each campaign in one query."""
    stats: Dict[int, Dict[str, int]] = {}
    if not campaign_ids:
        return stats
    rows = (
        db.query(Application.campaign_id, Application.status, func.count(Application.id))
        .filter(Application.campaign_id.in_(campaign_ids))
        .group_by(Application.campaign_id, Application.status)
        .all()
    )
    for campaign_id, status, count in rows:
        bucket = stats.setdefault(campaign_id, {"total": 0, "pending": 0, "accepted": 0, "rejected": 0})
        bucket[status] = count
        bucket["total"] += count
    return stats
