# foodconnect/crud/profile.py
from typing import Any, Dict, List

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from foodconnect.models.influencer import FollowerUpdate, Influencer
from foodconnect.models.restaurant import Restaurant
from foodconnect.models.user import User

# --- Restaurants ---

def get_restaurant_by_id(db: Session, restaurant_id: int) -> Restaurant | None:
    return db.query(Restaurant).filter(Restaurant.id == restaurant_id).first()

def get_restaurant_by_user_id(db: Session, user_id: int) -> Restaurant | None:
    return db.query(Restaurant).filter(Restaurant.user_id == user_id).first()

def create_restaurant(db: Session, user_id: int, data: Dict[str, Any], commit: bool = True) -> Restaurant:
    db_restaurant = Restaurant(user_id=user_id, **data)
    db.add(db_restaurant)
    if commit:
        db.commit()
        db.refresh(db_restaurant)
    else:
        db.flush()
    return db_restaurant

def count_restaurants(db: Session) -> int:
    return db.query(Restaurant).count()

# --- Influencers ---

def get_influencer_by_id(db: Session, influencer_id: int) -> Influencer | None:
    return db.query(Influencer).filter(Influencer.id == influencer_id).first()

def get_influencer_by_user_id(db: Session, user_id: int) -> Influencer | None:
    return db.query(Influencer).filter(Influencer.user_id == user_id).first()

def create_influencer(db: Session, user_id: int, data: Dict[str, Any], commit: bool = True) -> Influencer:
    db_influencer = Influencer(user_id=user_id, **data)
    db.add(db_influencer)
    if commit:
        db.commit()
        db.refresh(db_influencer)
    else:
        db.flush()
    return db_influencer

def count_influencers(db: Session) -> int:
    return db.query(Influencer).count()


def _approved_influencers_query(db: Session, tier: str | None, city: str | None, state: str | None, search: str | None):
    query = (
        db.query(Influencer)
        .join(User, User.id == Influencer.user_id)
        .filter(User.status.in_(("approved", "active")))
    )
    if tier:
        query = query.filter(Influencer.tier == tier)
    if city:
        query = query.filter(Influencer.city.ilike(f"%{city}%"))
    if state:
        query = query.filter(Influencer.state == state)
    if search:
        search_query = f"%{search}%"
        query = query.filter(or_(
            Influencer.display_name.ilike(search_query),
            Influencer.bio.ilike(search_query),
            Influencer.instagram_username.ilike(search_query),
            Influencer.tiktok_username.ilike(search_query),
        ))
    return query


def search_influencers(
    db: Session,
    skip: int = 0,
    limit: int = 20,
    tier: str | None = None,
    city: str | None = None,
    state: str | None = None,
    search: str | None = None,
) -> List[Influencer]:
    query = _approved_influencers_query(db, tier, city, state, search)
    return query.order_by(Influencer.id.desc()).offset(skip).limit(limit).all()


def count_search_influencers(
    db: Session,
    tier: str | None = None,
    city: str | None = None,
    state: str | None = None,
    search: str | None = None,
) -> int:
    return _approved_influencers_query(db, tier, city, state, search).count()

# --- Follower updates ---

def create_follower_update(
    db: Session,
    influencer_id: int,
    platform: str,
    current_count: int,
    requested_count: int,
    proof_url: str | None = None,
) -> FollowerUpdate:
    db_update = FollowerUpdate(
        influencer_id=influencer_id,
        platform=platform,
        current_count=current_count,
        requested_count=requested_count,
        proof_url=proof_url,
    )
    db.add(db_update)
    db.commit()
    db.refresh(db_update)
    return db_update

def get_follower_update(db: Session, update_id: int) -> FollowerUpdate | None:
    return db.query(FollowerUpdate).filter(FollowerUpdate.id == update_id).first()

def get_pending_follower_update(db: Session, influencer_id: int, platform: str) -> FollowerUpdate | None:
    return db.query(FollowerUpdate).filter_by(
        influencer_id=influencer_id, platform=platform, status="pending"
    ).first()

def get_follower_updates_for_influencer(db: Session, influencer_id: int) -> List[FollowerUpdate]:
    return (
        db.query(FollowerUpdate)
        .filter(FollowerUpdate.influencer_id == influencer_id)
        .order_by(FollowerUpdate.created_at.desc(), FollowerUpdate.id.desc())
        .all()
    )

def get_follower_updates(db: Session, skip: int = 0, limit: int = 20, status: str | None = None) -> List[FollowerUpdate]:
    query = db.query(FollowerUpdate)
    if status and status != "all":
        query = query.filter(FollowerUpdate.status == status)
    return query.order_by(FollowerUpdate.created_at.desc(), FollowerUpdate.id.desc()).offset(skip).limit(limit).all()

def count_follower_updates(db: Session, status: str | None = None) -> int:
    query = db.query(func.count(FollowerUpdate.id))
    if status and status != "all":
        query = query.filter(FollowerUpdate.status == status)
    return query.scalar()
