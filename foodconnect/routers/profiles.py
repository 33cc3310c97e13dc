# foodconnect/routers/profiles.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_current_user, get_db
from foodconnect.models.user import User
from foodconnect.schemas.profile import InfluencerPublic, PaginatedInfluencers, RestaurantPublic
from foodconnect.services import profiles as profile_service

router = APIRouter()


def require_restaurant_or_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.user_type not in ("restaurant", "admin"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only restaurants can search influencers")
    return current_user


@router.get("/influencers", response_model=PaginatedInfluencers)
def search_influencers(
    tier: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Name, bio or social username"),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    current_user: User = Depends(require_restaurant_or_admin),
    db: Session = Depends(get_db),
):
    return profile_service.search_influencers(db, page, size, tier=tier, city=city, state=state, search=search)


@router.get("/influencers/{influencer_id}", response_model=InfluencerPublic)
def get_influencer(
    influencer_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return profile_service.get_influencer(db, influencer_id)


@router.get("/restaurants/{restaurant_id}", response_model=RestaurantPublic)
def get_restaurant(restaurant_id: int, db: Session = Depends(get_db)):
    return profile_service.get_restaurant(db, restaurant_id)
