# foodconnect/routers/users.py
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_current_influencer, get_current_user, get_db
from foodconnect.models.influencer import Influencer
from foodconnect.models.user import User
from foodconnect.schemas.profile import FollowerUpdateOut, FollowerUpdateRequest
from foodconnect.schemas.user import MeResponse
from foodconnect.services import profiles as profile_service

router = APIRouter()


@router.get("/users/me", response_model=MeResponse)
def read_users_me(current_user: User = Depends(get_current_user)):
    return profile_service.get_me(current_user)


@router.put("/users/me/profile", response_model=MeResponse)
def update_my_profile(
    payload: Dict[str, Any] = Body(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Updates the profile of the current user.
    Only the fields allowed for the user's type are applied; follower counts
    go through follower update requests instead.
    """
    return profile_service.update_profile(db, current_user, payload)


# --- Follower updates ---

@router.post("/users/me/follower-updates", response_model=FollowerUpdateOut, status_code=status.HTTP_201_CREATED)
def request_follower_update(
    data: FollowerUpdateRequest,
    influencer: Influencer = Depends(get_current_influencer),
    db: Session = Depends(get_db),
):
    return profile_service.request_follower_update(db, influencer, data)


@router.get("/users/me/follower-updates", response_model=List[FollowerUpdateOut])
def get_my_follower_updates(
    influencer: Influencer = Depends(get_current_influencer),
    db: Session = Depends(get_db),
):
    return profile_service.get_my_follower_updates(db, influencer)
