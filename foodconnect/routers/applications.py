# foodconnect/routers/applications.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_current_influencer, get_current_restaurant, get_current_user, get_db
from foodconnect.models.influencer import Influencer
from foodconnect.models.restaurant import Restaurant
from foodconnect.models.user import User
from foodconnect.schemas.application import (
    ApplicationCreate,
    ApplicationOut,
    ApplicationProcess,
    PaginatedApplications,
)
from foodconnect.services import application as application_service

router = APIRouter()


@router.post("/applications", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def apply_to_campaign(
    data: ApplicationCreate,
    influencer: Influencer = Depends(get_current_influencer),
    db: Session = Depends(get_db),
):
    return application_service.apply_to_campaign(db, influencer, data)


@router.get("/applications/my", response_model=PaginatedApplications)
def get_my_applications(
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    influencer: Influencer = Depends(get_current_influencer),
    db: Session = Depends(get_db),
):
    return application_service.get_my_applications(db, influencer, page, size, status_filter)


@router.get("/applications/{application_id}", response_model=ApplicationOut)
def get_application(
    application_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return application_service.get_application(db, application_id, current_user)


@router.post("/applications/{application_id}/process", response_model=ApplicationOut)
def process_application(
    application_id: int,
    data: ApplicationProcess,
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    """Accept or reject an application on one of your campaigns."""
    return application_service.process_application(db, application_id, restaurant, data.action)
