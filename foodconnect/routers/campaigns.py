# foodconnect/routers/campaigns.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from foodconnect.dependencies import (
    get_current_restaurant,
    get_current_user,
    get_db,
    get_optional_current_user,
)
from foodconnect.models.restaurant import Restaurant
from foodconnect.models.user import User
from foodconnect.schemas.application import ApplicationOut
from foodconnect.schemas.campaign import (
    CampaignCreate,
    CampaignDetail,
    CampaignDraft,
    CampaignFormData,
    CampaignOut,
    CampaignUpdate,
    PaginatedBrowseCampaigns,
    PaginatedCampaigns,
)
from foodconnect.services import application as application_service
from foodconnect.services import campaign as campaign_service

router = APIRouter()


@router.get("/campaigns/form-data", response_model=CampaignFormData)
def get_form_data(db: Session = Depends(get_db)):
    """Reference lists and limits for the campaign form."""
    return campaign_service.get_form_data(db)


@router.get("/campaigns/browse", response_model=PaginatedBrowseCampaigns)
def browse_campaigns(
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    dietary_category: Optional[str] = Query(None),
    target_tier: Optional[str] = Query(None),
    min_budget: Optional[float] = Query(None, ge=0),
    max_budget: Optional[float] = Query(None, ge=0),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
):
    """
    Published campaigns that are still open.
    Influencers also get their application status and whether they can apply.
    """
    return campaign_service.browse_campaigns(
        db,
        current_user,
        page,
        size,
        city=city,
        state=state,
        dietary_category=dietary_category,
        target_tier=target_tier,
        min_budget=min_budget,
        max_budget=max_budget,
        search=search,
    )


@router.get("/campaigns/my", response_model=PaginatedCampaigns)
def get_my_campaigns(
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    return campaign_service.get_restaurant_campaigns(db, restaurant, page, size, status_filter)


@router.post("/campaigns", response_model=CampaignOut, status_code=status.HTTP_201_CREATED)
def create_campaign(
    data: CampaignCreate,
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    return campaign_service.create_campaign(db, restaurant, data)


@router.post("/campaigns/draft", response_model=CampaignOut, status_code=status.HTTP_201_CREATED)
def save_draft(
    data: CampaignDraft,
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    return campaign_service.save_draft(db, restaurant, data)


@router.get("/campaigns/{campaign_id}", response_model=CampaignDetail)
def get_campaign(
    campaign_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return campaign_service.get_campaign_detail(db, campaign_id, current_user)


@router.put("/campaigns/{campaign_id}", response_model=CampaignOut)
def update_campaign(
    campaign_id: int,
    data: CampaignUpdate,
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    return campaign_service.update_campaign(db, campaign_id, restaurant, data)


@router.post("/campaigns/{campaign_id}/publish", response_model=CampaignOut)
def publish_campaign(
    campaign_id: int,
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    return campaign_service.change_status(db, campaign_id, restaurant, "published")


@router.post("/campaigns/{campaign_id}/close", response_model=CampaignOut)
def close_campaign(
    campaign_id: int,
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    return campaign_service.change_status(db, campaign_id, restaurant, "closed")


@router.get("/campaigns/{campaign_id}/applications", response_model=List[ApplicationOut])
def get_campaign_applications(
    campaign_id: int,
    status_filter: Optional[str] = Query(None, alias="status"),
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    return application_service.get_campaign_applications(db, campaign_id, restaurant, status_filter)
