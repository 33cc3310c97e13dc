# foodconnect/routers/admin/campaigns.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_db
from foodconnect.schemas.campaign import PaginatedCampaigns
from foodconnect.services import campaign as campaign_service

router = APIRouter()


@router.get("", response_model=PaginatedCampaigns)
def get_campaigns(
    status_filter: Optional[str] = Query(None, alias="status"),
    restaurant_id: Optional[int] = Query(None),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """[ADMIN] All campaigns with application statistics."""
    return campaign_service.get_admin_campaigns(
        db, page, size, status_filter=status_filter, restaurant_id=restaurant_id, search=search
    )
