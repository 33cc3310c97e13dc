# foodconnect/routers/content.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_current_influencer, get_current_restaurant, get_current_user, get_db
from foodconnect.models.influencer import Influencer
from foodconnect.models.restaurant import Restaurant
from foodconnect.models.user import User
from foodconnect.schemas.content import (
    ContentCreate,
    ContentDetail,
    ContentOut,
    ContentPosted,
    ContentReview,
    ContentUpdate,
    PaginatedContent,
    UploadResponse,
)
from foodconnect.services import content as content_service
from foodconnect.services import storage as storage_service

router = APIRouter()


@router.post("/content/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
):
    """Uploads an image or video (up to 100 MB) and returns its public URL."""
    return await storage_service.save_upload(file)


@router.post("/content", response_model=ContentOut, status_code=status.HTTP_201_CREATED)
def submit_content(
    data: ContentCreate,
    influencer: Influencer = Depends(get_current_influencer),
    db: Session = Depends(get_db),
):
    return content_service.submit_content(db, influencer, data)


@router.get("/content/influencer", response_model=PaginatedContent)
def get_influencer_content(
    status_filter: Optional[str] = Query(None, alias="status"),
    campaign_id: Optional[int] = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    influencer: Influencer = Depends(get_current_influencer),
    db: Session = Depends(get_db),
):
    return content_service.list_content(
        db, page, size, influencer_id=influencer.id, status_filter=status_filter, campaign_id=campaign_id
    )


@router.get("/content/restaurant", response_model=PaginatedContent)
def get_restaurant_content(
    status_filter: Optional[str] = Query(None, alias="status"),
    campaign_id: Optional[int] = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    return content_service.list_content(
        db, page, size, restaurant_id=restaurant.id, status_filter=status_filter, campaign_id=campaign_id
    )


@router.get("/content/{content_id}", response_model=ContentDetail)
def get_content(
    content_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return content_service.get_content_detail(db, content_id, current_user)


@router.put("/content/{content_id}", response_model=ContentOut)
def update_content(
    content_id: int,
    data: ContentUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return content_service.update_content(db, content_id, current_user, data)


@router.post("/content/{content_id}/review", response_model=ContentOut)
def review_content(
    content_id: int,
    data: ContentReview,
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    return content_service.review_content(db, content_id, restaurant, data)


@router.post("/content/{content_id}/posted", response_model=ContentOut)
def mark_content_posted(
    content_id: int,
    data: ContentPosted,
    influencer: Influencer = Depends(get_current_influencer),
    db: Session = Depends(get_db),
):
    return content_service.mark_posted(db, content_id, influencer, data)
