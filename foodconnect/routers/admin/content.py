# foodconnect/routers/admin/content.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_db
from foodconnect.schemas.content import ContentStats, PaginatedContent
from foodconnect.services import content as content_service

router = APIRouter()


@router.get("/stats", response_model=ContentStats)
def get_content_stats(db: Session = Depends(get_db)):
    """[ADMIN] Submission counts and average review time."""
    return content_service.get_content_stats(db)


@router.get("/pending", response_model=PaginatedContent)
def get_pending_content(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return content_service.list_content(db, page, size, status_filter="pending")


@router.get("", response_model=PaginatedContent)
def get_all_content(
    status_filter: Optional[str] = Query(None, alias="status"),
    campaign_id: Optional[int] = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return content_service.list_content(db, page, size, status_filter=status_filter, campaign_id=campaign_id)
