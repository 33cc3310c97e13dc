# foodconnect/services/content.py

import logging
import math
from datetime import timedelta

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from foodconnect.core import locales
from foodconnect.core.constants import CONTENT_PLATFORMS, CONTENT_STATUS_LABELS, CONTENT_WORKFLOW
from foodconnect.crud import application as crud_application
from foodconnect.crud import content as crud_content
from foodconnect.models.content import ContentSubmission
from foodconnect.models.influencer import Influencer
from foodconnect.models.restaurant import Restaurant
from foodconnect.models.user import User
from foodconnect.schemas.content import (
    ContentCreate,
    ContentDetail,
    ContentOut,
    ContentPosted,
    ContentReview,
    ContentStats,
    ContentSummary,
    ContentUpdate,
    PaginatedContent,
)
from foodconnect.services import notification as notification_service
from foodconnect.utils.dates import utcnow

logger = logging.getLogger(__name__)


def _get_content_or_404(db: Session, content_id: int) -> ContentSubmission:
    content = crud_content.get_content(db, content_id)
    if not content:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_CONTENT_NOT_FOUND)
    return content


def _is_party(content: ContentSubmission, user: User) -> bool:
    if user.user_type == "admin":
        return True
    if user.user_type == "influencer":
        return content.influencer.user_id == user.id
    if user.user_type == "restaurant":
        return content.restaurant.user_id == user.id
    return False


def _summary(db: Session, restaurant_id: int | None = None, influencer_id: int | None = None) -> ContentSummary:
    by_status = crud_content.count_contents_by_status(db, restaurant_id=restaurant_id, influencer_id=influencer_id)
    return ContentSummary(total=sum(by_status.values()), **by_status)


def submit_content(db: Session, influencer: Influencer, data: ContentCreate) -> ContentSubmission:
    application = crud_application.get_application(db, data.application_id)
    if not application or application.influencer_id != influencer.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_APPLICATION_NOT_FOUND)
    if application.status != "accepted":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Content can only be submitted for accepted applications",
        )
    if crud_content.get_active_content_for_application(db, application.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Content has already been submitted for this application",
        )

    content = crud_content.create_content(db, {
        "application_id": application.id,
        "campaign_id": application.campaign_id,
        "restaurant_id": application.campaign.restaurant_id,
        "influencer_id": influencer.id,
        "video_url": data.video_url,
        "description": data.description,
        "platforms": data.platforms,
    })
    logger.info(f"Influencer {influencer.id} submitted content {content.id} for application {application.id}.")

    notification_service.notify(
        db,
        user_id=content.restaurant.user_id,
        type="content_submitted",
        title="New content submitted",
        message=f"{influencer.display_name} submitted content for '{content.campaign_title}'.",
        related_entity_id=content.id,
        action_url=f"/content/{content.id}",
    )
    return content


def review_content(db: Session, content_id: int, restaurant: Restaurant, data: ContentReview) -> ContentSubmission:
    content = _get_content_or_404(db, content_id)
    if content.restaurant_id != restaurant.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=locales.ERROR_ACCESS_DENIED)
    if content.status != "pending":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Content has already been {content.status}",
        )

    content = crud_content.update_content(db, content, {
        "status": "approved" if data.action == "approve" else "rejected",
        "feedback": data.feedback,
        "reviewed_at": utcnow(),
    })
    logger.info(f"Content {content.id} {content.status} by restaurant {restaurant.id}.")

    message = f"Your content for '{content.campaign_title}' was {content.status}."
    if data.feedback:
        message += f" Feedback: {data.feedback}"
    notification_service.notify(
        db,
        user_id=content.influencer.user_id,
        type=f"content_{content.status}",
        title=f"Content {content.status}",
        message=message,
        related_entity_id=content.id,
        action_url=f"/content/{content.id}",
    )
    return content


def mark_posted(db: Session, content_id: int, influencer: Influencer, data: ContentPosted) -> ContentSubmission:
    content = _get_content_or_404(db, content_id)
    if content.influencer_id != influencer.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=locales.ERROR_ACCESS_DENIED)
    if content.status != "approved":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only approved content can be marked as posted",
        )

    changes = {"status": "posted", "posted_at": utcnow()}
    if data.platforms:
        changes["platforms"] = data.platforms
    content = crud_content.update_content(db, content, changes)
    logger.info(f"Content {content.id} marked as posted on {content.platforms}.")
    return content


def update_content(db: Session, content_id: int, user: User, data: ContentUpdate) -> ContentSubmission:
    content = _get_content_or_404(db, content_id)
    if user.user_type != "admin":
        if user.user_type != "influencer" or content.influencer.user_id != user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=locales.ERROR_ACCESS_DENIED)
        if content.status != "pending":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Content can only be edited while pending review",
            )

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No valid fields to update")
    return crud_content.update_content(db, content, changes)


def get_content_detail(db: Session, content_id: int, user: User) -> ContentDetail:
    content = _get_content_or_404(db, content_id)
    if not _is_party(content, user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=locales.ERROR_ACCESS_DENIED)
    return ContentDetail(
        content=ContentOut.model_validate(content),
        workflow=CONTENT_WORKFLOW,
        status_labels=CONTENT_STATUS_LABELS,
        platforms=CONTENT_PLATFORMS,
    )


def list_content(
    db: Session,
    page: int,
    size: int,
    restaurant_id: int | None = None,
    influencer_id: int | None = None,
    status_filter: str | None = None,
    campaign_id: int | None = None,
) -> PaginatedContent:
    skip = (page - 1) * size
    filters = {
        "restaurant_id": restaurant_id,
        "influencer_id": influencer_id,
        "status": status_filter,
        "campaign_id": campaign_id,
    }
    items = crud_content.get_contents(db, skip=skip, limit=size, **filters)
    total_items = crud_content.count_contents(db, **filters)
    total_pages = math.ceil(total_items / size) if total_items > 0 else 1
    return PaginatedContent(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        size=size,
        items=items,
        summary=_summary(db, restaurant_id=restaurant_id, influencer_id=influencer_id),
    )


def get_content_stats(db: Session) -> ContentStats:
    by_status = crud_content.count_contents_by_status(db)
    reviewed = crud_content.get_reviewed_contents(db)
    average_review_hours = None
    if reviewed:
        hours = [(c.reviewed_at - c.created_at).total_seconds() / 3600 for c in reviewed]
        average_review_hours = round(sum(hours) / len(hours), 2)
    return ContentStats(
        by_status=by_status,
        total=sum(by_status.values()),
        submitted_last_7_days=crud_content.count_contents_since(db, utcnow() - timedelta(days=7)),
        average_review_hours=average_review_hours,
    )
