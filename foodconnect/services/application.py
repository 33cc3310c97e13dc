# foodconnect/services/application.py

import logging
import math
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from foodconnect.core import locales
from foodconnect.crud import application as crud_application
from foodconnect.crud import campaign as crud_campaign
from foodconnect.models.campaign import Application
from foodconnect.models.influencer import Influencer
from foodconnect.models.restaurant import Restaurant
from foodconnect.models.user import User
from foodconnect.schemas.application import ApplicationCreate, PaginatedApplications
from foodconnect.services import notification as notification_service
from foodconnect.services.campaign import get_owned_campaign
from foodconnect.utils.dates import utcnow

logger = logging.getLogger(__name__)


def apply_to_campaign(db: Session, influencer: Influencer, data: ApplicationCreate) -> Application:
    if influencer.user.status not in ("approved", "active"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Your account must be approved before applying")

    campaign = crud_campaign.get_campaign(db, data.campaign_id)
    if not campaign:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_CAMPAIGN_NOT_FOUND)
    if campaign.status != "published":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Campaign is not accepting applications")
    if campaign.deadline is not None and campaign.deadline <= utcnow():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Campaign deadline has passed")
    if crud_application.get_application_for(db, campaign.id, influencer.id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You have already applied to this campaign")
    if campaign.target_tiers and influencer.tier not in campaign.target_tiers:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"This campaign is looking for {', '.join(campaign.target_tiers)} influencers",
        )

    try:
        application = crud_application.create_application(
            db,
            campaign_id=campaign.id,
            influencer_id=influencer.id,
            data=data.model_dump(exclude={"campaign_id"}),
        )
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You have already applied to this campaign")

    logger.info(f"Influencer {influencer.id} applied to campaign {campaign.id} (application {application.id}).")
    notification_service.notify(
        db,
        user_id=campaign.restaurant.user_id,
        type="application_received",
        title="New campaign application",
        message=f"{influencer.display_name} applied to your campaign '{campaign.title}'.",
        related_entity_id=application.id,
        action_url=f"/campaigns/{campaign.id}",
    )
    return application


def process_application(db: Session, application_id: int, restaurant: Restaurant, action: str) -> Application:
    """Accept or reject a pending application on one of the restaurant's campaigns."""
    application = crud_application.get_application(db, application_id)
    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_APPLICATION_NOT_FOUND)
    campaign = get_owned_campaign(db, application.campaign_id, restaurant)

    if application.status != "pending":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Application has already been {application.status}",
        )

    if action == "accept":
        accepted = crud_application.count_applications(db, campaign.id, status="accepted")
        if accepted >= campaign.max_influencers:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Campaign already has the maximum of {campaign.max_influencers} accepted influencers",
            )
        application.status = "accepted"
    else:
        application.status = "rejected"
    application.responded_at = utcnow()
    db.commit()
    db.refresh(application)

    logger.info(f"Application {application.id} {application.status} by restaurant {restaurant.id}.")
    notification_service.notify(
        db,
        user_id=application.influencer.user_id,
        type=f"application_{application.status}",
        title=f"Application {application.status}",
        message=f"Your application to '{campaign.title}' has been {application.status}.",
        related_entity_id=application.id,
        action_url=f"/applications/{application.id}",
    )
    return application


def get_application(db: Session, application_id: int, user: User) -> Application:
    application = crud_application.get_application(db, application_id)
    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_APPLICATION_NOT_FOUND)

    allowed = (
        user.user_type == "admin"
        or (user.user_type == "influencer" and application.influencer.user_id == user.id)
        or (user.user_type == "restaurant" and application.campaign.restaurant.user_id == user.id)
    )
    if not allowed:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=locales.ERROR_ACCESS_DENIED)
    return application


def get_my_applications(
    db: Session, influencer: Influencer, page: int, size: int, status_filter: str | None = None
) -> PaginatedApplications:
    skip = (page - 1) * size
    applications = crud_application.get_influencer_applications(
        db, influencer.id, skip=skip, limit=size, status=status_filter
    )
    total_items = crud_application.count_influencer_applications(db, influencer.id, status=status_filter)
    total_pages = math.ceil(total_items / size) if total_items > 0 else 1
    return PaginatedApplications(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        size=size,
        items=applications,
    )


def get_campaign_applications(
    db: Session, campaign_id: int, restaurant: Restaurant, status_filter: str | None = None
) -> List[Application]:
    campaign = get_owned_campaign(db, campaign_id, restaurant)
    return crud_application.get_campaign_applications(db, campaign.id, status=status_filter)
