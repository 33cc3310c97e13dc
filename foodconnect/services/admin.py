# foodconnect/services/admin.py

import logging
import math

from fastapi import HTTPException, status
from redis.asyncio import Redis
from redis.exceptions import RedisError
from sqlalchemy.orm import Session

from foodconnect.core import locales
from foodconnect.crud import application as crud_application
from foodconnect.crud import campaign as crud_campaign
from foodconnect.crud import content as crud_content
from foodconnect.crud import profile as crud_profile
from foodconnect.crud import user as crud_user
from foodconnect.models.user import User
from foodconnect.schemas.admin import (
    AdminDashboardStats,
    AdminUserListItem,
    ApprovalRequest,
    DashboardOverview,
    PaginatedAdminUsers,
    PendingApprovals,
    UserStatusUpdate,
)
from foodconnect.services import mail as mail_service
from foodconnect.services import notification as notification_service
from foodconnect.services import payment as payment_service
from foodconnect.services.profiles import serialize_profile
from foodconnect.utils.dates import utcnow

logger = logging.getLogger(__name__)

DASHBOARD_CACHE_KEY = "dashboard_stats"
DASHBOARD_CACHE_TTL = 300


def to_list_item(user: User) -> AdminUserListItem:
    return AdminUserListItem.model_validate({
        "id": user.id,
        "email": user.email,
        "user_type": user.user_type,
        "status": user.status,
        "email_verified": user.email_verified,
        "last_login": user.last_login,
        "created_at": user.created_at,
        "display_name": user.display_name,
        "profile": serialize_profile(user),
    })


def _build_dashboard_stats(db: Session) -> AdminDashboardStats:
    users_by_status = crud_user.count_users_by_status(db)
    users_by_type = crud_user.count_users_by_type(db)
    campaigns_by_status = crud_campaign.count_campaigns_by_status(db)
    applications_by_status = crud_application.count_applications_by_status(db)
    content_by_status = crud_content.count_contents_by_status(db)
    payment_stats = payment_service.get_payment_stats(db)

    overview = DashboardOverview(
        total_users=sum(users_by_status.values()),
        total_restaurants=users_by_type.get("restaurant", 0),
        total_influencers=users_by_type.get("influencer", 0),
        total_campaigns=sum(campaigns_by_status.values()),
        published_campaigns=campaigns_by_status.get("published", 0),
        total_applications=sum(applications_by_status.values()),
        pending_approvals=crud_user.count_pending_approvals(db),
        pending_follower_updates=crud_profile.count_follower_updates(db, status="pending"),
        pending_content_reviews=content_by_status.get("pending", 0),
        pending_payments=payment_stats.by_status.get("pending", 0),
    )
    return AdminDashboardStats(
        overview=overview,
        users_by_status=users_by_status,
        campaigns_by_status=campaigns_by_status,
        applications_by_status=applications_by_status,
        content_by_status=content_by_status,
        payments=payment_stats,
        generated_at=utcnow(),
    )


async def get_dashboard_stats(db: Session, redis: Redis) -> AdminDashboardStats:
    """Dashboard figures, served from Redis for five minutes after each calculation."""
    try:
        cached_data = await redis.get(DASHBOARD_CACHE_KEY)
    except RedisError:
        logger.warning("Redis unavailable, calculating dashboard stats without cache.")
        cached_data = None
    if cached_data:
        logger.info("Serving dashboard stats from cache.")
        return AdminDashboardStats.model_validate_json(cached_data)

    logger.info("Calculating fresh dashboard stats.")
    stats = _build_dashboard_stats(db)
    try:
        await redis.set(DASHBOARD_CACHE_KEY, stats.model_dump_json(), ex=DASHBOARD_CACHE_TTL)
    except RedisError:
        logger.warning("Failed to cache dashboard stats.", exc_info=True)
    return stats


async def clear_cache(redis: Redis) -> int:
    try:
        keys = [key async for key in redis.scan_iter(f"{DASHBOARD_CACHE_KEY}*")]
        if keys:
            await redis.delete(*keys)
    except RedisError:
        logger.error("Failed to clear the admin cache.", exc_info=True)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Cache is unavailable")
    logger.info(f"Admin cache clear removed {len(keys)} keys.")
    return len(keys)


# --- Users ---

def get_pending_approvals(db: Session) -> PendingApprovals:
    restaurants = [to_list_item(u) for u in crud_user.get_pending_users(db, "restaurant")]
    influencers = [to_list_item(u) for u in crud_user.get_pending_users(db, "influencer")]
    return PendingApprovals(
        restaurants=restaurants,
        influencers=influencers,
        total=len(restaurants) + len(influencers),
    )


def process_approval(db: Session, user_id: int, data: ApprovalRequest, admin: User) -> AdminUserListItem:
    user = crud_user.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_USER_NOT_FOUND)
    if user.status != "pending":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"User is not pending approval (current status: {user.status})",
        )

    approved = data.action == "approve"
    user.status = "approved" if approved else "rejected"
    profile = user.profile
    if profile is not None:
        profile.admin_notes = data.admin_notes
        profile.approved_by = admin.id
        profile.approved_at = utcnow()
    db.commit()
    db.refresh(user)
    logger.info(f"Admin {admin.id} {user.status} {user.user_type} account {user.id}.")

    mail_service.send_account_decision_email(user.email, approved, data.admin_notes)
    notification_service.notify(
        db,
        user_id=user.id,
        type=f"account_{user.status}",
        title="Account approved" if approved else "Account not approved",
        message=(
            "Your account has been approved. Welcome to FoodConnect!" if approved
            else f"Your registration was not approved. {data.admin_notes or ''}".strip()
        ),
    )
    return to_list_item(user)


def get_users(
    db: Session,
    page: int,
    size: int,
    user_type: str | None = None,
    status_filter: str | None = None,
    search: str | None = None,
) -> PaginatedAdminUsers:
    skip = (page - 1) * size
    users = crud_user.get_users(
        db, skip=skip, limit=size, user_type=user_type, status=status_filter, search=search
    )
    total_items = crud_user.count_users_with_filters(
        db, user_type=user_type, status=status_filter, search=search
    )
    total_pages = math.ceil(total_items / size) if total_items > 0 else 1
    return PaginatedAdminUsers(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        size=size,
        items=[to_list_item(u) for u in users],
    )


def get_user(db: Session, user_id: int) -> AdminUserListItem:
    user = crud_user.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_USER_NOT_FOUND)
    return to_list_item(user)


def update_user_status(db: Session, user_id: int, data: UserStatusUpdate, admin: User) -> AdminUserListItem:
    user = crud_user.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_USER_NOT_FOUND)
    if user.user_type == "admin":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot change status of an admin account")
    if data.status != "suspended" and user.status != "suspended":
        # Pending and rejected registrations are decided through the approval endpoint
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Only suspended accounts can be reactivated (current status: {user.status})",
        )

    old_status = user.status
    # Marketplace accounts are "approved" when active
    user.status = "suspended" if data.status == "suspended" else "approved"
    db.commit()
    db.refresh(user)
    logger.info(f"Admin {admin.id} changed user {user.id} status {old_status} -> {user.status}.")

    if user.status == "suspended":
        notification_service.notify(
            db,
            user_id=user.id,
            type="account_suspended",
            title="Account suspended",
            message=f"Your account has been suspended. Reason: {data.reason or 'not specified'}",
        )
    elif old_status == "suspended":
        notification_service.notify(
            db,
            user_id=user.id,
            type="account_reactivated",
            title="Account reactivated",
            message="Your account is active again.",
        )
    return to_list_item(user)
