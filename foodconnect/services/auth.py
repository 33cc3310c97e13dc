# foodconnect/services/auth.py

import logging
from datetime import timedelta

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from foodconnect.core import locales
from foodconnect.core.config import settings
from foodconnect.core.security import create_access_token, generate_token, hash_password, verify_password
from foodconnect.crud import profile as crud_profile
from foodconnect.crud import user as crud_user
from foodconnect.models.user import User
from foodconnect.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserOut
from foodconnect.services import mail as mail_service
from foodconnect.services import settings as settings_service
from foodconnect.services.profiles import calculate_tier, serialize_profile
from foodconnect.utils.dates import utcnow

logger = logging.getLogger(__name__)

RESTAURANT_FIELDS = (
    "business_name", "description", "phone", "address", "google_maps_link",
    "website", "city", "state", "dietary_categories",
)
INFLUENCER_FIELDS = (
    "display_name", "phone", "bio", "location", "city", "state",
    "instagram_username", "instagram_link", "instagram_followers",
    "tiktok_username", "tiktok_link", "tiktok_followers",
    "xhs_username", "xhs_link", "xhs_followers",
    "youtube_channel", "youtube_followers",
)


def issue_token(user: User) -> str:
    return create_access_token(
        data={"sub": str(user.id), "type": user.user_type},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def register(db: Session, data: RegisterRequest) -> User:
    """
    Creates the account and its profile in one transaction.
    New accounts wait for admin approval unless auto-approval is switched on.
    """
    if crud_user.get_user_by_email(db, data.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=locales.ERROR_EMAIL_TAKEN)

    platform_settings = settings_service.get_platform_settings(db)
    auto_approve = (
        platform_settings.auto_approve_restaurants if data.user_type == "restaurant"
        else platform_settings.auto_approve_influencers
    )

    try:
        user = crud_user.create_user(
            db,
            email=data.email,
            password_hash=hash_password(data.password),
            user_type=data.user_type,
            status="approved" if auto_approve else "pending",
            commit=False,
        )
        user.email_verification_token = generate_token()
        user.email_verification_expires = utcnow() + timedelta(hours=settings.EMAIL_VERIFICATION_EXPIRE_HOURS)

        if data.user_type == "restaurant":
            profile_data = data.model_dump(include=set(RESTAURANT_FIELDS))
            profile_data["dietary_categories"] = profile_data.get("dietary_categories") or []
            crud_profile.create_restaurant(db, user.id, profile_data, commit=False)
        else:
            profile_data = data.model_dump(include=set(INFLUENCER_FIELDS))
            profile_data["tier"] = calculate_tier(max(
                data.instagram_followers, data.tiktok_followers, data.xhs_followers, data.youtube_followers
            ))
            crud_profile.create_influencer(db, user.id, profile_data, commit=False)

        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Registration race for email {data.email}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=locales.ERROR_EMAIL_TAKEN)

    db.refresh(user)
    logger.info(f"New {user.user_type} registered: user {user.id} ({user.email}), status '{user.status}'")
    mail_service.send_verification_email(user.email, user.email_verification_token)
    return user


def login(db: Session, data: LoginRequest) -> LoginResponse:
    user = crud_user.get_user_by_email(db, data.email)
    if not user or not verify_password(data.password, user.password_hash):
        logger.warning(f"Failed login attempt for {data.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=locales.ERROR_INVALID_CREDENTIALS)

    if user.status in locales.LOGIN_STATUS_ERRORS:
        logger.info(f"Login blocked for user {user.id}: status '{user.status}'")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=locales.LOGIN_STATUS_ERRORS[user.status])

    user.last_login = utcnow()
    db.commit()
    db.refresh(user)

    logger.info(f"User {user.id} logged in.")
    return LoginResponse(
        access_token=issue_token(user),
        user=UserOut.model_validate(user),
        profile=serialize_profile(user),
    )


def verify_email(db: Session, token: str) -> User:
    user = crud_user.get_user_by_verification_token(db, token)
    if not user or not user.email_verification_expires or user.email_verification_expires < utcnow():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=locales.ERROR_INVALID_TOKEN)

    user.email_verified = True
    user.email_verification_token = None
    user.email_verification_expires = None
    db.commit()
    logger.info(f"User {user.id} verified email.")
    return user


def forgot_password(db: Session, email: str):
    user = crud_user.get_user_by_email(db, email)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No account found with this email address")

    user.password_reset_token = generate_token()
    user.password_reset_expires = utcnow() + timedelta(hours=settings.PASSWORD_RESET_EXPIRE_HOURS)
    db.commit()
    logger.info(f"Password reset requested for user {user.id}.")
    mail_service.send_password_reset_email(user.email, user.password_reset_token)


def reset_password(db: Session, token: str, new_password: str) -> User:
    user = crud_user.get_user_by_reset_token(db, token)
    if not user or not user.password_reset_expires or user.password_reset_expires < utcnow():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=locales.ERROR_INVALID_TOKEN)

    user.password_hash = hash_password(new_password)
    user.password_reset_token = None
    user.password_reset_expires = None
    db.commit()
    logger.info(f"User {user.id} reset password.")
    return user


def ensure_default_admin(db: Session) -> User | None:
    """Creates the admin account from ADMIN_EMAIL / ADMIN_PASSWORD if it does not exist yet."""
    if not settings.ADMIN_PASSWORD:
        logger.info("ADMIN_PASSWORD is not set, skipping default admin creation.")
        return None

    admin = crud_user.get_user_by_email(db, settings.ADMIN_EMAIL)
    if admin:
        return admin

    admin = crud_user.create_user(
        db,
        email=settings.ADMIN_EMAIL,
        password_hash=hash_password(settings.ADMIN_PASSWORD),
        user_type="admin",
        status="active",
        email_verified=True,
    )
    logger.info(f"Default admin account created: {admin.email}")
    return admin
