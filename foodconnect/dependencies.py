# foodconnect/dependencies.py

import logging
from typing import Optional, Iterator
from contextlib import contextmanager

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from jose import JWTError, jwt

from foodconnect.core.config import settings
from foodconnect.core.constants import ACTIVE_USER_STATUSES
from foodconnect.core import locales
from foodconnect.db.session import SessionLocal
from foodconnect.models.influencer import Influencer
from foodconnect.models.restaurant import Restaurant
from foodconnect.models.user import User

# --- Logger ---
logger = logging.getLogger(__name__)

# --- Auth schemes ---
strict_bearer_scheme = HTTPBearer(auto_error=True)
optional_bearer_scheme = HTTPBearer(auto_error=False)

# --- DB session ---
def get_db_session_instance() -> Session:
    """Creates a new DB session."""
    return SessionLocal()

def get_db() -> Iterator[Session]:
    """
    Main FastAPI dependency for a DB session.
    A generator so that `Depends` closes the session after the request.
    """
    db = get_db_session_instance()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def get_db_context() -> Iterator[Session]:
    """
    Context manager for a DB session outside FastAPI (background jobs, scripts).
    """
    db = get_db_session_instance()
    try:
        yield db
    finally:
        db.close()

# --- Authentication ---

def _user_from_token(db: Session, token: str) -> Optional[User]:
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    user_id: str = payload.get("sub")
    if user_id is None:
        logger.warning("Token payload is missing 'sub' (user_id).")
        return None
    return db.query(User).filter(User.id == int(user_id)).first()


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(strict_bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    REQUIRED dependency.
    A valid token for an approved (or admin) account, otherwise 401/403.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        user = _user_from_token(db, credentials.credentials)
    except (JWTError, ValueError) as e:
        logger.warning(f"JWT Error during token decoding: {e}")
        raise credentials_exception

    if user is None:
        raise credentials_exception

    if user.user_type != "admin" and user.status not in ACTIVE_USER_STATUSES:
        logger.warning(f"User {user.id} with status '{user.status}' tried to access a protected endpoint.")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=locales.LOGIN_STATUS_ERRORS.get(user.status, locales.ERROR_ACCOUNT_NOT_ACTIVE),
        )

    request.state.user = user
    logger.debug(f"Authenticated user ID: {user.id} ({user.user_type})")
    return user


def get_optional_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    OPTIONAL dependency.
    The user for a valid token, None when the token is missing or invalid.
    """
    if not credentials:
        return None

    try:
        user = _user_from_token(db, credentials.credentials)
    except (JWTError, ValueError):
        logger.warning("Optional token is invalid.")
        return None

    if user and user.user_type != "admin" and user.status not in ACTIVE_USER_STATUSES:
        return None

    request.state.user = user
    return user


def get_admin_user(current_user: User = Depends(get_current_user)) -> User:
    """
    Guards admin endpoints.
    """
    if current_user.user_type != "admin":
        logger.warning(f"Permission denied for user {current_user.id}: not an admin.")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to access this resource."
        )
    return current_user


def get_current_restaurant(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Restaurant:
    """The restaurant profile of the current user; 403 for other user types."""
    if current_user.user_type != "restaurant":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only restaurants can perform this action")
    restaurant = db.query(Restaurant).filter(Restaurant.user_id == current_user.id).first()
    if restaurant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_RESTAURANT_PROFILE_MISSING)
    return restaurant


def get_current_influencer(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Influencer:
    """The influencer profile of the current user; 403 for other user types."""
    if current_user.user_type != "influencer":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only influencers can perform this action")
    influencer = db.query(Influencer).filter(Influencer.user_id == current_user.id).first()
    if influencer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_INFLUENCER_PROFILE_MISSING)
    return influencer
