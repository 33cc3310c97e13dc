# foodconnect/crud/user.py
from datetime import datetime
from typing import Dict, List

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from foodconnect.models.influencer import Influencer
from foodconnect.models.restaurant import Restaurant
from foodconnect.models.user import User


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()

def get_user_by_verification_token(db: Session, token: str) -> User | None:
    return db.query(User).filter(User.email_verification_token == token).first()

def get_user_by_reset_token(db: Session, token: str) -> User | None:
    return db.query(User).filter(User.password_reset_token == token).first()

def create_user(
    db: Session,
    email: str,
    password_hash: str,
    user_type: str,
    status: str = "pending",
    email_verified: bool = False,
    commit: bool = True,
) -> User:
    """Creates a user. With commit=False the row is only flushed, so the caller can add the profile in the same transaction."""
    db_user = User(
        email=email.strip().lower(),
        password_hash=password_hash,
        user_type=user_type,
        status=status,
        email_verified=email_verified,
    )
    db.add(db_user)
    if commit:
        db.commit()
        db.refresh(db_user)
    else:
        db.flush()
    return db_user


def _apply_user_filters(query, user_type: str | None, status: str | None, search: str | None):
    if user_type and user_type != "all":
        query = query.filter(User.user_type == user_type)
    if status and status != "all":
        query = query.filter(User.status == status)
    if search:
        search_query = f"%{search.strip()}%"
        query = (
            query.outerjoin(Restaurant, Restaurant.user_id == User.id)
            .outerjoin(Influencer, Influencer.user_id == User.id)
        )
        search_filter = [
            User.email.ilike(search_query),
            Restaurant.business_name.ilike(search_query),
            Influencer.display_name.ilike(search_query),
        ]
        if search.strip().isdigit():
            search_filter.append(User.id == int(search.strip()))
        query = query.filter(or_(*search_filter))
    return query


def get_users(
    db: Session,
    skip: int = 0,
    limit: int = 20,
    user_type: str | None = None,
    status: str | None = None,
    search: str | None = None,
) -> List[User]:
    """Paginated user list with filters and search."""
    query = _apply_user_filters(db.query(User), user_type, status, search)
    return query.order_by(User.id.desc()).offset(skip).limit(limit).all()


def count_users_with_filters(
    db: Session,
    user_type: str | None = None,
    status: str | None = None,
    search: str | None = None,
) -> int:
    query = _apply_user_filters(db.query(func.count(User.id)).select_from(User), user_type, status, search)
    return query.scalar()


def get_pending_users(db: Session, user_type: str) -> List[User]:
    return (
        db.query(User)
        .filter(User.user_type == user_type, User.status == "pending")
        .order_by(User.created_at.asc(), User.id.asc())
        .all()
    )


def count_all_users(db: Session) -> int:
    return db.query(User).count()

def count_users_by_status(db: Session) -> Dict[str, int]:
    rows = db.query(User.status, func.count(User.id)).group_by(User.status).all()
    return {status: count for status, count in rows}

def count_users_by_type(db: Session) -> Dict[str, int]:
    rows = db.query(User.user_type, func.count(User.id)).group_by(User.user_type).all()
    return {user_type: count for user_type, count in rows}

def count_pending_approvals(db: Session) -> int:
    return db.query(User).filter(User.status == "pending", User.user_type != "admin").count()


def clear_expired_tokens(db: Session, now: datetime) -> int:
    """Removes expired verification and reset tokens. Returns the number of users touched."""
    touched = 0
    expired_verification = db.query(User).filter(
        User.email_verification_token.isnot(None),
        User.email_verification_expires < now,
    ).all()
    for user in expired_verification:
        user.email_verification_token = None
        user.email_verification_expires = None
        touched += 1

    expired_reset = db.query(User).filter(
        User.password_reset_token.isnot(None),
        User.password_reset_expires < now,
    ).all()
    for user in expired_reset:
        user.password_reset_token = None
        user.password_reset_expires = None
        touched += 1

    db.commit()
    return touched
