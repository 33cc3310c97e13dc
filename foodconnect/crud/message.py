# foodconnect/crud/message.py
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import and_, func, or_, update
from sqlalchemy.orm import Session

from foodconnect.models.message import Message
from foodconnect.utils.dates import utcnow


def _between(user_a: int, user_b: int):
    return or_(
        and_(Message.sender_id == user_a, Message.receiver_id == user_b),
        and_(Message.sender_id == user_b, Message.receiver_id == user_a),
    )


def create_message(db: Session, data: Dict[str, Any]) -> Message:
    db_message = Message(**data)
    db.add(db_message)
    db.commit()
    db.refresh(db_message)
    return db_message

def get_message(db: Session, message_id: int) -> Message | None:
    return db.query(Message).filter(Message.id == message_id).first()

def delete_message(db: Session, message: Message):
    db.delete(message)
    db.commit()


def get_conversation(
    db: Session, user_id: int, other_user_id: int, campaign_id: int | None = None, limit: int = 200
) -> List[Message]:
    """Messages between two users, oldest first."""
    query = db.query(Message).filter(_between(user_id, other_user_id))
    if campaign_id is not None:
        query = query.filter(Message.campaign_id == campaign_id)
    latest = query.order_by(Message.created_at.desc(), Message.id.desc()).limit(limit).all()
    return list(reversed(latest))


def get_user_messages(db: Session, user_id: int) -> List[Message]:
    """Every message the user sent or received, newest first."""
    return (
        db.query(Message)
        .filter(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
        .order_by(Message.created_at.desc(), Message.id.desc())
        .all()
    )


def mark_conversation_read(db: Session, user_id: int, other_user_id: int, campaign_id: int | None = None) -> int:
    """Marks messages sent by other_user_id to user_id as read, only within one campaign when given."""
    conditions = [
        Message.sender_id == other_user_id,
        Message.receiver_id == user_id,
        Message.status != "read",
    ]
    if campaign_id is not None:
        conditions.append(Message.campaign_id == campaign_id)
    stmt = update(Message).where(*conditions).values(status="read", read_at=utcnow())
    result = db.execute(stmt)
    db.commit()
    return result.rowcount or 0


def count_unread(db: Session, user_id: int) -> int:
    return db.query(func.count(Message.id)).filter(
        Message.receiver_id == user_id, Message.status != "read"
    ).scalar()


def search_messages(db: Session, user_id: int, query_text: str, limit: int = 50) -> List[Message]:
    return (
        db.query(Message)
        .filter(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
        .filter(Message.message.ilike(f"%{query_text}%"))
        .order_by(Message.created_at.desc(), Message.id.desc())
        .limit(limit)
        .all()
    )


def get_counterparts_since(db: Session, user_id: int, since: datetime) -> set[int]:
    rows = db.query(Message.sender_id, Message.receiver_id).filter(
        or_(Message.sender_id == user_id, Message.receiver_id == user_id),
        Message.created_at >= since,
    ).all()
    return {receiver if sender == user_id else sender for sender, receiver in rows}
