# foodconnect/services/message.py

import logging
from datetime import timedelta
from typing import Dict, List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from foodconnect.core import locales
from foodconnect.core.constants import ACTIVE_USER_STATUSES
from foodconnect.crud import application as crud_application
from foodconnect.crud import campaign as crud_campaign
from foodconnect.crud import message as crud_message
from foodconnect.crud import user as crud_user
from foodconnect.models.message import Message
from foodconnect.models.user import User
from foodconnect.schemas.message import (
    Contact,
    ContactUser,
    ConversationItem,
    ConversationOut,
    MessageCreate,
    MessageOut,
    MessageStats,
    StartConversationRequest,
    StartConversationResponse,
)
from foodconnect.utils.dates import utcnow

logger = logging.getLogger(__name__)

MAX_CONTACTS = 50


def conversation_id(user_a: int, user_b: int) -> str:
    return f"{min(user_a, user_b)}-{max(user_a, user_b)}"


def _contact(user: User) -> ContactUser:
    return ContactUser(id=user.id, user_type=user.user_type, display_name=user.display_name)


def can_message(db: Session, sender: User, receiver: User, campaign_id: int | None = None) -> bool:
    """
    Admins can message anyone. Inside a campaign one side must own it or have applied to it;
    outside a campaign both accounts must be approved.
    """
    if sender.user_type == "admin" or receiver.user_type == "admin":
        return True

    if campaign_id is not None:
        campaign = crud_campaign.get_campaign(db, campaign_id)
        if not campaign:
            return False
        for user in (sender, receiver):
            if user.user_type == "restaurant" and user.restaurant and user.restaurant.id == campaign.restaurant_id:
                return True
            if user.user_type == "influencer" and user.influencer and crud_application.has_applied(
                db, campaign.id, user.influencer.id
            ):
                return True
        return False

    return sender.status in ACTIVE_USER_STATUSES and receiver.status in ACTIVE_USER_STATUSES


def _get_other_user(db: Session, user: User, other_user_id: int) -> User:
    if other_user_id == user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot message yourself")
    other_user = crud_user.get_user_by_id(db, other_user_id)
    if not other_user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_USER_NOT_FOUND)
    return other_user


def send_message(db: Session, sender: User, data: MessageCreate) -> Message:
    receiver = _get_other_user(db, sender, data.receiver_id)
    if not can_message(db, sender, receiver, data.campaign_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not authorized to message this user",
        )
    message = crud_message.create_message(db, {
        "sender_id": sender.id,
        "receiver_id": receiver.id,
        "campaign_id": data.campaign_id,
        "application_id": data.application_id,
        "message": data.message,
        "attachment_url": data.attachment_url,
    })
    logger.info(f"User {sender.id} sent message {message.id} to user {receiver.id}.")
    return message


def start_conversation(db: Session, user: User, data: StartConversationRequest) -> StartConversationResponse:
    other_user = _get_other_user(db, user, data.user_id)
    if not can_message(db, user, other_user, data.campaign_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not authorized to start this conversation",
        )

    message = None
    text = (data.message or "").strip()
    if text:
        message = crud_message.create_message(db, {
            "sender_id": user.id,
            "receiver_id": other_user.id,
            "campaign_id": data.campaign_id,
            "message": text,
        })
        logger.info(f"User {user.id} started a conversation with user {other_user.id}.")

    return StartConversationResponse(
        conversation_id=conversation_id(user.id, other_user.id),
        other_user=_contact(other_user),
        message=MessageOut.model_validate(message) if message else None,
    )


def get_conversation(db: Session, user: User, other_user_id: int, campaign_id: int | None = None) -> ConversationOut:
    """Chronological messages with another user; opening the conversation marks their messages as read."""
    other_user = _get_other_user(db, user, other_user_id)
    messages = crud_message.get_conversation(db, user.id, other_user.id, campaign_id=campaign_id)
    marked = crud_message.mark_conversation_read(db, user.id, other_user.id, campaign_id=campaign_id)
    if marked:
        for message in messages:
            db.refresh(message)
    return ConversationOut(
        conversation_id=conversation_id(user.id, other_user.id),
        other_user=_contact(other_user),
        messages=messages,
    )


def get_conversations(db: Session, user: User) -> List[ConversationItem]:
    grouped: Dict[int, ConversationItem] = {}
    for message in crud_message.get_user_messages(db, user.id):
        other = message.receiver if message.sender_id == user.id else message.sender
        item = grouped.get(other.id)
        if item is None:
            item = ConversationItem(
                conversation_id=conversation_id(user.id, other.id),
                other_user=_contact(other),
                last_message=MessageOut.model_validate(message),
                unread_count=0,
            )
            grouped[other.id] = item
        if message.receiver_id == user.id and message.status != "read":
            item.unread_count += 1
    # Messages come newest first, so insertion order is already by last activity
    return list(grouped.values())


def mark_read(db: Session, user: User, other_user_id: int, campaign_id: int | None = None) -> int:
    marked = crud_message.mark_conversation_read(db, user.id, other_user_id, campaign_id=campaign_id)
    logger.info(f"User {user.id} marked {marked} messages from user {other_user_id} as read.")
    return marked


def unread_count(db: Session, user: User) -> int:
    return crud_message.count_unread(db, user.id)


def search_messages(db: Session, user: User, query_text: str) -> List[Message]:
    query_text = (query_text or "").strip()
    if len(query_text) < 2:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query must be at least 2 characters",
        )
    return crud_message.search_messages(db, user.id, query_text)


def delete_message(db: Session, user: User, message_id: int):
    message = crud_message.get_message(db, message_id)
    if not message:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_MESSAGE_NOT_FOUND)
    if message.sender_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only delete your own messages")
    crud_message.delete_message(db, message)
    logger.info(f"User {user.id} deleted message {message_id}.")


def get_stats(db: Session, user: User) -> MessageStats:
    counterparts = {
        m.receiver_id if m.sender_id == user.id else m.sender_id
        for m in crud_message.get_user_messages(db, user.id)
    }
    active = crud_message.get_counterparts_since(db, user.id, utcnow() - timedelta(days=7))
    return MessageStats(
        total_conversations=len(counterparts),
        unread_messages=crud_message.count_unread(db, user.id),
        active_conversations=len(active),
    )


def get_contacts(db: Session, user: User, search: str | None = None) -> List[Contact]:
    """
    Restaurants see influencers who applied to their campaigns,
    influencers see restaurants they applied to. One entry per person,
    tagged with the most recent campaign.
    """
    contacts: Dict[int, Contact] = {}
    if user.user_type == "restaurant" and user.restaurant:
        for application in crud_application.get_restaurant_applications(db, user.restaurant.id):
            other = application.influencer.user
            if other.id not in contacts:
                contacts[other.id] = Contact(
                    id=other.id,
                    user_type=other.user_type,
                    display_name=other.display_name,
                    campaign_id=application.campaign_id,
                    campaign_title=application.campaign_title,
                )
    elif user.user_type == "influencer" and user.influencer:
        applications = crud_application.get_influencer_applications(db, user.influencer.id, limit=None)
        for application in applications:
            other = application.campaign.restaurant.user
            if other.id not in contacts:
                contacts[other.id] = Contact(
                    id=other.id,
                    user_type=other.user_type,
                    display_name=other.display_name,
                    campaign_id=application.campaign_id,
                    campaign_title=application.campaign_title,
                )

    result = list(contacts.values())
    if search:
        needle = search.lower()
        result = [c for c in result if needle in c.display_name.lower()]
    return result[:MAX_CONTACTS]
