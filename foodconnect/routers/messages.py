# foodconnect/routers/messages.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_current_user, get_db
from foodconnect.models.user import User
from foodconnect.schemas.message import (
    Contact,
    ConversationItem,
    ConversationOut,
    MarkReadResult,
    MessageCreate,
    MessageOut,
    MessageStats,
    StartConversationRequest,
    StartConversationResponse,
    UnreadCount,
)
from foodconnect.services import message as message_service

router = APIRouter()


@router.post("/messages", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def send_message(
    data: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return message_service.send_message(db, current_user, data)


@router.post("/messages/start", response_model=StartConversationResponse)
def start_conversation(
    data: StartConversationRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return message_service.start_conversation(db, current_user, data)


@router.get("/messages/conversations", response_model=List[ConversationItem])
def get_conversations(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Latest message and unread count per person, most recent first."""
    return message_service.get_conversations(db, current_user)


@router.get("/messages/unread-count", response_model=UnreadCount)
def get_unread_count(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UnreadCount(unread_count=message_service.unread_count(db, current_user))


@router.get("/messages/search", response_model=List[MessageOut])
def search_messages(
    q: str = Query(..., description="At least 2 characters"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return message_service.search_messages(db, current_user, q)


@router.get("/messages/stats", response_model=MessageStats)
def get_message_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return message_service.get_stats(db, current_user)


@router.get("/messages/contacts", response_model=List[Contact])
def get_contacts(
    search: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return message_service.get_contacts(db, current_user, search)


@router.get("/messages/conversation/{user_id}", response_model=ConversationOut)
def get_conversation(
    user_id: int,
    campaign_id: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return message_service.get_conversation(db, current_user, user_id, campaign_id)


@router.post("/messages/conversation/{user_id}/read", response_model=MarkReadResult)
def mark_conversation_read(
    user_id: int,
    campaign_id: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MarkReadResult(marked_read=message_service.mark_read(db, current_user, user_id, campaign_id))


@router.delete("/messages/{message_id}", status_code=204)
def delete_message(
    message_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    message_service.delete_message(db, current_user, message_id)
    return Response(status_code=204)
