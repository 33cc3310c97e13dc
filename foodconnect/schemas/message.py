# foodconnect/schemas/message.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MessageCreate(BaseModel):
    receiver_id: int
    message: str = Field(..., max_length=2000)
    campaign_id: Optional[int] = None
    application_id: Optional[int] = None
    attachment_url: Optional[str] = None

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Message cannot be empty")
        return v


class StartConversationRequest(BaseModel):
    user_id: int
    campaign_id: Optional[int] = None
    message: Optional[str] = Field(None, max_length=2000)


class MessageOut(BaseModel):
    id: int
    sender_id: int
    sender_name: Optional[str] = None
    receiver_id: int
    receiver_name: Optional[str] = None
    campaign_id: Optional[int] = None
    application_id: Optional[int] = None
    message: str
    attachment_url: Optional[str] = None
    status: str
    read_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ContactUser(BaseModel):
    id: int
    user_type: str
    display_name: str


class Contact(ContactUser):
    campaign_id: Optional[int] = None
    campaign_title: Optional[str] = None


class ConversationItem(BaseModel):
    conversation_id: str
    other_user: ContactUser
    last_message: MessageOut
    unread_count: int


class ConversationOut(BaseModel):
    conversation_id: str
    other_user: ContactUser
    messages: List[MessageOut]


class StartConversationResponse(BaseModel):
    conversation_id: str
    other_user: ContactUser
    message: Optional[MessageOut] = None


class UnreadCount(BaseModel):
    unread_count: int


class MarkReadResult(BaseModel):
    marked_read: int


class MessageStats(BaseModel):
    total_conversations: int
    unread_messages: int
    active_conversations: int
