# foodconnect/schemas/notification.py
from pydantic import BaseModel, ConfigDict
from datetime import datetime

from foodconnect.schemas.common import PaginatedResponse

class Notification(BaseModel):
    id: int
    type: str
    title: str
    message: str | None
    created_at: datetime

    is_read: bool
    action_url: str | None # Relative frontend URL
    related_entity_id: str | None

    model_config = ConfigDict(from_attributes=True)


class PaginatedNotifications(PaginatedResponse[Notification]):
    pass
