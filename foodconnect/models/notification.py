# foodconnect/models/notification.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, func, Boolean
from foodconnect.db.session import Base
from foodconnect.utils.dates import utcnow
from sqlalchemy.orm import relationship

class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # 'account_approved', 'application_received', 'payment_released', etc.
    type = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    message = Column(Text, nullable=True)

    related_entity_id = Column(String, nullable=True)
    action_url = Column(String, nullable=True)

    is_read = Column(Boolean, default=False, nullable=False, server_default='false')
    created_at = Column(DateTime, default=utcnow, server_default=func.now())

    user = relationship("User")
