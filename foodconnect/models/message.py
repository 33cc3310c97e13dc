# foodconnect/models/message.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from foodconnect.db.session import Base
from foodconnect.utils.dates import utcnow

class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Optional context
    campaign_id = Column(Integer, ForeignKey("campaigns.id", ondelete="SET NULL"), nullable=True, index=True)
    application_id = Column(Integer, ForeignKey("applications.id", ondelete="SET NULL"), nullable=True)

    message = Column(Text, nullable=False)
    attachment_url = Column(String, nullable=True)

    # 'sent' -> 'read'
    status = Column(String, default="sent", nullable=False, server_default="sent")
    read_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False, index=True)

    sender = relationship("User", foreign_keys=[sender_id])
    receiver = relationship("User", foreign_keys=[receiver_id])
    campaign = relationship("Campaign")

    @property
    def sender_name(self) -> str | None:
        return self.sender.display_name if self.sender else None

    @property
    def receiver_name(self) -> str | None:
        return self.receiver.display_name if self.receiver else None
