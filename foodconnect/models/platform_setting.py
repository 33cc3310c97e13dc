# foodconnect/models/platform_setting.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from foodconnect.db.session import Base
from foodconnect.utils.dates import utcnow

class PlatformSetting(Base):
    """Key/value store for settings editable from the admin panel."""
    __tablename__ = "platform_settings"

    key = Column(String, primary_key=True)
    # JSON-encoded value
    value = Column(Text, nullable=False)
    updated_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=True)
