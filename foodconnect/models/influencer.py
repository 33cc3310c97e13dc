# foodconnect/models/influencer.py

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from foodconnect.db.session import Base
from foodconnect.utils.dates import utcnow

class Influencer(Base):
    __tablename__ = "influencers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    display_name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    city = Column(String, nullable=True, index=True)
    state = Column(String, nullable=True, index=True)

    instagram_username = Column(String, nullable=True)
    instagram_link = Column(String, nullable=True)
    instagram_followers = Column(Integer, default=0, nullable=False, server_default="0")
    tiktok_username = Column(String, nullable=True)
    tiktok_link = Column(String, nullable=True)
    tiktok_followers = Column(Integer, default=0, nullable=False, server_default="0")
    xhs_username = Column(String, nullable=True)
    xhs_link = Column(String, nullable=True)
    xhs_followers = Column(Integer, default=0, nullable=False, server_default="0")
    youtube_channel = Column(String, nullable=True)
    youtube_followers = Column(Integer, default=0, nullable=False, server_default="0")

    # Derived from the largest follower count, see services.profiles.calculate_tier
    tier = Column(String, default="emerging", nullable=False, server_default="emerging", index=True)

    admin_notes = Column(Text, nullable=True)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    approved_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=True)

    user = relationship("User", back_populates="influencer", foreign_keys=[user_id])
    applications = relationship("Application", back_populates="influencer", cascade="all, delete-orphan")
    follower_updates = relationship("FollowerUpdate", back_populates="influencer", cascade="all, delete-orphan")

    @property
    def max_followers(self) -> int:
        return max(
            self.instagram_followers or 0,
            self.tiktok_followers or 0,
            self.xhs_followers or 0,
            self.youtube_followers or 0,
        )


class FollowerUpdate(Base):
    """Influencer's request to change a follower count, approved by an admin."""
    __tablename__ = "follower_updates"

    id = Column(Integer, primary_key=True, index=True)
    influencer_id = Column(Integer, ForeignKey("influencers.id", ondelete="CASCADE"), nullable=False, index=True)

    # 'instagram', 'tiktok', 'xhs', 'youtube'
    platform = Column(String, nullable=False)
    current_count = Column(Integer, nullable=False, default=0)
    requested_count = Column(Integer, nullable=False)
    proof_url = Column(String, nullable=True)

    status = Column(String, default="pending", nullable=False, server_default="pending", index=True)
    admin_notes = Column(Text, nullable=True)
    processed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    processed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

    influencer = relationship("Influencer", back_populates="follower_updates")

    @property
    def influencer_name(self) -> str | None:
        return self.influencer.display_name if self.influencer else None

    @property
    def influencer_tier(self) -> str | None:
        return self.influencer.tier if self.influencer else None
