# foodconnect/models/content.py

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, JSON, func
from sqlalchemy.orm import relationship
from foodconnect.db.session import Base
from foodconnect.utils.dates import utcnow

class ContentSubmission(Base):
    __tablename__ = "content_submissions"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Integer, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True)
    # Denormalised for filtering by party
    campaign_id = Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    influencer_id = Column(Integer, ForeignKey("influencers.id", ondelete="CASCADE"), nullable=False, index=True)

    video_url = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    platforms = Column(JSON, nullable=False, default=list)

    # 'pending', 'approved', 'rejected', 'posted'
    status = Column(String, default="pending", nullable=False, server_default="pending", index=True)
    feedback = Column(Text, nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    posted_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=True)

    application = relationship("Application", back_populates="content_submissions")
    campaign = relationship("Campaign")
    restaurant = relationship("Restaurant")
    influencer = relationship("Influencer")

    @property
    def campaign_title(self) -> str | None:
        return self.campaign.title if self.campaign else None

    @property
    def restaurant_name(self) -> str | None:
        return self.restaurant.business_name if self.restaurant else None

    @property
    def influencer_name(self) -> str | None:
        return self.influencer.display_name if self.influencer else None
