# foodconnect/models/campaign.py

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, JSON, Numeric, UniqueConstraint, func
from sqlalchemy.orm import relationship
from foodconnect.db.session import Base
from foodconnect.utils.dates import utcnow

class Campaign(Base):
    __tablename__ = "campaigns"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    brief = Column(Text, nullable=True)
    total_budget = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    deadline = Column(DateTime, nullable=True, index=True)
    location = Column(String, nullable=True)

    dietary_categories = Column(JSON, nullable=False, default=list)
    target_tiers = Column(JSON, nullable=False, default=list)
    # [{"tier": "growing", "amount": 250.0}, ...]
    budget_allocations = Column(JSON, nullable=False, default=list)
    max_influencers = Column(Integer, nullable=False, default=5, server_default="5")

    # 'draft', 'published', 'closed'
    status = Column(String, default="draft", nullable=False, server_default="draft", index=True)

    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=True)

    restaurant = relationship("Restaurant", back_populates="campaigns")
    applications = relationship("Application", back_populates="campaign", cascade="all, delete-orphan")

    @property
    def restaurant_name(self) -> str | None:
        return self.restaurant.business_name if self.restaurant else None

    @property
    def city(self) -> str | None:
        return self.restaurant.city if self.restaurant else None

    @property
    def state(self) -> str | None:
        return self.restaurant.state if self.restaurant else None


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("campaign_id", "influencer_id", name="uq_application_campaign_influencer"),
    )

    id = Column(Integer, primary_key=True, index=True)
    campaign_id = Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False, index=True)
    influencer_id = Column(Integer, ForeignKey("influencers.id", ondelete="CASCADE"), nullable=False, index=True)

    message = Column(Text, nullable=True)
    proposed_timeline = Column(String, nullable=True)
    portfolio_examples = Column(JSON, nullable=False, default=list)

    # 'pending', 'accepted', 'rejected'
    status = Column(String, default="pending", nullable=False, server_default="pending", index=True)
    responded_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=True)

    campaign = relationship("Campaign", back_populates="applications")
    influencer = relationship("Influencer", back_populates="applications")
    content_submissions = relationship("ContentSubmission", back_populates="application", cascade="all, delete-orphan")

    @property
    def campaign_title(self) -> str | None:
        return self.campaign.title if self.campaign else None

    @property
    def influencer_name(self) -> str | None:
        return self.influencer.display_name if self.influencer else None

    @property
    def influencer_tier(self) -> str | None:
        return self.influencer.tier if self.influencer else None
