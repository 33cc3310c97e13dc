# foodconnect/models/payment.py

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Numeric, UniqueConstraint, func
from sqlalchemy.orm import relationship
from foodconnect.db.session import Base
from foodconnect.utils.dates import utcnow

class Payment(Base):
    """
    Escrow record for one influencer on one campaign.
    Money moves outside the platform; only the status flags live here.
    """
    __tablename__ = "payments"
    __table_args__ = (
        UniqueConstraint("campaign_id", "influencer_id", name="uq_payment_campaign_influencer"),
    )

    id = Column(Integer, primary_key=True, index=True)
    campaign_id = Column(Integer, ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    influencer_id = Column(Integer, ForeignKey("influencers.id", ondelete="CASCADE"), nullable=False, index=True)
    application_id = Column(Integer, ForeignKey("applications.id", ondelete="SET NULL"), nullable=True)

    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    platform_fee = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    net_amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)

    # 'pending', 'received', 'held', 'released', 'cancelled'
    status = Column(String, default="pending", nullable=False, server_default="pending", index=True)
    transaction_reference = Column(String, nullable=True)
    admin_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=True)

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
