# foodconnect/models/user.py

from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from foodconnect.db.session import Base
from foodconnect.utils.dates import utcnow

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    # 'restaurant', 'influencer' or 'admin'
    user_type = Column(String, nullable=False, index=True)
    # 'pending', 'approved', 'rejected', 'suspended', 'active' (admins)
    status = Column(String, default="pending", nullable=False, server_default="pending", index=True)

    email_verified = Column(Boolean, default=False, nullable=False, server_default="false")
    email_verification_token = Column(String, nullable=True, index=True)
    email_verification_expires = Column(DateTime, nullable=True)
    password_reset_token = Column(String, nullable=True, index=True)
    password_reset_expires = Column(DateTime, nullable=True)

    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=True)

    restaurant = relationship("Restaurant", back_populates="user", uselist=False, foreign_keys="Restaurant.user_id")
    influencer = relationship("Influencer", back_populates="user", uselist=False, foreign_keys="Influencer.user_id")

    @property
    def profile(self):
        if self.user_type == "restaurant":
            return self.restaurant
        if self.user_type == "influencer":
            return self.influencer
        return None

    @property
    def display_name(self) -> str:
        if self.user_type == "restaurant" and self.restaurant:
            return self.restaurant.business_name
        if self.user_type == "influencer" and self.influencer:
            return self.influencer.display_name
        return self.email
