# foodconnect/schemas/user.py
from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from foodconnect.schemas.profile import (
    DietaryCategories,
    InfluencerProfile,
    MalaysianState,
    RestaurantProfile,
)

REQUIRED_PROFILE_FIELDS = {
    "restaurant": ("business_name", "address", "city", "state"),
    "influencer": ("display_name", "location", "city", "state"),
}


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserOut(BaseModel):
    id: int
    email: str
    user_type: str
    status: str
    email_verified: bool
    last_login: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RegisterRequest(BaseModel):
    """
    Registration payload. Shared account fields plus the profile
    fields for the chosen user_type.
    """
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    user_type: Literal["restaurant", "influencer"]

    # Shared profile fields
    phone: Optional[str] = None
    city: Optional[str] = None
    state: MalaysianState = None

    # Restaurant
    business_name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    address: Optional[str] = None
    google_maps_link: Optional[str] = None
    website: Optional[str] = None
    dietary_categories: DietaryCategories = None

    # Influencer
    display_name: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=1000)
    location: Optional[str] = None
    instagram_username: Optional[str] = None
    instagram_link: Optional[str] = None
    instagram_followers: int = Field(0, ge=0)
    tiktok_username: Optional[str] = None
    tiktok_link: Optional[str] = None
    tiktok_followers: int = Field(0, ge=0)
    xhs_username: Optional[str] = None
    xhs_link: Optional[str] = None
    xhs_followers: int = Field(0, ge=0)
    youtube_channel: Optional[str] = None
    youtube_followers: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_profile_fields(self):
        missing = [
            name for name in REQUIRED_PROFILE_FIELDS[self.user_type]
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ValueError(f"Missing required fields for {self.user_type}: {', '.join(missing)}")
        return self


class RegisterResponse(BaseModel):
    message: str
    user: UserOut


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(Token):
    user: UserOut
    profile: Optional[Union[RestaurantProfile, InfluencerProfile]] = None


class MeResponse(BaseModel):
    user: UserOut
    profile: Optional[Union[RestaurantProfile, InfluencerProfile]] = None


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=6, max_length=128)
