# foodconnect/routers/reference.py
from fastapi import APIRouter

from foodconnect.core.constants import DIETARY_CATEGORIES, FOLLOWER_PLATFORMS, MALAYSIAN_STATES, TIER_LABELS
from foodconnect.schemas.common import RegistrationData

router = APIRouter()


@router.get("/reference/registration-data", response_model=RegistrationData)
def get_registration_data():
    """States, dietary categories and influencer tiers for the sign-up forms."""
    return RegistrationData(
        malaysian_states=MALAYSIAN_STATES,
        dietary_categories=DIETARY_CATEGORIES,
        influencer_tiers=TIER_LABELS,
        follower_platforms=FOLLOWER_PLATFORMS,
    )
