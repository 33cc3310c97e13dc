# foodconnect/models/__init__.py
# All models are imported here so that Base.metadata sees every table.

from foodconnect.models.user import User
from foodconnect.models.restaurant import Restaurant
from foodconnect.models.influencer import Influencer, FollowerUpdate
from foodconnect.models.campaign import Campaign, Application
from foodconnect.models.content import ContentSubmission
from foodconnect.models.payment import Payment
from foodconnect.models.message import Message
from foodconnect.models.notification import Notification
from foodconnect.models.platform_setting import PlatformSetting

__all__ = [
    "User",
    "Restaurant",
    "Influencer",
    "FollowerUpdate",
    "Campaign",
    "Application",
    "ContentSubmission",
    "Payment",
    "Message",
    "Notification",
    "PlatformSetting",
]
