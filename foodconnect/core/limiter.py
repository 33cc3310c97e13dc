# foodconnect/core/limiter.py

import logging
from typing import Optional

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from foodconnect.core.config import settings
from foodconnect.models.user import User

logger = logging.getLogger(__name__)

# --- Request key ---

def key_func(request: Request) -> str:
    """
    Identifies the caller for rate limiting.
    Authenticated user ID first, then the client IP address.
    """
    user: Optional[User] = getattr(request.state, "user", None)

    if user and user.id:
        return f"user:{user.id}"

    return get_remote_address(request)

# --- Limiter instance ---

limiter = Limiter(
    key_func=key_func,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="moving-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)
