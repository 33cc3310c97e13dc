# foodconnect/routers/admin/general.py

import logging

from fastapi import APIRouter, Depends
from redis.asyncio import Redis
from sqlalchemy.orm import Session

from foodconnect.core.redis import get_redis_client
from foodconnect.dependencies import get_db
from foodconnect.schemas.admin import AdminDashboardStats
from foodconnect.schemas.common import StatusMessage
from foodconnect.services import admin as admin_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/dashboard", response_model=AdminDashboardStats)
async def get_admin_dashboard(
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis_client),
):
    """
    [ADMIN] Platform overview and per-entity statistics.
    Cached for 5 minutes.
    """
    return await admin_service.get_dashboard_stats(db, redis)


@router.post("/cache/clear", response_model=StatusMessage)
async def clear_cache_endpoint(redis: Redis = Depends(get_redis_client)):
    """[ADMIN] Drops the cached dashboard statistics."""
    deleted = await admin_service.clear_cache(redis)
    return StatusMessage(message=f"{deleted} cached keys have been cleared.")
