# foodconnect/routers/admin/__init__.py

from fastapi import APIRouter, Depends

from foodconnect.dependencies import get_admin_user

from . import (
    campaigns,
    content,
    follower_updates,
    general,
    payments,
    settings,
    tasks,
    users,
)

# Every route below requires an admin token
router = APIRouter(
    dependencies=[Depends(get_admin_user)]
)

# /admin/dashboard, /admin/cache/clear
router.include_router(general.router)

router.include_router(users.router, prefix="/users")
router.include_router(follower_updates.router, prefix="/follower-updates")
router.include_router(campaigns.router, prefix="/campaigns")
router.include_router(content.router, prefix="/content")
router.include_router(payments.router, prefix="/payments")
router.include_router(settings.router, prefix="/settings")
router.include_router(tasks.router, prefix="/tasks")
