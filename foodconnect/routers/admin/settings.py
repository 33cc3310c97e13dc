# foodconnect/routers/admin/settings.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_admin_user, get_db
from foodconnect.models.user import User
from foodconnect.schemas.settings import PlatformSettings, PlatformSettingsUpdate
from foodconnect.services import settings as settings_service

router = APIRouter()


@router.get("", response_model=PlatformSettings)
def get_platform_settings(db: Session = Depends(get_db)):
    """[ADMIN] Current platform settings."""
    return settings_service.get_platform_settings(db)


@router.put("", response_model=PlatformSettings)
def update_platform_settings(
    settings_data: PlatformSettingsUpdate,
    admin_user: User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """
    [ADMIN] Updates platform settings.
    Only the fields that are sent are changed.
    """
    return settings_service.update_platform_settings(db, settings_data, admin_user.id)
