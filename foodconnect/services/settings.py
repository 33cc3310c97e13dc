# foodconnect/services/settings.py

import logging
from sqlalchemy.orm import Session

from foodconnect.core.config import settings as app_settings
from foodconnect.crud import platform_setting as crud_settings
from foodconnect.schemas.settings import PlatformSettings, PlatformSettingsUpdate

logger = logging.getLogger(__name__)


def _defaults() -> dict:
    return {
        "platform_fee_percentage": app_settings.PLATFORM_FEE_PERCENTAGE,
        "min_campaign_budget": 100.0,
        "max_campaign_duration_days": 60,
        "auto_approve_restaurants": False,
        "auto_approve_influencers": False,
        "touch_n_go_business_account": app_settings.TOUCH_N_GO_ACCOUNT,
        "admin_email": app_settings.ADMIN_EMAIL,
        "site_maintenance_mode": False,
    }


def get_platform_settings(db: Session) -> PlatformSettings:
    """
    Platform settings: values saved from the admin panel on top of the
    defaults taken from the environment.
    """
    values = _defaults()
    try:
        stored = crud_settings.get_all_settings(db)
    except ValueError:
        logger.error("Stored platform settings are not valid JSON, using defaults.", exc_info=True)
        stored = {}
    values.update({k: v for k, v in stored.items() if k in values})
    return PlatformSettings.model_validate(values)


def update_platform_settings(db: Session, update_data: PlatformSettingsUpdate, admin_id: int | None = None) -> PlatformSettings:
    changes = update_data.model_dump(exclude_unset=True, exclude_none=True)
    if changes:
        crud_settings.upsert_settings(db, changes, updated_by=admin_id)
        logger.info(f"Platform settings updated by admin {admin_id}: {list(changes.keys())}")
    return get_platform_settings(db)
