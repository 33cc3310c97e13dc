# foodconnect/services/maintenance.py
import logging

from foodconnect.crud import notification as crud_notification
from foodconnect.crud import user as crud_user
from foodconnect.db.session import SessionLocal
from foodconnect.services import campaign as campaign_service
from foodconnect.utils.dates import utcnow

logger = logging.getLogger(__name__)

DELETE_READ_NOTIFICATIONS_AFTER_DAYS = 30
DELETE_ANY_NOTIFICATION_AFTER_DAYS = 90


def close_expired_campaigns_task():
    """Closes published campaigns whose deadline has passed."""
    logger.info("--- Starting scheduled job: Close Expired Campaigns ---")
    with SessionLocal() as db:
        try:
            closed = campaign_service.close_expired_campaigns(db)
            logger.info(f"Closed {closed} expired campaigns.")
        except Exception:
            logger.error("An error occurred while closing expired campaigns", exc_info=True)
            db.rollback()
    logger.info("--- Finished scheduled job: Close Expired Campaigns ---")


def cleanup_old_notifications_task():
    """Deletes read notifications after 30 days and any notification after 90."""
    logger.info("--- Starting scheduled job: Cleanup of Old Notifications ---")
    with SessionLocal() as db:
        try:
            deleted_count = crud_notification.delete_old_notifications(
                db,
                read_older_than_days=DELETE_READ_NOTIFICATIONS_AFTER_DAYS,
                any_older_than_days=DELETE_ANY_NOTIFICATION_AFTER_DAYS,
            )
            if deleted_count > 0:
                logger.info(f"Successfully deleted {deleted_count} old notifications.")
            else:
                logger.info("No old notifications to delete.")
        except Exception:
            logger.error("An error occurred during notification cleanup task", exc_info=True)
            db.rollback()
    logger.info("--- Finished scheduled job: Cleanup of Old Notifications ---")


def purge_expired_tokens_task():
    logger.info("--- Starting scheduled job: Purge Expired Tokens ---")
    with SessionLocal() as db:
        try:
            touched = crud_user.clear_expired_tokens(db, utcnow())
            logger.info(f"Cleared expired tokens on {touched} accounts.")
        except Exception:
            logger.error("An error occurred while purging expired tokens", exc_info=True)
            db.rollback()
    logger.info("--- Finished scheduled job: Purge Expired Tokens ---")
