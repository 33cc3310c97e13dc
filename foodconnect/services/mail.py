# foodconnect/services/mail.py
import logging

from foodconnect.core.config import settings

logger = logging.getLogger(__name__)


def send_mail(to: str, subject: str, body: str):
    """
    Outgoing mail goes through the log; delivery is handled outside the API.
    """
    logger.info(f"[MAIL] to={to} subject='{subject}'\n{body}")


def send_verification_email(email: str, token: str):
    link = f"{settings.FRONTEND_URL}/verify-email/{token}"
    send_mail(
        email,
        "Verify your FoodConnect account",
        f"Welcome to {settings.PROJECT_NAME}! Confirm your email address: {link}\n"
        f"The link expires in {settings.EMAIL_VERIFICATION_EXPIRE_HOURS} hours.",
    )


def send_password_reset_email(email: str, token: str):
    link = f"{settings.FRONTEND_URL}/reset-password/{token}"
    send_mail(
        email,
        "Reset your FoodConnect password",
        f"Use this link to set a new password: {link}\n"
        f"The link expires in {settings.PASSWORD_RESET_EXPIRE_HOURS} hour(s). "
        "If you did not request a reset, ignore this email.",
    )


def send_account_decision_email(email: str, approved: bool, notes: str | None = None):
    if approved:
        subject = "Your FoodConnect account has been approved"
        body = f"You can now log in at {settings.FRONTEND_URL}/login"
    else:
        subject = "Your FoodConnect registration was not approved"
        body = f"Reason: {notes or 'not specified'}. Contact {settings.ADMIN_EMAIL} for details."
    send_mail(email, subject, body)
