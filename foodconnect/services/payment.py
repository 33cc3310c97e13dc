# foodconnect/services/payment.py

import csv
import io
import logging
import math
import secrets
import string
import time
from datetime import datetime, timedelta
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from foodconnect.core import locales
from foodconnect.core.config import settings
from foodconnect.core.constants import PAYMENT_STATUS_LABELS, PAYMENT_TRANSITIONS, PAYMENT_WORKFLOW
from foodconnect.crud import payment as crud_payment
from foodconnect.crud import profile as crud_profile
from foodconnect.models.influencer import Influencer
from foodconnect.models.payment import Payment
from foodconnect.models.restaurant import Restaurant
from foodconnect.models.user import User
from foodconnect.schemas.payment import (
    FeeBreakdown,
    InfluencerPaymentSummary,
    PaginatedPayments,
    PaymentCreate,
    PaymentCreateResponse,
    PaymentDetail,
    PaymentInstructions,
    PaymentMethod,
    PaymentOut,
    PaymentProcess,
    PaymentReport,
    PaymentStats,
    PaymentWorkflow,
    RestaurantPaymentSummary,
)
from foodconnect.services import notification as notification_service
from foodconnect.services import settings as settings_service
from foodconnect.services.campaign import get_owned_campaign
from foodconnect.utils.dates import utcnow

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Payment ID", "Campaign", "Restaurant", "Influencer",
    "Amount", "Platform Fee", "Net Amount", "Status",
    "Created Date", "Transaction Reference",
]


def calculate_fee(amount: float, fee_percentage: float | None = None) -> FeeBreakdown:
    if fee_percentage is None:
        fee_percentage = settings.PLATFORM_FEE_PERCENTAGE
    platform_fee = round(amount * fee_percentage / 100, 2)
    return FeeBreakdown(
        amount=round(amount, 2),
        platform_fee_percentage=fee_percentage,
        platform_fee=platform_fee,
        net_amount=round(amount - platform_fee, 2),
    )


def calculate_for_platform(db: Session, amount: float) -> FeeBreakdown:
    """Fee breakdown using the percentage currently configured in platform settings."""
    platform_settings = settings_service.get_platform_settings(db)
    return calculate_fee(amount, platform_settings.platform_fee_percentage)


def _get_payment_or_404(db: Session, payment_id: int) -> Payment:
    payment = crud_payment.get_payment(db, payment_id)
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=locales.ERROR_PAYMENT_NOT_FOUND)
    return payment


def _is_party(payment: Payment, user: User) -> bool:
    if user.user_type == "admin":
        return True
    if user.user_type == "restaurant":
        return payment.restaurant.user_id == user.id
    if user.user_type == "influencer":
        return payment.influencer.user_id == user.id
    return False


def _paginate(items: List[Payment], total_items: int, page: int, size: int, summary=None) -> PaginatedPayments:
    total_pages = math.ceil(total_items / size) if total_items > 0 else 1
    return PaginatedPayments(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        size=size,
        items=items,
        summary=summary,
    )


def create_payment(db: Session, restaurant: Restaurant, data: PaymentCreate) -> PaymentCreateResponse:
    if data.amount < settings.MIN_PAYMENT_AMOUNT:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Minimum payment amount is RM {settings.MIN_PAYMENT_AMOUNT:.2f}",
        )
    campaign = get_owned_campaign(db, data.campaign_id, restaurant)
    influencer = crud_profile.get_influencer_by_id(db, data.influencer_id)
    if not influencer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Influencer not found")
    if crud_payment.get_payment_for(db, campaign.id, influencer.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Payment already exists for this influencer and campaign",
        )

    breakdown = calculate_for_platform(db, data.amount)
    try:
        payment = crud_payment.create_payment(db, {
            "campaign_id": campaign.id,
            "restaurant_id": restaurant.id,
            "influencer_id": influencer.id,
            "application_id": data.application_id,
            "amount": breakdown.amount,
            "platform_fee": breakdown.platform_fee,
            "net_amount": breakdown.net_amount,
            "status": "pending",
        })
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Payment already exists for this influencer and campaign",
        )

    logger.info(
        f"Payment {payment.id} created by restaurant {restaurant.id} for influencer {influencer.id}: "
        f"RM {payment.amount} (fee {payment.platform_fee})"
    )
    return PaymentCreateResponse(
        payment=PaymentOut.model_validate(payment),
        fee_breakdown=breakdown,
        next_steps=[
            f"Transfer RM {payment.amount:.2f} to admin account",
            "Include payment reference in transfer description",
            "Admin will confirm payment and hold in escrow",
            "Payment will be released after content approval",
        ],
    )


def process_payment(db: Session, payment_id: int, data: PaymentProcess, admin: User) -> Payment:
    """
    Moves the escrow forward one step, or cancels it.
    Each action is only valid from its source status.
    """
    payment = _get_payment_or_404(db, payment_id)
    changes = {}

    if data.action == "cancel_payment":
        if payment.status in ("released", "cancelled"):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Cannot cancel a payment that is already {payment.status}",
            )
        changes["status"] = "cancelled"
    else:
        required_status, new_status = PAYMENT_TRANSITIONS[data.action]
        if payment.status != required_status:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Payment must be in '{required_status}' status for {data.action}, current status is '{payment.status}'",
            )
        changes["status"] = new_status

    if data.transaction_reference:
        changes["transaction_reference"] = data.transaction_reference
    if data.admin_notes:
        changes["admin_notes"] = data.admin_notes

    old_status = payment.status
    payment = crud_payment.update_payment(db, payment, changes)
    logger.info(f"Payment {payment.id} {old_status} -> {payment.status} by admin {admin.id}.")

    if payment.status == "released":
        notification_service.notify(
            db,
            user_id=payment.influencer.user_id,
            type="payment_released",
            title="Payment released",
            message=f"RM {payment.net_amount:.2f} for '{payment.campaign_title}' has been released to you.",
            related_entity_id=payment.id,
            action_url=f"/payments/{payment.id}",
        )
    elif payment.status == "cancelled":
        notification_service.notify(
            db,
            user_id=payment.restaurant.user_id,
            type="payment_cancelled",
            title="Payment cancelled",
            message=f"Your payment of RM {payment.amount:.2f} for '{payment.campaign_title}' was cancelled."
                    + (f" Notes: {data.admin_notes}" if data.admin_notes else ""),
            related_entity_id=payment.id,
            action_url=f"/payments/{payment.id}",
        )
    return payment


def _touch_n_go_reference() -> str:
    suffix = "".join(secrets.choice(string.ascii_lowercase + string.digits) for _ in range(9))
    return f"TNG_{int(time.time() * 1000)}_{suffix}"


def process_touch_n_go(db: Session, payment_id: int, restaurant: Restaurant, phone_number: str | None = None) -> Payment:
    """Placeholder for the e-wallet integration: records a generated reference and confirms receipt."""
    payment = _get_payment_or_404(db, payment_id)
    if payment.restaurant_id != restaurant.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=locales.ERROR_ACCESS_DENIED)
    if payment.status != "pending":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Only pending payments can be paid, current status is '{payment.status}'",
        )

    payment = crud_payment.update_payment(db, payment, {
        "status": "received",
        "transaction_reference": _touch_n_go_reference(),
        "admin_notes": "Payment processed via Touch n Go eWallet",
    })
    logger.info(
        f"Payment {payment.id} received via Touch n Go (wallet {phone_number or 'n/a'}), "
        f"reference {payment.transaction_reference}."
    )
    return payment


def get_payment_detail(db: Session, payment_id: int, user: User) -> PaymentDetail:
    payment = _get_payment_or_404(db, payment_id)
    if not _is_party(payment, user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=locales.ERROR_ACCESS_DENIED)
    return PaymentDetail(
        payment=PaymentOut.model_validate(payment),
        status_label=PAYMENT_STATUS_LABELS.get(payment.status, payment.status),
        workflow=PAYMENT_WORKFLOW,
        status_labels=PAYMENT_STATUS_LABELS,
    )


def get_restaurant_payments(
    db: Session,
    restaurant: Restaurant,
    page: int,
    size: int,
    status_filter: str | None = None,
    campaign_id: int | None = None,
) -> PaginatedPayments:
    filters = {"restaurant_id": restaurant.id, "status": status_filter, "campaign_id": campaign_id}
    items = crud_payment.get_payments(db, skip=(page - 1) * size, limit=size, **filters)
    total_items = crud_payment.count_payments(db, **filters)

    total_paid, total_fees = crud_payment.restaurant_totals(db, restaurant.id)
    summary = RestaurantPaymentSummary(
        total_paid=total_paid,
        total_fees=total_fees,
        pending_count=crud_payment.count_payments(db, restaurant_id=restaurant.id, status="pending"),
    )
    return _paginate(items, total_items, page, size, summary)


def get_influencer_payments(
    db: Session,
    influencer: Influencer,
    page: int,
    size: int,
    status_filter: str | None = None,
    campaign_id: int | None = None,
) -> PaginatedPayments:
    filters = {"influencer_id": influencer.id, "status": status_filter, "campaign_id": campaign_id}
    items = crud_payment.get_payments(db, skip=(page - 1) * size, limit=size, **filters)
    total_items = crud_payment.count_payments(db, **filters)

    summary = InfluencerPaymentSummary(
        total_earned=crud_payment.sum_net_by_status(db, influencer.id, ("released",)),
        pending_earnings=crud_payment.sum_net_by_status(db, influencer.id, ("received", "held")),
        completed_campaigns=crud_payment.count_payments(db, influencer_id=influencer.id, status="released"),
    )
    return _paginate(items, total_items, page, size, summary)


def get_pending_payments(db: Session, page: int, size: int) -> PaginatedPayments:
    items = crud_payment.get_payments(db, skip=(page - 1) * size, limit=size, status="pending")
    total_items = crud_payment.count_payments(db, status="pending")
    return _paginate(items, total_items, page, size)


def get_payment_stats(db: Session) -> PaymentStats:
    by_status = crud_payment.count_payments_by_status(db)
    total_amount, total_fees, total_net = crud_payment.totals(db)
    counted = sum(count for status_name, count in by_status.items() if status_name != "cancelled")
    return PaymentStats(
        by_status=by_status,
        total_payments=sum(by_status.values()),
        total_amount=round(total_amount, 2),
        total_platform_fees=round(total_fees, 2),
        total_net_amount=round(total_net, 2),
        average_payment=round(total_amount / counted, 2) if counted else 0.0,
        recent_payments=crud_payment.count_payments_since(db, utcnow() - timedelta(days=7)),
    )


def build_report(
    db: Session,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    status_filter: str | None = None,
) -> PaymentReport:
    payments = crud_payment.get_all_payments(db, status=status_filter, date_from=date_from, date_to=date_to)
    counted = [p for p in payments if p.status != "cancelled"]
    return PaymentReport(
        generated_at=utcnow(),
        date_from=date_from,
        date_to=date_to,
        status=status_filter,
        total_payments=len(payments),
        total_amount=round(sum(p.amount for p in counted), 2),
        total_platform_fees=round(sum(p.platform_fee for p in counted), 2),
        total_net_amount=round(sum(p.net_amount for p in counted), 2),
        payments=payments,
    )


def report_to_csv(report: PaymentReport) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL)
    writer.writerow(CSV_HEADERS)
    for payment in report.payments:
        writer.writerow([
            payment.id,
            payment.campaign_title or "",
            payment.restaurant_name or "",
            payment.influencer_name or "",
            f"{payment.amount:.2f}",
            f"{payment.platform_fee:.2f}",
            f"{payment.net_amount:.2f}",
            payment.status,
            payment.created_at.isoformat(),
            payment.transaction_reference or "",
        ])
    return buffer.getvalue()


def get_instructions(db: Session) -> PaymentInstructions:
    platform_settings = settings_service.get_platform_settings(db)
    account = platform_settings.touch_n_go_business_account or settings.TOUCH_N_GO_ACCOUNT
    fee = platform_settings.platform_fee_percentage
    return PaymentInstructions(
        payment_methods=[
            PaymentMethod(
                name="Touch 'n Go eWallet",
                account=account,
                instructions=[
                    "Open Touch 'n Go eWallet app",
                    f"Transfer to: {account}",
                    "Include payment reference in description",
                    "Screenshot and keep receipt for verification",
                ],
            )
        ],
        platform_fee={
            "percentage": fee,
            "description": f"Platform charges {fee:g}% fee on total payment amount",
        },
        workflow=[
            "Create campaign and get applications",
            "Accept influencer application",
            "Create payment for accepted influencer",
            "Transfer payment to admin account",
            "Admin confirms and holds payment in escrow",
            "Influencer creates and submits content",
            "Restaurant approves content",
            "Admin releases payment to influencer",
        ],
        support={
            "email": platform_settings.admin_email or settings.ADMIN_EMAIL,
            "hours": "Monday-Friday, 9 AM - 6 PM MYT",
        },
    )


def get_workflow() -> PaymentWorkflow:
    return PaymentWorkflow(workflow=PAYMENT_WORKFLOW, status_labels=PAYMENT_STATUS_LABELS)
