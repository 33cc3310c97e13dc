# foodconnect/routers/admin/payments.py

from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_admin_user, get_db
from foodconnect.models.user import User
from foodconnect.schemas.payment import PaginatedPayments, PaymentOut, PaymentProcess, PaymentReport, PaymentStats
from foodconnect.services import payment as payment_service
from foodconnect.utils.dates import to_naive_utc, utcnow

router = APIRouter()


@router.get("/stats", response_model=PaymentStats)
def get_payment_stats(db: Session = Depends(get_db)):
    """[ADMIN] Payment counts by status and money totals (cancelled payments excluded)."""
    return payment_service.get_payment_stats(db)


@router.get("/pending", response_model=PaginatedPayments)
def get_pending_payments(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """[ADMIN] Payments waiting for the restaurant's transfer to be confirmed."""
    return payment_service.get_pending_payments(db, page, size)


@router.get("/report", response_model=PaymentReport)
def get_payment_report(
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    format: Literal["json", "csv"] = Query("json"),
    db: Session = Depends(get_db),
):
    """
    [ADMIN] Payment report for a period.
    With format=csv the report is returned as a downloadable file.
    """
    report = payment_service.build_report(
        db, date_from=to_naive_utc(date_from), date_to=to_naive_utc(date_to), status_filter=status_filter
    )
    if format == "csv":
        filename = f"payment_report_{utcnow().strftime('%Y%m%d_%H%M%S')}.csv"
        return Response(
            content=payment_service.report_to_csv(report),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
    return report


@router.post("/{payment_id}/process", response_model=PaymentOut)
def process_payment(
    payment_id: int,
    data: PaymentProcess,
    admin_user: User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """
    [ADMIN] Moves a payment through the escrow:
    confirm_received, hold_payment, release_payment or cancel_payment.
    """
    return payment_service.process_payment(db, payment_id, data, admin_user)
