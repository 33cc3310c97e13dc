# foodconnect/crud/payment.py
from datetime import datetime
from typing import Any, Dict, List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from foodconnect.models.payment import Payment


def get_payment(db: Session, payment_id: int) -> Payment | None:
    return db.query(Payment).filter(Payment.id == payment_id).first()

def get_payment_for(db: Session, campaign_id: int, influencer_id: int) -> Payment | None:
    return db.query(Payment).filter_by(campaign_id=campaign_id, influencer_id=influencer_id).first()

def create_payment(db: Session, data: Dict[str, Any]) -> Payment:
    db_payment = Payment(**data)
    db.add(db_payment)
    db.commit()
    db.refresh(db_payment)
    return db_payment

def update_payment(db: Session, payment: Payment, data: Dict[str, Any]) -> Payment:
    for field, value in data.items():
        setattr(payment, field, value)
    db.commit()
    db.refresh(payment)
    return payment


def _filtered_query(
    db: Session,
    restaurant_id: int | None = None,
    influencer_id: int | None = None,
    status: str | None = None,
    campaign_id: int | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
):
    query = db.query(Payment)
    if restaurant_id is not None:
        query = query.filter(Payment.restaurant_id == restaurant_id)
    if influencer_id is not None:
        query = query.filter(Payment.influencer_id == influencer_id)
    if campaign_id is not None:
        query = query.filter(Payment.campaign_id == campaign_id)
    if status and status != "all":
        query = query.filter(Payment.status == status)
    if date_from is not None:
        query = query.filter(Payment.created_at >= date_from)
    if date_to is not None:
        query = query.filter(Payment.created_at <= date_to)
    return query

def get_payments(db: Session, skip: int = 0, limit: int = 20, **filters) -> List[Payment]:
    query = _filtered_query(db, **filters)
    return query.order_by(Payment.created_at.desc(), Payment.id.desc()).offset(skip).limit(limit).all()

def get_all_payments(db: Session, **filters) -> List[Payment]:
    return _filtered_query(db, **filters).order_by(Payment.created_at.desc(), Payment.id.desc()).all()

def count_payments(db: Session, **filters) -> int:
    return _filtered_query(db, **filters).count()


def sum_net_by_status(db: Session, influencer_id: int, statuses: Tuple[str, ...]) -> float:
    total = db.query(func.coalesce(func.sum(Payment.net_amount), 0)).filter(
        Payment.influencer_id == influencer_id,
        Payment.status.in_(statuses),
    ).scalar()
    return float(total or 0)

def restaurant_totals(db: Session, restaurant_id: int) -> Tuple[float, float]:
    """(amount, platform_fee) over the restaurant's payments, excluding cancelled ones."""
    amount, fees = db.query(
        func.coalesce(func.sum(Payment.amount), 0),
        func.coalesce(func.sum(Payment.platform_fee), 0),
    ).filter(
        Payment.restaurant_id == restaurant_id,
        Payment.status != "cancelled",
    ).one()
    return float(amount or 0), float(fees or 0)

def count_payments_by_status(db: Session) -> Dict[str, int]:
    rows = db.query(Payment.status, func.count(Payment.id)).group_by(Payment.status).all()
    return {status: count for status, count in rows}

def totals(db: Session) -> Tuple[float, float, float]:
    """(amount, platform_fee, net_amount) over all non-cancelled payments."""
    amount, fees, net = db.query(
        func.coalesce(func.sum(Payment.amount), 0),
        func.coalesce(func.sum(Payment.platform_fee), 0),
        func.coalesce(func.sum(Payment.net_amount), 0),
    ).filter(Payment.status != "cancelled").one()
    return float(amount or 0), float(fees or 0), float(net or 0)

def count_payments_since(db: Session, since: datetime) -> int:
    return db.query(Payment).filter(Payment.created_at >= since).count()
