# foodconnect/routers/payments.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from foodconnect.dependencies import get_current_influencer, get_current_restaurant, get_current_user, get_db
from foodconnect.models.influencer import Influencer
from foodconnect.models.restaurant import Restaurant
from foodconnect.models.user import User
from foodconnect.schemas.payment import (
    FeeBreakdown,
    PaginatedPayments,
    PaymentCalculate,
    PaymentCreate,
    PaymentCreateResponse,
    PaymentDetail,
    PaymentInstructions,
    PaymentOut,
    PaymentWorkflow,
    TouchNGoRequest,
)
from foodconnect.services import payment as payment_service

router = APIRouter()


@router.post("/payments", response_model=PaymentCreateResponse, status_code=status.HTTP_201_CREATED)
def create_payment(
    data: PaymentCreate,
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    """
    Creates a pending escrow payment for an influencer on one of your campaigns.
    The response includes the fee breakdown and transfer instructions.
    """
    return payment_service.create_payment(db, restaurant, data)


@router.post("/payments/calculate", response_model=FeeBreakdown)
def calculate_payment(
    data: PaymentCalculate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return payment_service.calculate_for_platform(db, data.amount)


@router.get("/payments/restaurant", response_model=PaginatedPayments)
def get_restaurant_payments(
    status_filter: Optional[str] = Query(None, alias="status"),
    campaign_id: Optional[int] = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    return payment_service.get_restaurant_payments(db, restaurant, page, size, status_filter, campaign_id)


@router.get("/payments/influencer", response_model=PaginatedPayments)
def get_influencer_payments(
    status_filter: Optional[str] = Query(None, alias="status"),
    campaign_id: Optional[int] = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    influencer: Influencer = Depends(get_current_influencer),
    db: Session = Depends(get_db),
):
    return payment_service.get_influencer_payments(db, influencer, page, size, status_filter, campaign_id)


@router.get("/payments/instructions", response_model=PaymentInstructions)
def get_payment_instructions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return payment_service.get_instructions(db)


@router.get("/payments/workflow", response_model=PaymentWorkflow)
def get_payment_workflow():
    return payment_service.get_workflow()


@router.get("/payments/{payment_id}", response_model=PaymentDetail)
def get_payment(
    payment_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return payment_service.get_payment_detail(db, payment_id, current_user)


@router.post("/payments/{payment_id}/touch-n-go", response_model=PaymentOut)
def pay_with_touch_n_go(
    payment_id: int,
    data: TouchNGoRequest,
    restaurant: Restaurant = Depends(get_current_restaurant),
    db: Session = Depends(get_db),
):
    """Confirms a pending payment through the Touch 'n Go eWallet placeholder."""
    return payment_service.process_touch_n_go(db, payment_id, restaurant, data.phone_number)
