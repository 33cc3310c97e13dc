# foodconnect/schemas/payment.py
from datetime import datetime
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from foodconnect.schemas.common import PaginatedResponse


class PaymentCreate(BaseModel):
    campaign_id: int
    influencer_id: int
    application_id: Optional[int] = None
    amount: float = Field(..., gt=0)


class PaymentProcess(BaseModel):
    action: Literal["confirm_received", "hold_payment", "release_payment", "cancel_payment"]
    transaction_reference: Optional[str] = Field(None, max_length=200)
    admin_notes: Optional[str] = Field(None, max_length=1000)


class PaymentCalculate(BaseModel):
    amount: float = Field(..., gt=0)


class TouchNGoRequest(BaseModel):
    phone_number: Optional[str] = None


class FeeBreakdown(BaseModel):
    amount: float
    platform_fee_percentage: float
    platform_fee: float
    net_amount: float


class PaymentOut(BaseModel):
    id: int
    campaign_id: int
    campaign_title: Optional[str] = None
    restaurant_id: int
    restaurant_name: Optional[str] = None
    influencer_id: int
    influencer_name: Optional[str] = None
    application_id: Optional[int] = None
    amount: float
    platform_fee: float
    net_amount: float
    status: str
    transaction_reference: Optional[str] = None
    admin_notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PaymentCreateResponse(BaseModel):
    payment: PaymentOut
    fee_breakdown: FeeBreakdown
    next_steps: List[str]


class PaymentDetail(BaseModel):
    payment: PaymentOut
    status_label: str
    workflow: List[Dict]
    status_labels: Dict[str, str]


class RestaurantPaymentSummary(BaseModel):
    total_paid: float = 0.0
    total_fees: float = 0.0
    pending_count: int = 0


class InfluencerPaymentSummary(BaseModel):
    total_earned: float = 0.0
    pending_earnings: float = 0.0
    completed_campaigns: int = 0


class PaginatedPayments(PaginatedResponse[PaymentOut]):
    summary: Optional[Union[RestaurantPaymentSummary, InfluencerPaymentSummary]] = None


class PaymentStats(BaseModel):
    by_status: Dict[str, int]
    total_payments: int
    total_amount: float
    total_platform_fees: float
    total_net_amount: float
    average_payment: float
    recent_payments: int


class PaymentReport(BaseModel):
    generated_at: datetime
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    status: Optional[str] = None
    total_payments: int
    total_amount: float
    total_platform_fees: float
    total_net_amount: float
    payments: List[PaymentOut]


class PaymentMethod(BaseModel):
    name: str
    account: str
    instructions: List[str]


class PaymentInstructions(BaseModel):
    payment_methods: List[PaymentMethod]
    platform_fee: Dict[str, Union[float, str]]
    workflow: List[str]
    support: Dict[str, str]


class PaymentWorkflow(BaseModel):
    workflow: List[Dict]
    status_labels: Dict[str, str]
