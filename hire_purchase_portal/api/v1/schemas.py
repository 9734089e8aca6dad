"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from hire_purchase_portal.domain.models import PaymentFrequency, UserType


class LoginRequest(BaseModel):
    """Request body for POST /v1/session/login"""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    user_type: UserType


class ActivateRequest(BaseModel):
    """Request body for POST /v1/session/activate"""

    membership_id: str = Field(..., min_length=1, description="Membership ID issued at registration")
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResultResponse(BaseModel):
    success: bool
    error: Optional[str] = None


class SessionResponse(BaseModel):
    """Response for GET /v1/session"""

    is_authenticated: bool
    user_type: Optional[UserType] = None
    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    permissions: List[str] = []


class LogoutResponse(BaseModel):
    redirect: str


class CustomerDashboardResponse(BaseModel):
    total_contracts: int
    active_contracts: int
    total_outstanding: Decimal
    total_outstanding_display: str
    next_payment_due: Optional[date] = None
    next_payment_amount: Optional[Decimal] = None


class AdminDashboardResponse(BaseModel):
    total_customers: int
    active_contracts: int
    total_revenue: Decimal
    total_revenue_display: str
    overdue_payments: int


class InstallmentView(BaseModel):
    """Installment with its derived status and badge token"""

    installment_no: int
    due_date: date
    due_date_display: str
    amount: Decimal
    paid_amount: Decimal
    status: str
    status_color: str


class PaymentView(BaseModel):
    transaction_ref: str
    amount: Decimal
    amount_display: str
    payment_method: str
    status: str
    status_color: str
    paid_on: str


class ContractSummaryResponse(BaseModel):
    """Response for GET /v1/contracts/{contract_id}/summary"""

    contract_id: str
    contract_number: str
    status: str
    status_color: str
    payment_frequency: str
    progress_percent: float
    total_price_display: str
    total_paid_display: str
    outstanding_balance_display: str
    overdue_installments: int
    next_due_date: Optional[date] = None
    amount_collected: Decimal
    installments: List[InstallmentView]
    payments: List[PaymentView]


class SchedulePreviewRequest(BaseModel):
    """Request body for POST /v1/contracts/schedule-preview"""

    total_price: Decimal = Field(..., gt=0)
    deposit_amount: Decimal = Field(Decimal("0"), ge=0)
    total_installments: int = Field(..., gt=0)
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    start_date: Optional[date] = None


class PlannedInstallmentSchema(BaseModel):
    installment_no: int
    due_date: date
    amount: Decimal


class SchedulePreviewResponse(BaseModel):
    finance_amount: Decimal
    installment_amount_display: str
    installments: List[PlannedInstallmentSchema]
