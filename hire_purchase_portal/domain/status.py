"""Derived display state for contracts, installments, payments and stock"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, Optional, Union

from hire_purchase_portal.domain.models import InstallmentStatus, PaymentFrequency
from hire_purchase_portal.utils.date_utils import DateLike, parse_datetime, utc_now

Number = Union[Decimal, int, float]

NEUTRAL_STATUS_COLOR = "bg-gray-100 text-gray-800"

STATUS_COLORS: Dict[str, str] = {
    # Contracts
    "ACTIVE": "bg-blue-100 text-blue-800",
    "COMPLETED": "bg-green-100 text-green-800",
    "DEFAULTED": "bg-red-100 text-red-800",
    "CANCELLED": "bg-gray-100 text-gray-800",
    # Installments
    "PENDING": "bg-yellow-100 text-yellow-800",
    "PARTIAL": "bg-orange-100 text-orange-800",
    "PAID": "bg-green-100 text-green-800",
    "OVERDUE": "bg-red-100 text-red-800",
    # Payments
    "SUCCESS": "bg-green-100 text-green-800",
    "FAILED": "bg-red-100 text-red-800",
    # Inventory
    "AVAILABLE": "bg-blue-100 text-blue-800",
    "SOLD": "bg-gray-100 text-gray-800",
    "RESERVED": "bg-yellow-100 text-yellow-800",
}

FREQUENCY_LABELS: Dict[PaymentFrequency, str] = {
    PaymentFrequency.DAILY: "Daily",
    PaymentFrequency.WEEKLY: "Weekly",
    PaymentFrequency.MONTHLY: "Monthly",
}


def calculate_progress(total_paid: Number, total_price: Number) -> float:
    """
    Percentage of the contract price paid so far, clamped to 100.

    A zero price yields 0 rather than dividing by zero.
    """
    if total_price == 0:
        return 0.0
    return min(float(total_paid) / float(total_price) * 100, 100.0)


def is_overdue(due_date: DateLike, grace_period_days: int = 0, now: Optional[datetime] = None) -> bool:
    """
    True once the current time is strictly past due_date + grace period.

    The exact boundary instant is not overdue. Dates without a time count
    from midnight UTC; pass `now` to evaluate at a fixed instant.
    """
    deadline = parse_datetime(due_date) + timedelta(days=grace_period_days)
    current = parse_datetime(now) if now is not None else utc_now()
    return current > deadline


def get_status_color(status: str) -> str:
    """Style token for a status badge; unknown statuses get the neutral token"""
    return STATUS_COLORS.get(str(getattr(status, "value", status)), NEUTRAL_STATUS_COLOR)


def get_payment_frequency_label(frequency: Union[PaymentFrequency, str]) -> str:
    return FREQUENCY_LABELS[PaymentFrequency(frequency)]


def derive_installment_status(
    amount: Number,
    paid_amount: Number,
    due_date: DateLike,
    grace_period_days: int = 0,
    now: Optional[datetime] = None,
) -> InstallmentStatus:
    """
    Classify an installment from what was paid and when it fell due.

    Order of precedence:
    - PAID: paid amount covers the scheduled amount
    - OVERDUE: past due date + grace period and not fully paid
    - PARTIAL: something paid, not yet overdue
    - PENDING: nothing paid, not yet overdue
    """
    if Decimal(str(paid_amount)) >= Decimal(str(amount)):
        return InstallmentStatus.PAID
    if is_overdue(due_date, grace_period_days, now):
        return InstallmentStatus.OVERDUE
    if Decimal(str(paid_amount)) > 0:
        return InstallmentStatus.PARTIAL
    return InstallmentStatus.PENDING
