"""Payment aggregation"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from hire_purchase_portal.domain.models import PaymentStatus, PaymentTransaction


@dataclass(frozen=True)
class PaymentSummary:
    total_transactions: int
    successful_transactions: int
    failed_transactions: int
    pending_transactions: int
    total_amount_collected: Decimal


def summarize_payments(payments: Sequence[PaymentTransaction]) -> PaymentSummary:
    """Transaction counts by status; only successful payments count as collected"""
    successful = [p for p in payments if p.status is PaymentStatus.SUCCESS]
    return PaymentSummary(
        total_transactions=len(payments),
        successful_transactions=len(successful),
        failed_transactions=sum(1 for p in payments if p.status is PaymentStatus.FAILED),
        pending_transactions=sum(1 for p in payments if p.status is PaymentStatus.PENDING),
        total_amount_collected=sum((p.amount for p in successful), Decimal("0")),
    )
