"""Installment schedules: preview for new contracts and aggregation of existing ones"""

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from hire_purchase_portal.domain.models import (
    InstallmentSchedule,
    InstallmentStatus,
    PaymentFrequency,
    PlannedInstallment,
)
from hire_purchase_portal.domain.status import derive_installment_status
from hire_purchase_portal.utils.date_utils import add_months

PESEWAS = Decimal("100")


@dataclass(frozen=True)
class InstallmentSummary:
    """Aggregate view of a contract's installment schedule"""

    counts: Dict[InstallmentStatus, int]
    total_scheduled: Decimal
    total_paid: Decimal
    remaining: Decimal
    next_due: Optional[InstallmentSchedule]

    @property
    def overdue_count(self) -> int:
        return self.counts[InstallmentStatus.OVERDUE]


def due_date_for(start_date: date, index: int, frequency: PaymentFrequency) -> date:
    """Due date of the installment at zero-based `index`"""
    if frequency is PaymentFrequency.DAILY:
        return start_date + timedelta(days=index)
    if frequency is PaymentFrequency.WEEKLY:
        return start_date + timedelta(days=index * 7)
    return add_months(start_date, index)


def generate_installment_plan(
    total_price: Decimal,
    deposit_amount: Decimal,
    total_installments: int,
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY,
    start_date: date | None = None,
) -> List[PlannedInstallment]:
    """
    Preview the repayment schedule for a contract about to be issued.

    Requirements:
    - Finance amount = total price - deposit
    - Equal installments, first one due on the start date
    - Last installment absorbs the rounding remainder (in pesewas)

    Example:
        GH₵1,000.00 over 3 → [333.33, 333.33, 333.34]
    """
    finance_pesewas = int((Decimal(total_price) - Decimal(deposit_amount)) * PESEWAS)
    if finance_pesewas <= 0 or total_installments <= 0:
        return []

    if start_date is None:
        start_date = date.today()

    base_amount = finance_pesewas // total_installments
    remainder = finance_pesewas % total_installments

    plan = []
    for i in range(total_installments):
        amount = base_amount + (remainder if i == total_installments - 1 else 0)
        plan.append(
            PlannedInstallment(
                installment_no=i + 1,
                due_date=due_date_for(start_date, i, frequency),
                amount=Decimal(amount) / PESEWAS,
            )
        )

    return plan


def classify_installments(
    installments: Sequence[InstallmentSchedule],
    grace_period_days: int = 0,
    now: Optional[datetime] = None,
) -> List[InstallmentSchedule]:
    """Copies of the installments with their status re-derived at `now`, in schedule order"""
    return [
        replace(
            inst,
            status=derive_installment_status(inst.amount, inst.paid_amount, inst.due_date, grace_period_days, now),
        )
        for inst in sorted(installments, key=lambda i: i.installment_no)
    ]


def summarize_installments(
    installments: Sequence[InstallmentSchedule],
    grace_period_days: int = 0,
    now: Optional[datetime] = None,
) -> InstallmentSummary:
    """Counts per derived status, money totals and the next installment still owed"""
    classified = classify_installments(installments, grace_period_days, now)

    counts = {status: 0 for status in InstallmentStatus}
    for inst in classified:
        counts[inst.status] += 1

    total_scheduled = sum((inst.amount for inst in classified), Decimal("0"))
    total_paid = sum((inst.paid_amount for inst in classified), Decimal("0"))
    unpaid = [inst for inst in classified if inst.status is not InstallmentStatus.PAID]

    return InstallmentSummary(
        counts=counts,
        total_scheduled=total_scheduled,
        total_paid=total_paid,
        remaining=max(total_scheduled - total_paid, Decimal("0")),
        next_due=min(unpaid, key=lambda i: i.due_date) if unpaid else None,
    )
