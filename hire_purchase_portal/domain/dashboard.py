"""Dashboard statistics computed from backend snapshots"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from hire_purchase_portal.domain.models import ContractStatus, HirePurchaseContract, InstallmentSchedule


@dataclass(frozen=True)
class CustomerDashboardStats:
    total_contracts: int
    active_contracts: int
    total_outstanding: Decimal
    next_payment_due: Optional[InstallmentSchedule]


@dataclass(frozen=True)
class AdminDashboardStats:
    total_customers: int
    active_contracts: int
    total_revenue: Decimal
    overdue_payments: int


def customer_dashboard_stats(
    contracts: Sequence[HirePurchaseContract],
    upcoming: Sequence[InstallmentSchedule],
) -> CustomerDashboardStats:
    """
    Summary cards for the customer portal.

    `upcoming` is the backend's upcoming-installment list, already ordered by
    due date, so its first entry is the next payment due.
    """
    return CustomerDashboardStats(
        total_contracts=len(contracts),
        active_contracts=sum(1 for c in contracts if c.status is ContractStatus.ACTIVE),
        total_outstanding=sum((c.outstanding_balance for c in contracts), Decimal("0")),
        next_payment_due=upcoming[0] if upcoming else None,
    )


def admin_dashboard_stats(total_customers: int, active_contracts: int, overview: dict) -> AdminDashboardStats:
    """Combine pagination totals with the backend's dashboard overview payload"""
    payments = overview.get("payments") or {}
    alerts = overview.get("alerts") or {}
    return AdminDashboardStats(
        total_customers=total_customers,
        active_contracts=active_contracts,
        total_revenue=Decimal(str(payments.get("monthlyTotal") or 0)),
        overdue_payments=int(alerts.get("overdueInstallments") or 0),
    )
