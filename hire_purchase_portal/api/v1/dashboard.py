"""GET /v1/dashboard - Summary cards for the signed-in admin or customer"""

from typing import Union

from fastapi import APIRouter, Depends

from hire_purchase_portal.api.dependencies import get_portal_client
from hire_purchase_portal.api.v1.schemas import AdminDashboardResponse, CustomerDashboardResponse
from hire_purchase_portal.domain.dashboard import AdminDashboardStats
from hire_purchase_portal.infrastructure.clients.portal import PortalClient
from hire_purchase_portal.utils.formatting import format_currency

router = APIRouter()


@router.get("/dashboard", response_model=Union[AdminDashboardResponse, CustomerDashboardResponse])
async def get_dashboard(client: PortalClient = Depends(get_portal_client)):
    """
    Load every dashboard figure concurrently.

    Returns once all backend calls settle; any failure becomes an error
    notification and nothing partial is returned.
    """
    stats = await client.load_dashboard()

    if isinstance(stats, AdminDashboardStats):
        return AdminDashboardResponse(
            total_customers=stats.total_customers,
            active_contracts=stats.active_contracts,
            total_revenue=stats.total_revenue,
            total_revenue_display=format_currency(stats.total_revenue),
            overdue_payments=stats.overdue_payments,
        )

    next_due = stats.next_payment_due
    return CustomerDashboardResponse(
        total_contracts=stats.total_contracts,
        active_contracts=stats.active_contracts,
        total_outstanding=stats.total_outstanding,
        total_outstanding_display=format_currency(stats.total_outstanding),
        next_payment_due=next_due.due_date if next_due else None,
        next_payment_amount=(next_due.amount - next_due.paid_amount) if next_due else None,
    )
