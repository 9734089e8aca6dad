"""Contract endpoints - derived summary of an existing contract and schedule preview for a new one"""

from fastapi import APIRouter, Depends

from hire_purchase_portal.api.dependencies import get_portal_client
from hire_purchase_portal.api.v1.schemas import (
    ContractSummaryResponse,
    InstallmentView,
    PaymentView,
    PlannedInstallmentSchema,
    SchedulePreviewRequest,
    SchedulePreviewResponse,
)
from hire_purchase_portal.domain.installments import (
    classify_installments,
    generate_installment_plan,
    summarize_installments,
)
from hire_purchase_portal.domain.payments import summarize_payments
from hire_purchase_portal.domain.status import calculate_progress, get_payment_frequency_label, get_status_color
from hire_purchase_portal.infrastructure.clients.portal import PortalClient
from hire_purchase_portal.utils.date_utils import utc_now
from hire_purchase_portal.utils.formatting import format_currency, format_date, format_date_time

router = APIRouter()


@router.get("/contracts/{contract_id}/summary", response_model=ContractSummaryResponse)
async def get_contract_summary(contract_id: str, client: PortalClient = Depends(get_portal_client)):
    """
    Contract as the detail page shows it.

    Installment statuses are re-derived here from paid amounts, due dates
    and the contract's grace period, so every view classifies them alike.
    """
    contract = await client.get_contract(contract_id)
    now = utc_now()

    schedule = summarize_installments(contract.installments, contract.grace_period_days, now)

    installments = [
        InstallmentView(
            installment_no=inst.installment_no,
            due_date=inst.due_date,
            due_date_display=format_date(inst.due_date),
            amount=inst.amount,
            paid_amount=inst.paid_amount,
            status=inst.status.value,
            status_color=get_status_color(inst.status.value),
        )
        for inst in classify_installments(contract.installments, contract.grace_period_days, now)
    ]
    payments = [
        PaymentView(
            transaction_ref=p.transaction_ref,
            amount=p.amount,
            amount_display=format_currency(p.amount),
            payment_method=p.payment_method,
            status=p.status.value,
            status_color=get_status_color(p.status.value),
            paid_on=format_date_time(p.payment_date or p.created_at),
        )
        for p in contract.payments
    ]

    return ContractSummaryResponse(
        contract_id=contract.id,
        contract_number=contract.contract_number,
        status=contract.status.value,
        status_color=get_status_color(contract.status.value),
        payment_frequency=get_payment_frequency_label(contract.payment_frequency),
        progress_percent=round(calculate_progress(contract.total_paid, contract.total_price), 2),
        total_price_display=format_currency(contract.total_price),
        total_paid_display=format_currency(contract.total_paid),
        outstanding_balance_display=format_currency(contract.outstanding_balance),
        overdue_installments=schedule.overdue_count,
        next_due_date=schedule.next_due.due_date if schedule.next_due else None,
        amount_collected=summarize_payments(contract.payments).total_amount_collected,
        installments=installments,
        payments=payments,
    )


@router.post("/contracts/schedule-preview", response_model=SchedulePreviewResponse)
def preview_schedule(body: SchedulePreviewRequest):
    """Installment plan an admin sees before issuing a contract"""
    plan = generate_installment_plan(
        body.total_price,
        body.deposit_amount,
        body.total_installments,
        body.payment_frequency,
        body.start_date,
    )
    finance_amount = body.total_price - body.deposit_amount
    return SchedulePreviewResponse(
        finance_amount=finance_amount,
        installment_amount_display=format_currency(plan[0].amount) if plan else format_currency(0),
        installments=[
            PlannedInstallmentSchema(installment_no=p.installment_no, due_date=p.due_date, amount=p.amount)
            for p in plan
        ],
    )
