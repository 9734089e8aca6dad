"""Export definitions for the backend's admin reports"""

from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from hire_purchase_portal.domain.exceptions import UnknownReportError
from hire_purchase_portal.export.columns import (
    Column,
    ComputedAccessor,
    DateRange,
    ExportOptions,
    FieldAccessor,
    SummaryItem,
)
from hire_purchase_portal.utils.formatting import format_currency, format_date

ReportBuilder = Callable[[Dict[str, Any], Optional[date], Optional[date]], ExportOptions]


def _get(row: Dict[str, Any], *path: str) -> Any:
    """Walk nested keys, None once anything along the way is missing"""
    value: Any = row
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _customer_name(row: Dict[str, Any]) -> str:
    customer = row.get("customer") or {}
    return f"{customer.get('firstName') or ''} {customer.get('lastName') or ''}"


def _period(start: Optional[date], end: Optional[date]) -> Optional[DateRange]:
    if start is None or end is None:
        return None
    return DateRange(start=format_date(start), end=format_date(end))


def _dated_filename(prefix: str, start: Optional[date], end: Optional[date]) -> str:
    if start and end:
        return f"{prefix}-{start.isoformat()}-to-{end.isoformat()}"
    return f"{prefix}-{date.today().isoformat()}"


def payment_report(report: Dict[str, Any], start: Optional[date], end: Optional[date]) -> ExportOptions:
    summary = report.get("summary") or {}
    return ExportOptions(
        title="Payment Report",
        filename=_dated_filename("payment-report", start, end),
        date_range=_period(start, end),
        summary=[
            SummaryItem("Total Transactions", summary.get("totalTransactions") or 0),
            SummaryItem("Successful", summary.get("successfulTransactions") or 0),
            SummaryItem("Failed", summary.get("failedTransactions") or 0),
            SummaryItem("Total Collected", format_currency(summary.get("totalAmountCollected"))),
        ],
        columns=[
            Column("Date", ComputedAccessor(lambda row: format_date(row.get("createdAt"))), "left"),
            Column("Transaction Ref", FieldAccessor("transactionRef"), "left"),
            Column("Contract #", ComputedAccessor(lambda row: _get(row, "contract", "contractNumber") or "-"), "left"),
            Column("Customer", ComputedAccessor(_customer_name), "left"),
            Column("Amount", ComputedAccessor(lambda row: format_currency(row.get("amount"))), "right"),
            Column("Method", FieldAccessor("paymentMethod"), "left"),
            Column("Status", FieldAccessor("status"), "left"),
        ],
        data=report.get("payments") or [],
    )


def sales_report(report: Dict[str, Any], start: Optional[date], end: Optional[date]) -> ExportOptions:
    summary = report.get("summary") or {}
    return ExportOptions(
        title="Sales Report",
        filename=_dated_filename("sales-report", start, end),
        date_range=_period(start, end),
        summary=[
            SummaryItem("Total Contracts", summary.get("totalContracts") or 0),
            SummaryItem("Total Sales Value", format_currency(summary.get("totalSalesValue"))),
            SummaryItem("Total Deposits", format_currency(summary.get("totalDeposits"))),
            SummaryItem("Average Contract Value", format_currency(summary.get("averageContractValue"))),
        ],
        columns=[
            Column("Date", ComputedAccessor(lambda row: format_date(row.get("createdAt"))), "left"),
            Column("Contract #", FieldAccessor("contractNumber"), "left"),
            Column("Customer", ComputedAccessor(_customer_name), "left"),
            Column("Product", ComputedAccessor(lambda row: _get(row, "inventoryItem", "product", "name") or "-"), "left"),
            Column("Total Price", ComputedAccessor(lambda row: format_currency(row.get("totalPrice"))), "right"),
            Column("Deposit", ComputedAccessor(lambda row: format_currency(row.get("depositAmount"))), "right"),
            Column("Status", FieldAccessor("status"), "left"),
        ],
        data=report.get("contracts") or [],
    )


def defaulters_report(report: Dict[str, Any], start: Optional[date], end: Optional[date]) -> ExportOptions:
    """Point-in-time report: no period, filename stamped with today's date"""
    summary = report.get("summary") or {}
    return ExportOptions(
        title="Defaulters Report",
        filename=_dated_filename("defaulters-report", None, None),
        summary=[
            SummaryItem("Total Defaulters", summary.get("totalDefaulters") or 0),
            SummaryItem("Total Overdue Amount", format_currency(summary.get("totalOverdueAmount"))),
            SummaryItem("Total Penalties", format_currency(summary.get("totalPenalties"))),
        ],
        columns=[
            Column("Customer", ComputedAccessor(_customer_name), "left"),
            Column("Contact", ComputedAccessor(lambda row: row["customer"]["phone"]), "left"),
            Column("Contract #", ComputedAccessor(lambda row: row["contract"]["contractNumber"]), "left"),
            Column("Product", ComputedAccessor(lambda row: _get(row, "product", "name") or "-"), "left"),
            Column("Overdue Installments", FieldAccessor("overdueInstallments"), "right"),
            Column("Overdue Amount", ComputedAccessor(lambda row: format_currency(row.get("totalOverdueAmount"))), "right"),
            Column("Penalties", ComputedAccessor(lambda row: format_currency(row.get("unpaidPenalties"))), "right"),
            Column("Total Owed", ComputedAccessor(lambda row: format_currency(row.get("totalOwed"))), "right"),
            Column("Days Overdue", ComputedAccessor(lambda row: f"{row['daysOverdue']} days"), "right"),
            Column("Oldest Due Date", ComputedAccessor(lambda row: format_date(row.get("oldestOverdueDate"))), "left"),
        ],
        data=report.get("defaulters") or [],
    )


def inventory_report(report: Dict[str, Any], start: Optional[date], end: Optional[date]) -> ExportOptions:
    summary = report.get("summary") or {}
    return ExportOptions(
        title="Inventory Report",
        filename=_dated_filename("inventory-report", None, None),
        summary=[
            SummaryItem("Total Products", summary.get("totalProducts") or 0),
            SummaryItem("Total Items", summary.get("totalItems") or 0),
            SummaryItem("Available Items", summary.get("availableItems") or 0),
            SummaryItem("Stock Value", format_currency(summary.get("totalStockValue"))),
        ],
        columns=[
            Column("Product", ComputedAccessor(lambda row: row["product"]["name"]), "left"),
            Column("Category", ComputedAccessor(lambda row: row["product"].get("category")), "left"),
            Column("Unit Price", ComputedAccessor(lambda row: format_currency(row["product"].get("basePrice"))), "right"),
            Column("Total Items", ComputedAccessor(lambda row: row["inventory"]["total"]), "right"),
            Column("Available", ComputedAccessor(lambda row: row["inventory"]["available"]), "right"),
            Column("Sold", ComputedAccessor(lambda row: row["inventory"]["sold"]), "right"),
            Column("Reserved", ComputedAccessor(lambda row: row["inventory"]["reserved"]), "right"),
            Column("Stock Value", ComputedAccessor(lambda row: format_currency(row.get("stockValue"))), "right"),
            Column("Status", ComputedAccessor(lambda row: "Active" if row["product"].get("isActive") else "Inactive"), "left"),
        ],
        data=report.get("inventory") or [],
    )


def dashboard_overview_report(report: Dict[str, Any], start: Optional[date], end: Optional[date]) -> ExportOptions:
    return ExportOptions(
        title="Dashboard Overview",
        filename=_dated_filename("dashboard-overview", None, None),
        summary=[
            SummaryItem("Total Customers", _get(report, "customers", "total") or 0),
            SummaryItem("Total Contracts", _get(report, "contracts", "total") or 0),
            SummaryItem("Active Contracts", _get(report, "contracts", "active") or 0),
            SummaryItem("Available Inventory", _get(report, "inventory", "availableItems") or 0),
            SummaryItem("Overdue Installments", _get(report, "alerts", "overdueInstallments") or 0),
            SummaryItem("This Month Collections", format_currency(_get(report, "payments", "monthlyTotal"))),
            SummaryItem("This Week Collections", format_currency(_get(report, "payments", "weeklyTotal"))),
        ],
        columns=[
            Column("Date", ComputedAccessor(lambda row: format_date(row.get("createdAt"))), "left"),
            Column("Contract #", FieldAccessor("contractNumber"), "left"),
            Column("Customer", ComputedAccessor(_customer_name), "left"),
            Column("Product", ComputedAccessor(lambda row: _get(row, "inventoryItem", "product", "name") or "-"), "left"),
            Column("Total Price", ComputedAccessor(lambda row: format_currency(row.get("totalPrice"))), "right"),
            Column("Status", FieldAccessor("status"), "left"),
        ],
        data=report.get("recentContracts") or [],
    )


def income_report(report: Dict[str, Any], start: Optional[date], end: Optional[date]) -> ExportOptions:
    stats = report.get("stats") or {}
    return ExportOptions(
        title="Income Report",
        filename=_dated_filename("income-report", start, end),
        date_range=_period(start, end),
        summary=[
            SummaryItem("Total Income", format_currency(stats.get("totalIncome"))),
            SummaryItem("Total Payments", stats.get("totalPayments") or 0),
            SummaryItem("Successful", stats.get("successfulPayments") or 0),
            SummaryItem("Pending", stats.get("pendingPayments") or 0),
            SummaryItem("Failed", stats.get("failedPayments") or 0),
            SummaryItem("Average Payment", format_currency(stats.get("averagePayment"))),
        ],
        columns=[
            Column("Date", ComputedAccessor(lambda row: format_date(row.get("paymentDate") or row.get("createdAt"))), "left"),
            Column("Transaction Ref", FieldAccessor("transactionRef"), "left"),
            Column("Customer", ComputedAccessor(_customer_name), "left"),
            Column("Membership ID", ComputedAccessor(lambda row: _get(row, "customer", "membershipId")), "left"),
            Column("Contract Number", ComputedAccessor(lambda row: _get(row, "contract", "contractNumber")), "left"),
            Column("Amount", ComputedAccessor(lambda row: format_currency(row.get("amount"))), "right"),
            Column("Payment Method", ComputedAccessor(lambda row: row.get("paymentMethod") or "N/A"), "left"),
            Column("Provider", ComputedAccessor(lambda row: row.get("mobileMoneyProvider") or "N/A"), "left"),
            Column("Status", FieldAccessor("status"), "left"),
        ],
        data=report.get("payments") or [],
    )


# Mobile network names as shown to staff, matched against the backend's channel code
CHANNEL_NAMES = (
    ("mtn", "MTN"),
    ("vodafone", "Vodafone"),
    ("telecel", "Telecel"),
    ("airteltigo", "AirtelTigo"),
)


def channel_name(channel: Optional[str]) -> str:
    """e.g. "mtn-gh-direct-debit" → "MTN"; unknown channels are shown as sent"""
    channel = channel or ""
    for code, name in CHANNEL_NAMES:
        if code in channel:
            return name
    return channel


def _optional_date(value: Any) -> str:
    return format_date(value) if value else "N/A"


def _contract_numbers(row: Dict[str, Any]) -> str:
    return "; ".join(contract["contractNumber"] for contract in row.get("contracts") or [])


def _contracts_value(row: Dict[str, Any]) -> str:
    total = sum((Decimal(str(contract.get("totalPrice") or 0)) for contract in row.get("contracts") or []), Decimal(0))
    return format_currency(total)


def preapprovals_report(report: Dict[str, Any], start: Optional[date], end: Optional[date]) -> ExportOptions:
    """Direct-debit mandates and the contracts they pay for; point-in-time"""
    stats = report.get("stats") or {}
    return ExportOptions(
        title="Preapprovals Report",
        filename=_dated_filename("preapprovals-report", None, None),
        summary=[
            SummaryItem("Total Preapprovals", stats.get("total") or 0),
            SummaryItem("Approved", stats.get("approved") or 0),
            SummaryItem("Pending", stats.get("pending") or 0),
            SummaryItem("Failed", stats.get("failed") or 0),
            SummaryItem("Expired", stats.get("expired") or 0),
            SummaryItem("Cancelled", stats.get("cancelled") or 0),
        ],
        columns=[
            Column("Customer Name", ComputedAccessor(_customer_name), "left"),
            Column("Membership ID", ComputedAccessor(lambda row: row["customer"]["membershipId"]), "left"),
            Column("Phone", ComputedAccessor(lambda row: row["customer"]["phone"]), "left"),
            Column("Email", ComputedAccessor(lambda row: _get(row, "customer", "email") or "N/A"), "left"),
            Column("Status", FieldAccessor("status"), "left"),
            Column("Channel", ComputedAccessor(lambda row: channel_name(row.get("channel"))), "left"),
            Column("Verification Type", ComputedAccessor(lambda row: row.get("verificationType") or "N/A"), "left"),
            Column("Client Reference", FieldAccessor("clientReferenceId"), "left"),
            Column("Hubtel ID", ComputedAccessor(lambda row: row.get("hubtelPreapprovalId") or "N/A"), "left"),
            Column("Created Date", ComputedAccessor(lambda row: format_date(row.get("createdAt"))), "left"),
            Column("Approved Date", ComputedAccessor(lambda row: _optional_date(row.get("approvedAt"))), "left"),
            Column("Expires Date", ComputedAccessor(lambda row: _optional_date(row.get("expiresAt"))), "left"),
            Column("Contracts", ComputedAccessor(_contract_numbers), "left"),
            Column("Total Contract Value", ComputedAccessor(_contracts_value), "right"),
        ],
        data=report.get("preapprovals") or [],
    )


REPORTS: Dict[str, ReportBuilder] = {
    "payments": payment_report,
    "sales": sales_report,
    "defaults": defaulters_report,
    "inventory": inventory_report,
    "dashboard": dashboard_overview_report,
    "income": income_report,
    "preapprovals": preapprovals_report,
}

# Reports the backend filters by period
DATED_REPORTS = frozenset({"payments", "sales", "income"})


def build_report_options(
    kind: str,
    report: Dict[str, Any],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> ExportOptions:
    """Map a backend report payload to its export configuration"""
    try:
        builder = REPORTS[kind]
    except KeyError:
        raise UnknownReportError(f"No export definition for report '{kind}'") from None
    return builder(report, start, end)
