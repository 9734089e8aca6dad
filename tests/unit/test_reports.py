"""Unit tests for admin report export definitions"""

import csv
import io
from datetime import date

import pytest

from hire_purchase_portal.domain.exceptions import UnknownReportError
from hire_purchase_portal.export.columns import resolve_row
from hire_purchase_portal.export.csv_export import render_csv
from hire_purchase_portal.export.reports import DATED_REPORTS, REPORTS, build_report_options, channel_name


@pytest.fixture
def payment_report():
    return {
        "summary": {
            "totalTransactions": 2,
            "successfulTransactions": 1,
            "failedTransactions": 1,
            "totalAmountCollected": 500,
        },
        "payments": [
            {
                "createdAt": "2025-03-05T10:00:00.000Z",
                "transactionRef": "TXN-001",
                "contract": {"contractNumber": "HP-2025-0001"},
                "customer": {"firstName": "Kofi", "lastName": "Boateng"},
                "amount": 500,
                "paymentMethod": "MOBILE_MONEY",
                "status": "SUCCESS",
            },
            {
                "createdAt": "2025-03-06T10:00:00.000Z",
                "transactionRef": "TXN-002",
                "amount": "120.5",
                "paymentMethod": "CASH",
                "status": "FAILED",
            },
        ],
    }


def test_payment_report_options(payment_report):
    """Test title, dated filename, period and summary"""
    options = build_report_options("payments", payment_report, date(2025, 3, 1), date(2025, 3, 31))

    assert options.title == "Payment Report"
    assert options.filename == "payment-report-2025-03-01-to-2025-03-31"
    assert options.date_range.label == "Period: 01/03/2025 to 31/03/2025"
    assert [(item.label, item.value) for item in options.summary] == [
        ("Total Transactions", 2),
        ("Successful", 1),
        ("Failed", 1),
        ("Total Collected", "GH₵500.00"),
    ]


def test_payment_report_rows(payment_report):
    """Test cell rendering, including rows without contract or customer"""
    options = build_report_options("payments", payment_report, date(2025, 3, 1), date(2025, 3, 31))

    assert options.headers == ["Date", "Transaction Ref", "Contract #", "Customer", "Amount", "Method", "Status"]
    assert resolve_row(options.columns, options.data[0]) == [
        "05/03/2025",
        "TXN-001",
        "HP-2025-0001",
        "Kofi Boateng",
        "GH₵500.00",
        "MOBILE_MONEY",
        "SUCCESS",
    ]
    assert resolve_row(options.columns, options.data[1])[2:5] == ["-", " ", "GH₵120.50"]


def test_sales_report_nested_product():
    """Test product name read through the inventory item"""
    report = {
        "summary": {"totalContracts": 1, "totalSalesValue": 2400, "totalDeposits": 400, "averageContractValue": 2400},
        "contracts": [
            {
                "createdAt": "2025-03-02",
                "contractNumber": "HP-2025-0002",
                "customer": {"firstName": "Esi", "lastName": "Owusu"},
                "inventoryItem": {"product": {"name": "Samsung A15"}},
                "totalPrice": 2400,
                "depositAmount": 400,
                "status": "ACTIVE",
            }
        ],
    }
    options = build_report_options("sales", report, date(2025, 3, 1), date(2025, 3, 31))

    assert options.filename == "sales-report-2025-03-01-to-2025-03-31"
    assert resolve_row(options.columns, options.data[0]) == [
        "02/03/2025",
        "HP-2025-0002",
        "Esi Owusu",
        "Samsung A15",
        "GH₵2,400.00",
        "GH₵400.00",
        "ACTIVE",
    ]


def test_defaulters_report_is_point_in_time():
    """Test defaulters report has no period and is stamped with today"""
    report = {
        "summary": {"totalDefaulters": 1, "totalOverdueAmount": 1000, "totalPenalties": 50},
        "defaulters": [
            {
                "customer": {"firstName": "Yaw", "lastName": "Asante", "phone": "0209999999"},
                "contract": {"contractNumber": "HP-2024-0100"},
                "product": {"name": "Tecno Spark"},
                "overdueInstallments": 2,
                "totalOverdueAmount": 1000,
                "unpaidPenalties": 50,
                "totalOwed": 1050,
                "daysOverdue": 45,
                "oldestOverdueDate": "2025-01-15T00:00:00.000Z",
            }
        ],
    }
    options = build_report_options("defaults", report, date(2025, 3, 1), date(2025, 3, 31))

    assert options.date_range is None
    assert options.filename == f"defaulters-report-{date.today().isoformat()}"
    row = resolve_row(options.columns, options.data[0])
    assert row[1] == "0209999999"
    assert row[4] == "2"
    assert row[7] == "GH₵1,050.00"
    assert row[8] == "45 days"
    assert row[9] == "15/01/2025"


def test_defaulters_report_missing_customer_fails_export():
    """Test malformed rows surface as export errors"""
    options = build_report_options("defaults", {"defaulters": [{"contract": {"contractNumber": "X"}}]})
    with pytest.raises(KeyError):
        render_csv(options)


def test_inventory_report_rows():
    """Test stock counts and active flag"""
    report = {
        "summary": {"totalProducts": 1, "totalItems": 10, "availableItems": 6, "totalStockValue": 12000},
        "inventory": [
            {
                "product": {"name": "Infinix Hot 40", "category": "Phones", "basePrice": 2000, "isActive": False},
                "inventory": {"total": 10, "available": 6, "sold": 3, "reserved": 1},
                "stockValue": 12000,
            }
        ],
    }
    options = build_report_options("inventory", report)

    assert resolve_row(options.columns, options.data[0]) == [
        "Infinix Hot 40",
        "Phones",
        "GH₵2,000.00",
        "10",
        "6",
        "3",
        "1",
        "GH₵12,000.00",
        "Inactive",
    ]


def test_dashboard_overview_report_summary():
    """Test overview figures and recent contracts"""
    report = {
        "customers": {"total": 120},
        "contracts": {"total": 80, "active": 45},
        "inventory": {"availableItems": 30},
        "payments": {"monthlyTotal": 12500.75, "weeklyTotal": 3000},
        "alerts": {"overdueInstallments": 4},
        "recentContracts": [],
    }
    options = build_report_options("dashboard", report)

    summary = {item.label: item.value for item in options.summary}
    assert summary["Total Customers"] == 120
    assert summary["Active Contracts"] == 45
    assert summary["This Month Collections"] == "GH₵12,500.75"
    assert options.data == []


def test_empty_report_payload_exports_headers_only():
    """Test a report with no rows still exports"""
    content = render_csv(build_report_options("sales", {}, date(2025, 3, 1), date(2025, 3, 31)))
    assert list(csv.reader(io.StringIO(content))) == [
        ["Date", "Contract #", "Customer", "Product", "Total Price", "Deposit", "Status"]
    ]


def test_unknown_report_kind():
    """Test unsupported kinds are rejected"""
    with pytest.raises(UnknownReportError):
        build_report_options("audit", {})


def test_dated_reports_are_defined():
    """Test every dated report has a definition"""
    assert DATED_REPORTS <= set(REPORTS)


def test_income_report_options():
    """Test dated income report: summary, payment date preferred over creation date, N/A fallbacks"""
    report = {
        "stats": {
            "totalPayments": 3,
            "successfulPayments": 2,
            "pendingPayments": 1,
            "failedPayments": 0,
            "totalIncome": 1250.5,
            "averagePayment": 625.25,
        },
        "payments": [
            {
                "paymentDate": "2025-03-07T09:30:00.000Z",
                "createdAt": "2025-03-05T10:00:00.000Z",
                "transactionRef": "TXN-101",
                "customer": {"firstName": "Kofi", "lastName": "Boateng", "membershipId": "HP-000123"},
                "contract": {"contractNumber": "HP-2025-0001"},
                "amount": 1000,
                "paymentMethod": "HUBTEL_MOMO",
                "mobileMoneyProvider": "MTN",
                "status": "SUCCESS",
            },
            {
                "paymentDate": None,
                "createdAt": "2025-03-08T10:00:00.000Z",
                "transactionRef": "TXN-102",
                "customer": {"firstName": "Esi", "lastName": "Owusu", "membershipId": "HP-000124"},
                "contract": {"contractNumber": "HP-2025-0002"},
                "amount": "250.5",
                "paymentMethod": None,
                "mobileMoneyProvider": None,
                "status": "PENDING",
            },
        ],
    }

    options = build_report_options("income", report, date(2025, 3, 1), date(2025, 3, 31))

    assert options.title == "Income Report"
    assert options.filename == "income-report-2025-03-01-to-2025-03-31"
    assert options.date_range.label == "Period: 01/03/2025 to 31/03/2025"
    summary = {item.label: item.value for item in options.summary}
    assert summary["Total Income"] == "GH₵1,250.50"
    assert summary["Total Payments"] == 3
    assert summary["Average Payment"] == "GH₵625.25"
    assert options.headers == [
        "Date",
        "Transaction Ref",
        "Customer",
        "Membership ID",
        "Contract Number",
        "Amount",
        "Payment Method",
        "Provider",
        "Status",
    ]
    assert resolve_row(options.columns, options.data[0]) == [
        "07/03/2025",
        "TXN-101",
        "Kofi Boateng",
        "HP-000123",
        "HP-2025-0001",
        "GH₵1,000.00",
        "HUBTEL_MOMO",
        "MTN",
        "SUCCESS",
    ]
    row = resolve_row(options.columns, options.data[1])
    assert row[0] == "08/03/2025"
    assert row[6:8] == ["N/A", "N/A"]


def test_preapprovals_report_rows():
    """Test mandate rows: channel names, optional dates, joined contracts and their total value"""
    report = {
        "stats": {"total": 2, "approved": 1, "pending": 1, "failed": 0, "expired": 0, "cancelled": 0},
        "preapprovals": [
            {
                "clientReferenceId": "PRE-001",
                "hubtelPreapprovalId": "HUB-9",
                "status": "APPROVED",
                "channel": "mtn-gh-direct-debit",
                "verificationType": "USSD",
                "createdAt": "2025-03-01T08:00:00.000Z",
                "approvedAt": "2025-03-02T08:00:00.000Z",
                "expiresAt": None,
                "customer": {
                    "firstName": "Kofi",
                    "lastName": "Boateng",
                    "membershipId": "HP-000123",
                    "phone": "0241234567",
                    "email": None,
                },
                "contracts": [
                    {"contractNumber": "HP-2025-0001", "totalPrice": 1500},
                    {"contractNumber": "HP-2025-0003", "totalPrice": "999.99"},
                ],
            },
        ],
    }

    options = build_report_options("preapprovals", report)

    assert options.title == "Preapprovals Report"
    assert options.filename == f"preapprovals-report-{date.today().isoformat()}"
    assert options.date_range is None
    assert [item.value for item in options.summary] == [2, 1, 1, 0, 0, 0]
    assert resolve_row(options.columns, options.data[0]) == [
        "Kofi Boateng",
        "HP-000123",
        "0241234567",
        "N/A",
        "APPROVED",
        "MTN",
        "USSD",
        "PRE-001",
        "HUB-9",
        "01/03/2025",
        "02/03/2025",
        "N/A",
        "HP-2025-0001; HP-2025-0003",
        "GH₵2,499.99",
    ]


@pytest.mark.parametrize(
    "channel, expected",
    [
        ("vodafone-gh-direct-debit", "Vodafone"),
        ("telecel-gh", "Telecel"),
        ("airteltigo-gh", "AirtelTigo"),
        ("bank-transfer", "bank-transfer"),
        (None, ""),
    ],
)
def test_channel_name(channel, expected):
    assert channel_name(channel) == expected


def test_income_is_a_dated_report():
    """Test income follows the period filter like payments and sales"""
    assert "income" in DATED_REPORTS
    assert "preapprovals" not in DATED_REPORTS
