"""Pytest fixtures for testing"""

import os

# Keep the import-time app off the working directory
os.environ.setdefault("STORAGE_URL", "sqlite:///:memory:")

import json
from datetime import date, timedelta
from typing import Any, Callable, Dict, Optional

import httpx
import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from hire_purchase_portal.api.dependencies import get_portal_client, get_session
from hire_purchase_portal.api.main import create_app
from hire_purchase_portal.domain.models import AdminUser, Customer, UserType
from hire_purchase_portal.infrastructure.clients.portal import PortalClient
from hire_purchase_portal.session.context import SessionContext
from hire_purchase_portal.session.storage import MemoryStorage

BACKEND_URL = "http://backend.test/api"


class FakeBackend:
    """Routes backend requests to canned responses and records every request sent"""

    def __init__(self):
        self.routes: Dict[tuple, Any] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, payload: Any = None, status_code: int = 200) -> None:
        self.routes[(method, path)] = lambda request: httpx.Response(status_code, json=payload)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], Any]) -> None:
        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, json={"error": f"No route for {request.method} {path}"})
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def last(self, path: str) -> httpx.Request:
        return [r for r in self.requests if r.url.path.removeprefix("/api") == path][-1]

    @staticmethod
    def body(request: httpx.Request) -> Dict[str, Any]:
        return json.loads(request.content)


def admin_payload() -> Dict[str, Any]:
    return {
        "id": "admin_1",
        "email": "ama@shop.test",
        "firstName": "Ama",
        "lastName": "Mensah",
        "role": "MANAGER",
        "permissions": ["reports.view", "contracts.view"],
    }


def customer_payload() -> Dict[str, Any]:
    return {
        "id": "cust_1",
        "email": "kofi@mail.test",
        "firstName": "Kofi",
        "lastName": "Boateng",
        "membershipId": "HP-000123",
        "phone": "0241234567",
        "isActivated": True,
    }


def installment_payload(
    no: int,
    due_date: str,
    amount: str = "500.00",
    paid_amount: str = "0",
    status: str = "PENDING",
) -> Dict[str, Any]:
    return {
        "id": f"inst_{no}",
        "contractId": "contract_1",
        "installmentNo": no,
        "dueDate": due_date,
        "amount": amount,
        "paidAmount": paid_amount,
        "status": status,
    }


def contract_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "id": "contract_1",
        "contractNumber": "HP-2025-0001",
        "customerId": "cust_1",
        "totalPrice": "1500.00",
        "depositAmount": "0",
        "financeAmount": "1500.00",
        "installmentAmount": "500.00",
        "paymentFrequency": "MONTHLY",
        "totalInstallments": 3,
        "gracePeriodDays": 7,
        "penaltyPercentage": "5",
        "startDate": "2020-01-01T00:00:00.000Z",
        "endDate": "2099-03-01T00:00:00.000Z",
        "status": "ACTIVE",
        "totalPaid": "500.00",
        "outstandingBalance": "1000.00",
        "installments": [],
        "payments": [],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def session() -> SessionContext:
    """Anonymous session over in-memory storage"""
    context = SessionContext(MemoryStorage())
    context.initialize()
    return context


@pytest.fixture
def admin_user() -> AdminUser:
    return AdminUser(
        id="admin_1",
        email="ama@shop.test",
        first_name="Ama",
        last_name="Mensah",
        role="MANAGER",
        permissions=["reports.view", "contracts.view"],
    )


@pytest.fixture
def customer_user() -> Customer:
    return Customer(
        id="cust_1",
        email="kofi@mail.test",
        first_name="Kofi",
        last_name="Boateng",
        membership_id="HP-000123",
        phone="0241234567",
        is_activated=True,
    )


@pytest.fixture
def admin_session(session: SessionContext, admin_user: AdminUser) -> SessionContext:
    session.set_auth(admin_user, UserType.ADMIN, "admin-token")
    return session


@pytest.fixture
def customer_session(session: SessionContext, customer_user: Customer) -> SessionContext:
    session.set_auth(customer_user, UserType.CUSTOMER, "customer-token")
    return session


@pytest.fixture
def make_portal_client(backend: FakeBackend) -> Callable[[SessionContext], PortalClient]:
    """Backend client factory wired to the fake backend"""

    def factory(context: SessionContext, timeout: Optional[float] = None) -> PortalClient:
        return PortalClient(context, base_url=BACKEND_URL, timeout=timeout, transport=backend.transport)

    return factory


@pytest.fixture
def make_api(backend: FakeBackend) -> Callable[[SessionContext], TestClient]:
    """Create FastAPI test client whose backend calls go to the fake backend"""

    def factory(context: SessionContext) -> TestClient:
        app = create_app(context)

        def override_get_portal_client(current: SessionContext = Depends(get_session)) -> PortalClient:
            return PortalClient(current, base_url=BACKEND_URL, transport=backend.transport)

        app.dependency_overrides[get_portal_client] = override_get_portal_client
        return TestClient(app)

    return factory


@pytest.fixture
def upcoming_dates() -> list[str]:
    """Three monthly due dates, the first one overdue"""
    today = date.today()
    return [
        (today - timedelta(days=60)).isoformat(),
        (today + timedelta(days=30)).isoformat(),
        (today + timedelta(days=60)).isoformat(),
    ]
