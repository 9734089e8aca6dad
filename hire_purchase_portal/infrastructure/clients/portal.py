"""Backend API HTTP client for the hire-purchase platform"""

import asyncio
import logging
import time
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from hire_purchase_portal.config import settings
from hire_purchase_portal.domain.dashboard import (
    AdminDashboardStats,
    CustomerDashboardStats,
    admin_dashboard_stats,
    customer_dashboard_stats,
)
from hire_purchase_portal.domain.exceptions import NotAuthenticatedError, PortalAPIError
from hire_purchase_portal.domain.models import (
    ContractStatus,
    Customer,
    HirePurchaseContract,
    InstallmentSchedule,
    LoginResponse,
    PaginatedResponse,
    UserType,
)
from hire_purchase_portal.infrastructure.clients.payloads import (
    parse_contract,
    parse_customer,
    parse_installment,
    parse_login_response,
    parse_or_raise,
    parse_page,
)
from hire_purchase_portal.infrastructure.observability.metrics import backend_latency_histogram, record_backend_failure
from hire_purchase_portal.session.context import SessionContext

logger = logging.getLogger(__name__)

LOGIN_PATHS = {
    UserType.ADMIN: "/auth/admin-login",
    UserType.CUSTOMER: "/auth/customer-login",
}


def extract_error_message(response: httpx.Response, fallback: str) -> str:
    """Human-readable message from an error payload: `error`, then `message`, then the fallback"""
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict):
        for key in ("error", "message"):
            if isinstance(payload.get(key), str) and payload[key]:
                return payload[key]
    return fallback


class PortalClient:
    """Client for the hire-purchase backend REST API"""

    def __init__(
        self,
        session: SessionContext,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.session = session
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def request(
        self,
        method: str,
        path: str,
        *,
        fallback: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        authenticated: bool = True,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Raises:
            NotAuthenticatedError: `authenticated` call without a session
            PortalAPIError: On timeout, network failure, HTTP error or non-JSON body
        """
        headers = {}
        if authenticated:
            headers["Authorization"] = f"Bearer {self.session.require_token()}"

        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
            start_time = time.time()
            try:
                response = await client.request(method, path, params=params, json=json, headers=headers)
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                record_backend_failure("timeout")
                raise PortalAPIError(f"Request timed out after {self.timeout}s", timed_out=True) from e
            except httpx.HTTPStatusError as e:
                record_backend_failure(e.response.status_code)
                message = extract_error_message(e.response, fallback)
                logger.warning(
                    f"Backend error on {method} {path}: {e.response.status_code}",
                    extra={"status_code": e.response.status_code},
                )
                raise PortalAPIError(message, status_code=e.response.status_code) from e
            except httpx.RequestError as e:
                record_backend_failure("network")
                raise PortalAPIError(fallback) from e
            except ValueError as e:
                raise PortalAPIError(f"{fallback}: response was not JSON") from e
            finally:
                backend_latency_histogram.labels(endpoint=path.split("?")[0]).observe(time.time() - start_time)

    # Authentication

    async def login(self, email: str, password: str, user_type: UserType) -> LoginResponse:
        data = await self.request(
            "POST",
            LOGIN_PATHS[user_type],
            json={"email": email, "password": password},
            fallback="Login failed",
            authenticated=False,
        )
        return parse_or_raise(lambda d: parse_login_response(d, user_type), data, "login")

    async def activate_account(self, membership_id: str, email: str, password: str) -> LoginResponse:
        """Activate a customer account, verified by the membership ID issued at registration"""
        data = await self.request(
            "POST",
            "/auth/customer/activate",
            json={"membershipId": membership_id, "email": email, "password": password},
            fallback="Account activation failed",
            authenticated=False,
        )
        return parse_or_raise(lambda d: parse_login_response(d, UserType.CUSTOMER), data, "activation")

    # Admin lists

    async def list_customers(self, page: int = 1, limit: int = 10) -> PaginatedResponse[Customer]:
        data = await self.request(
            "GET", "/customers", params={"page": page, "limit": limit}, fallback="Failed to load customers"
        )
        return parse_or_raise(lambda d: parse_page(d, "customers", parse_customer), data, "customer list")

    async def list_contracts(
        self,
        page: int = 1,
        limit: int = 10,
        status: ContractStatus | None = None,
    ) -> PaginatedResponse[HirePurchaseContract]:
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if status is not None:
            params["status"] = status.value
        data = await self.request("GET", "/contracts", params=params, fallback="Failed to load contracts")
        return parse_or_raise(lambda d: parse_page(d, "contracts", parse_contract), data, "contract list")

    # Contracts, from the signed-in user's point of view

    async def get_contract(self, contract_id: str) -> HirePurchaseContract:
        """Admins read any contract; customers only their own"""
        if self.session.user_type is UserType.ADMIN:
            path = f"/contracts/admin/{contract_id}"
        else:
            path = f"/customers/me/contracts/{contract_id}"
        data = await self.request("GET", path, fallback="Failed to load contract details")
        return parse_or_raise(parse_contract, data, "contract")

    async def my_contracts(self) -> List[HirePurchaseContract]:
        data = await self.request("GET", "/customers/me/contracts", fallback="Failed to load contracts")
        return parse_or_raise(lambda d: [parse_contract(c) for c in d.get("contracts") or []], data, "contract list")

    async def upcoming_installments(self) -> List[InstallmentSchedule]:
        data = await self.request(
            "GET", "/customers/me/installments/upcoming", fallback="Failed to load upcoming payments"
        )
        return parse_or_raise(
            lambda d: [parse_installment(i) for i in d.get("installments") or []], data, "installment list"
        )

    # Reports

    async def get_report(self, kind: str, start: date | None = None, end: date | None = None, **filters: str) -> Dict[str, Any]:
        params: Dict[str, Any] = {k: v for k, v in filters.items() if v}
        if start:
            params["startDate"] = start.isoformat()
        if end:
            params["endDate"] = end.isoformat()
        return await self.request("GET", f"/reports/{kind}", params=params, fallback=f"Failed to load {kind} report")

    # Dashboards

    async def load_customer_dashboard(self, timeout: float | None = None) -> CustomerDashboardStats:
        """Contracts and upcoming installments fetched concurrently; loaded once both settle"""
        contracts, upcoming = await self._gather(timeout, self.my_contracts(), self.upcoming_installments())
        return customer_dashboard_stats(contracts, upcoming)

    async def load_admin_dashboard(self, timeout: float | None = None) -> AdminDashboardStats:
        customers, active, overview = await self._gather(
            timeout,
            self.list_customers(limit=1),
            self.list_contracts(limit=1, status=ContractStatus.ACTIVE),
            self.get_report("dashboard"),
        )
        return admin_dashboard_stats(customers.pagination.total, active.pagination.total, overview)

    async def load_dashboard(self, timeout: float | None = None) -> AdminDashboardStats | CustomerDashboardStats:
        if not self.session.is_authenticated:
            raise NotAuthenticatedError("Sign in required")
        if self.session.user_type is UserType.ADMIN:
            return await self.load_admin_dashboard(timeout)
        return await self.load_customer_dashboard(timeout)

    async def _gather(self, timeout: float | None, *calls):
        """
        Run calls concurrently under one overall deadline.

        The first failure is raised once every call has settled; a stalled
        load is cut off at the deadline instead of hanging.
        """
        limit = timeout or settings.dashboard_timeout_seconds
        try:
            results = await asyncio.wait_for(asyncio.gather(*calls, return_exceptions=True), timeout=limit)
        except asyncio.TimeoutError as e:
            record_backend_failure("timeout")
            raise PortalAPIError(f"Dashboard did not load within {limit}s", timed_out=True) from e

        for result in results:
            if isinstance(result, BaseException):
                raise result
        return results
