"""Login, account activation and logout flows"""

import logging
from dataclasses import dataclass
from typing import Optional

from hire_purchase_portal.domain.exceptions import PortalAPIError
from hire_purchase_portal.domain.models import LoginResponse, UserType
from hire_purchase_portal.infrastructure.clients.portal import PortalClient
from hire_purchase_portal.session.context import SessionContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    success: bool
    error: Optional[str] = None


def _failure(error: PortalAPIError, fallback: str) -> LoginResult:
    logger.warning(f"Authentication failed: {error.message}", extra={"status_code": error.status_code})
    # Transport-level messages (timeouts, bad payloads) stay out of the login form
    return LoginResult(success=False, error=error.message if error.status_code else fallback)


async def login(client: PortalClient, session: SessionContext, email: str, password: str, user_type: UserType) -> LoginResult:
    try:
        response: LoginResponse = await client.login(email, password, user_type)
    except PortalAPIError as e:
        return _failure(e, "Login failed")
    session.set_auth(response.user, user_type, response.token)
    return LoginResult(success=True)


async def login_admin(client: PortalClient, session: SessionContext, email: str, password: str) -> LoginResult:
    return await login(client, session, email, password, UserType.ADMIN)


async def login_customer(client: PortalClient, session: SessionContext, email: str, password: str) -> LoginResult:
    return await login(client, session, email, password, UserType.CUSTOMER)


async def activate_account(
    client: PortalClient,
    session: SessionContext,
    membership_id: str,
    email: str,
    password: str,
) -> LoginResult:
    """Activate a customer account and sign the customer in"""
    try:
        response = await client.activate_account(membership_id, email, password)
    except PortalAPIError as e:
        return _failure(e, "Account activation failed")
    session.set_auth(response.user, UserType.CUSTOMER, response.token)
    return LoginResult(success=True)


def logout(session: SessionContext) -> str:
    """Clear the session; returns the login route matching who was signed in"""
    was_admin = session.user_type is UserType.ADMIN
    session.logout()
    return "/admin-login" if was_admin else "/customer-login"
