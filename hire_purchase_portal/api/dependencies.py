"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, HTTPException, Request

from hire_purchase_portal.domain.models import UserType
from hire_purchase_portal.infrastructure.clients.portal import PortalClient
from hire_purchase_portal.session.context import SessionContext


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_session(request: Request) -> SessionContext:
    """The application's session context, created at startup"""
    return request.app.state.session


def get_portal_client(session: SessionContext = Depends(get_session)) -> PortalClient:
    """Provide backend API client bound to the current session"""
    return PortalClient(session)


def require_admin(session: SessionContext = Depends(get_session)) -> SessionContext:
    session.require_token()
    if session.user_type is not UserType.ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return session
