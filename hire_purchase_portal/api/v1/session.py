"""Session endpoints - sign in, activate, inspect and sign out"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from hire_purchase_portal.api.dependencies import get_portal_client, get_session
from hire_purchase_portal.api.v1.schemas import (
    ActivateRequest,
    LoginRequest,
    LoginResultResponse,
    LogoutResponse,
    SessionResponse,
)
from hire_purchase_portal.domain.models import AdminUser
from hire_purchase_portal.infrastructure.clients.portal import PortalClient
from hire_purchase_portal.session import auth
from hire_purchase_portal.session.context import SessionContext

router = APIRouter()


def _login_response(result: auth.LoginResult) -> JSONResponse:
    body = LoginResultResponse(success=result.success, error=result.error)
    return JSONResponse(status_code=200 if result.success else 401, content=body.model_dump())


@router.get("/session", response_model=SessionResponse)
def get_current_session(session: SessionContext = Depends(get_session)):
    user = session.user
    if not session.is_authenticated or user is None:
        return SessionResponse(is_authenticated=False)

    return SessionResponse(
        is_authenticated=True,
        user_type=session.user_type,
        user_id=user.id,
        name=user.full_name,
        email=user.email,
        role=user.role if isinstance(user, AdminUser) else None,
        permissions=list(user.permissions) if isinstance(user, AdminUser) else [],
    )


@router.post("/session/login", response_model=LoginResultResponse)
async def login(
    body: LoginRequest,
    session: SessionContext = Depends(get_session),
    client: PortalClient = Depends(get_portal_client),
):
    """Sign in as admin or customer; 401 carries the backend's reason"""
    result = await auth.login(client, session, body.email, body.password, body.user_type)
    return _login_response(result)


@router.post("/session/activate", response_model=LoginResultResponse)
async def activate(
    body: ActivateRequest,
    session: SessionContext = Depends(get_session),
    client: PortalClient = Depends(get_portal_client),
):
    result = await auth.activate_account(client, session, body.membership_id, body.email, body.password)
    return _login_response(result)


@router.delete("/session", response_model=LogoutResponse)
def logout(session: SessionContext = Depends(get_session)):
    return LogoutResponse(redirect=auth.logout(session))
