"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from hire_purchase_portal.api.dependencies import get_request_id
from hire_purchase_portal.api.middleware import RequestIDMiddleware, MetricsMiddleware
from hire_purchase_portal.api.v1 import contracts, dashboard, reports, session
from hire_purchase_portal.domain.exceptions import (
    NotAuthenticatedError,
    PortalAPIError,
    PrintError,
    UnknownReportError,
)
from hire_purchase_portal.domain.notifications import Notification, notification_from_error
from hire_purchase_portal.infrastructure.database.repositories import StorageRepository
from hire_purchase_portal.infrastructure.database.session import create_session_factory
from hire_purchase_portal.infrastructure.observability.logging import setup_logging
from hire_purchase_portal.session.context import SessionContext
from hire_purchase_portal.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def _upstream_status(error: PortalAPIError) -> int:
    """Gateway status for a failed backend call"""
    if error.timed_out:
        return 504
    if error.status_code in (401, 403, 404):
        return error.status_code
    return 502


def _register_error_handlers(app: FastAPI) -> None:
    """Failures reach the operator as a dismissable notification"""

    @app.exception_handler(PortalAPIError)
    async def portal_api_error(request: Request, exc: PortalAPIError):
        logging.error(f"Backend API error: {exc.message}", extra={"request_id": get_request_id(request)})
        notification = notification_from_error(exc, "Something went wrong")
        return JSONResponse(status_code=_upstream_status(exc), content=notification.to_dict())

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated(request: Request, exc: NotAuthenticatedError):
        notification = Notification(title="Error", description=str(exc), variant="destructive")
        return JSONResponse(status_code=401, content=notification.to_dict())

    @app.exception_handler(UnknownReportError)
    async def unknown_report(request: Request, exc: UnknownReportError):
        notification = Notification(title="Error", description=str(exc), variant="destructive")
        return JSONResponse(status_code=404, content=notification.to_dict())

    @app.exception_handler(PrintError)
    async def print_failed(request: Request, exc: PrintError):
        logging.error(f"Print failed: {exc}", extra={"request_id": get_request_id(request)})
        notification = Notification(title="Error", description="Failed to print report", variant="destructive")
        return JSONResponse(status_code=500, content=notification.to_dict())


def create_app(session_context: SessionContext | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Hire-Purchase Portal",
        description="Contract views, derived installment state and report exports over the hire-purchase API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Session restored from durable storage once, at startup
    if session_context is None:
        session_context = SessionContext(StorageRepository(create_session_factory(settings.storage_url)))
        session_context.initialize()
    app.state.session = session_context

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    _register_error_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(session.router, prefix="/v1", tags=["session"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(contracts.router, prefix="/v1", tags=["contracts"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])

    return app


app = create_app()
