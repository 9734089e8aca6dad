"""Gateway middleware: request IDs, access log and latency metrics"""

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from hire_purchase_portal.infrastructure.observability.metrics import request_duration_histogram

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Caller IDs accepted as-is; anything else is replaced
REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,64}")


def _route_template(request: Request) -> str:
    """Matched route path, e.g. /v1/contracts/{contract_id}/summary; raw path when nothing matched"""
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


def _request_id(request: Request) -> str:
    """Caller's X-Request-ID when it looks like an ID, otherwise a fresh one"""
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if REQUEST_ID_PATTERN.fullmatch(supplied):
        return supplied
    return uuid.uuid4().hex


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate the caller's X-Request-ID (or issue one) and log each request under it"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _request_id(request)
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={"request_id": request_id, "status_code": response.status_code},
        )
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Gateway latency per route template, so contract IDs do not become label values"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        request_duration_histogram.labels(
            method=request.method,
            endpoint=_route_template(request),
            status=response.status_code,
        ).observe(time.perf_counter() - started)
        return response
