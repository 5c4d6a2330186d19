"""FastAPI middleware for request tracing and metrics"""

import logging
import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from account_dashboard.infrastructure.observability.metrics import request_duration_histogram


def _route_path(request: Request) -> str:
    """Route template (/v1/accounts/{account_id}) so ids do not explode label cardinality"""
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID, honouring one supplied by the caller"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        logging.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "route": _route_path(request),
                "status_code": response.status_code,
            },
        )
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request metrics"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        request_duration_histogram.labels(
            method=request.method,
            endpoint=_route_path(request),
            status=response.status_code,
        ).observe(duration)

        return response
