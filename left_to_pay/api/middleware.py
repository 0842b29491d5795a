"""
Request middleware for the report API.

Report runs fan out to several Starling calls, so every request carries an
ID that ends up on the error logs of the run. Request latency is recorded
per route template, so `/v1/summary?pay_reference=...` and friends share
one label set.
"""

import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from left_to_pay.infrastructure.observability.metrics import request_duration_histogram

REQUEST_ID_HEADER = "X-Request-ID"
UNMATCHED_ROUTE = "unmatched"

# Caller IDs are echoed into headers and logs: keep them short and printable
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,64}$")


def route_label(request: Request) -> str:
    """Path template of the matched route, e.g. /v1/report"""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


class MetricsMiddleware(BaseHTTPMiddleware):
    """Observe request latency labelled by method, route and status"""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)

        request_duration_histogram.labels(
            method=request.method,
            endpoint=route_label(request),
            status=response.status_code,
        ).observe(time.perf_counter() - started)
        return response


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse a well-formed caller X-Request-ID, otherwise mint a UUID"""

    async def dispatch(self, request: Request, call_next):
        incoming = request.headers.get(REQUEST_ID_HEADER, "")
        request_id = incoming if _REQUEST_ID_PATTERN.match(incoming) else str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
