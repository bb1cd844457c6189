"""Request logging middleware.

Logs every HTTP request with method, path, status code, latency, the
campus of the signed-in student (if any), and a short request ID for
correlation. The request_id is also injected into request.state so router
handlers can include it in ApiResponse.

Log format:
    INFO [GET] /api/v1/listings → 200 (3ms) campus=iitd-ac-in req_a1b2c3d4e5f6
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.cm_common.response import ApiResponse, success_response

logger = logging.getLogger("cm.request")


def _campus_of(request: Request) -> str:
    container = getattr(request.app.state, "container", None)
    session = container.controller.session if container is not None else None
    return session.campus if session is not None else "-"


def request_id_of(request: Request) -> str:
    """Read request_id injected by RequestLogMiddleware, fallback if absent."""
    return getattr(request.state, "request_id", "req_unknown")


def respond(request: Request, data: object, message: str = "success") -> ApiResponse:
    """Success envelope carrying the request's correlation id."""
    resp = success_response(data, message)
    resp.request_id = request_id_of(request)
    return resp


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.request_id = f"req_{uuid.uuid4().hex[:12]}"

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "[%s] %s → %d (%.0fms) campus=%s %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            _campus_of(request),
            request.state.request_id,
        )
        return response
