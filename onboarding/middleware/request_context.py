# onboarding/middleware/request_context.py
import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("onboarding.requests")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id and logs one line when it completes."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers["X-Request-ID"] = request_id
        logger.info("%s %s -> %s (%.1f ms, request_id=%s)",
                    request.method, request.url.path, response.status_code, elapsed_ms, request_id)
        return response
