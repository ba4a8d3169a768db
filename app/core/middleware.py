"""Request correlation middleware."""

import time
import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.logging import get_logger, request_id_ctx

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request id to every log line of a request and echo it back.

    Clients may supply their own ``X-Request-ID``; otherwise a UUID4 is
    generated. Import calls log many events per request, and this id is what
    ties a skipped record back to the upload that carried it.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_ctx.set(request_id)
        start_time = time.perf_counter()

        try:
            logger.info(
                "http.request_started",
                method=request.method,
                path=request.url.path,
                content_length=request.headers.get("content-length"),
            )

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "http.request_failed",
                    method=request.method,
                    path=request.url.path,
                    error_type=type(e).__name__,
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                )
                raise

            logger.info(
                "http.request_completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )

            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_ctx.reset(token)
