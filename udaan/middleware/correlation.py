"""
Correlation ID middleware for request tracing.

Generates a UUID4 correlation ID per request (or accepts X-Correlation-ID from client)
and stores it in a context variable so every log line of the request carries it.
"""
import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from udaan.utils.context import correlation_id_var
from udaan.utils.logger import logger


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Middleware that:
    1. Generates or accepts X-Correlation-ID
    2. Logs structured request/response info with timing
    3. Returns correlation ID in response headers
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        cid = request.headers.get("x-correlation-id") or str(uuid.uuid4())
        token = correlation_id_var.set(cid)

        start = time.monotonic()
        method = request.method
        path = request.url.path

        logger.info(
            f"{method} {path}",
            extra={
                "method": method,
                "path": path,
                "client_ip": request.client.host if request.client else "",
            }
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "request.failed",
                extra={
                    "method": method,
                    "path": path,
                    "duration_ms": round((time.monotonic() - start) * 1000),
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                }
            )
            raise
        finally:
            correlation_id_var.reset(token)

        status = response.status_code
        log_fn = logger.warning if status >= 400 else logger.info
        log_fn(
            f"Response: {status}",
            extra={
                "correlation_id": cid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round((time.monotonic() - start) * 1000),
            }
        )

        response.headers["X-Correlation-ID"] = cid
        return response
