"""Request tracing middleware for the academy services.

Every request gets an ``X-Request-ID`` (propagated from the caller when
present) bound to the logging context, plus a start/finish log line with
status code and duration.
"""
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from libs.common.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)

_QUIET_PATHS = frozenset({"/health"})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind request context for log correlation and time each request."""

    def __init__(self, app, service_name: str):
        super().__init__(app)
        self.service_name = service_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(
            request_id=request.headers.get("X-Request-ID"),
            path=request.url.path,
            method=request.method,
        )
        quiet = request.url.path in _QUIET_PATHS
        start_time = time.perf_counter()

        if not quiet:
            logger.info(
                "%s request started",
                self.service_name,
                extra={"extra_fields": {"caller": request.headers.get("X-Caller-Service")}},
            )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "%s request failed with unhandled exception",
                self.service_name,
                extra={"extra_fields": {
                    "error": str(e),
                    "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
                }},
            )
            raise
        else:
            if not quiet:
                log = logger.warning if response.status_code >= 400 else logger.info
                log(
                    "%s request completed",
                    self.service_name,
                    extra={"extra_fields": {
                        "status_code": response.status_code,
                        "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
                    }},
                )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_request_context()


def add_observability_middleware(app: FastAPI, service_name: str) -> None:
    """
    Configure logging and install the request context middleware.

    Call this right after creating the app, before including routers.
    """
    configure_logging()
    app.add_middleware(RequestContextMiddleware, service_name=service_name)
    logger.info("Observability middleware initialized for %s", service_name)
