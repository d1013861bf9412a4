"""Exception handlers that render domain failures as tagged JSON errors."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from libs.common.errors import ErrorKind, ServiceError
from libs.common.logging import get_logger

logger = get_logger(__name__)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.warning(
        "Service error on %s %s: %s (%s)",
        request.method,
        request.url.path,
        exc.message,
        exc.kind.value,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "code": ErrorKind.UNKNOWN.value,
                "message": "Internal server error",
            }
        },
    )


def add_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
