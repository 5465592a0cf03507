"""Exception handlers translating failures into the error envelope.

Domain errors are mapped by their ErrorKind, never by message text.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models import ErrorEnvelope
from domain.model.errors import DomainError, ErrorKind

logger = logging.getLogger(__name__)

# Any kind not listed here is a client error (400)
STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
}


def status_for(kind: ErrorKind) -> int:
    return STATUS_BY_KIND.get(kind, status.HTTP_400_BAD_REQUEST)


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorEnvelope(error=error).model_dump(),
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc.kind)
    logger.info("Request rejected", extra={
        "method": request.method,
        "path": request.url.path,
        "kind": exc.kind.value,
        "statusCode": status_code,
    })
    return error_response(status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Malformed request body", extra={
        "method": request.method,
        "path": request.url.path,
        "errors": len(exc.errors()),
    })
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown paths and unsupported methods on known paths look the same
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return error_response(status.HTTP_404_NOT_FOUND, "Endpoint not found")
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", exc_info=exc, extra={
        "method": request.method,
        "path": request.url.path,
    })
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
