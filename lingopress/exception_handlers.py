"""
Exception handlers producing the JSON error envelope:

    {"error": {"status_code", "message", "type", "error_code", "details"?, "path"}}

Domain errors carry their own status and code. Starlette only raises HTTP
errors for routing (unknown path, wrong method). Body validation is a 400.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lingopress.exceptions import ErrorCode, LingoPressError

logger = logging.getLogger(__name__)

# Every status this application answers with
ERROR_TYPES = {
    400: "Bad Request",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    500: "Internal Server Error",
    503: "Service Unavailable",
}

ROUTING_ERROR_CODES = {
    404: ErrorCode.RESOURCE_NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
}


def get_error_type(status_code: int) -> str:
    return ERROR_TYPES.get(status_code, "Error")


def get_http_error_code(status_code: int) -> str:
    """Error code for an HTTPException raised by routing."""
    return ROUTING_ERROR_CODES.get(status_code, ErrorCode.UNKNOWN_ERROR).value


def create_error_response(
    request: Request,
    status_code: int,
    message: str,
    error_code: ErrorCode | str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {
        "status_code": status_code,
        "message": message,
        "type": get_error_type(status_code),
        "error_code": error_code.value if isinstance(error_code, ErrorCode) else error_code,
    }
    if details:
        body["details"] = details
    body["path"] = request.url.path
    return JSONResponse(status_code=status_code, content={"error": body})


async def lingopress_exception_handler(request: Request, exc: LingoPressError) -> JSONResponse:
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        f"{type(exc).__name__} on {request.url.path}: {exc.message}",
        extra={"status_code": exc.status_code, "error_code": exc.error_code.value},
    )
    return create_error_response(request, exc.status_code, exc.message, exc.error_code, exc.details or None)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(f"{exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
    return create_error_response(request, exc.status_code, str(exc.detail), get_http_error_code(exc.status_code))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters are reported as 400."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}", extra={"errors": errors})
    return create_error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Validation error",
        ErrorCode.VALIDATION_FAILED,
        {"validation_errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return create_error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        ErrorCode.INTERNAL_ERROR,
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(LingoPressError, lingopress_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
