"""
FastAPI exception handlers for structured error responses.

This module provides exception handlers that convert PaperbookException instances
into properly formatted ErrorResponse objects.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
import traceback
import logging

from paperbook_backend.exceptions.exceptions import (
    PaperbookException,
    BadRequestException,
    DatabaseIntegrityException,
    InternalServerException,
)
from paperbook_backend.settings import settings


logger = logging.getLogger(__name__)


def _minimal_response(exception: PaperbookException, include_debug: bool) -> dict:
    error_response = exception.to_error_response(include_debug=include_debug)

    # Only error_code and message reach the client; severity and category stay in the logs
    response_data = {
        "error_code": error_response.error_code,
        "message": error_response.message,
    }

    if include_debug and error_response.debug:
        response_data["debug"] = error_response.debug.model_dump(exclude_none=True)

    return response_data


async def paperbook_exception_handler(request: Request, exc: PaperbookException) -> JSONResponse:
    """
    Handle PaperbookException instances.

    SECURITY NOTE: Debug information (file paths, function names, line numbers)
    is ONLY included when DEBUG_MODE is 'dev', 'development', or 'local'.
    """
    include_debug = settings.include_debug_info

    log_error(request, exc)

    return JSONResponse(
        status_code=exc.status_code,
        content=_minimal_response(exc, include_debug),
        headers=exc.headers or {},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to BadRequestException with structured details.
    """
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(x) for x in error["loc"][1:])  # Skip 'body' prefix
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })

    exception = BadRequestException(
        error_code="VAL_001",
        detail="Request validation failed",
        context={"validation_errors": errors}
    )

    logger.warning(
        f"Validation error on {request.method} {request.url.path}",
        extra={
            "validation_errors": errors,
            "request_id": getattr(request.state, "request_id", None),
        }
    )

    response_data = _minimal_response(exception, settings.include_debug_info)

    # Include validation errors in details for client to fix
    if errors:
        response_data["details"] = {"validation_errors": errors}

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=response_data,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Handle standard HTTPException from Starlette/FastAPI.

    Converts to appropriate PaperbookException type based on status code.
    """
    from paperbook_backend.exceptions.exceptions import (
        UnauthorizedException,
        ForbiddenException,
        EndpointNotFoundException,
        ConflictException,
    )

    exception_map = {
        status.HTTP_400_BAD_REQUEST: BadRequestException,
        status.HTTP_401_UNAUTHORIZED: UnauthorizedException,
        status.HTTP_403_FORBIDDEN: ForbiddenException,
        status.HTTP_404_NOT_FOUND: EndpointNotFoundException,
        status.HTTP_409_CONFLICT: ConflictException,
    }

    exception_class = exception_map.get(exc.status_code, InternalServerException)

    paperbook_exc = exception_class(
        detail=exc.detail,
        headers=getattr(exc, "headers", None),
    )
    # Keep statuses the map does not know about (405, 429, ...)
    paperbook_exc.status_code = exc.status_code

    return await paperbook_exception_handler(request, paperbook_exc)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """
    Handle database constraint violations that escaped the business logic.

    The original database message stays in the logs; the client only learns
    that a constraint was violated.
    """
    error_msg = str(exc.orig) if getattr(exc, "orig", None) is not None else str(exc)

    exception = DatabaseIntegrityException(
        context={"database_error": error_msg.split("\n")[0]}
    )

    return await paperbook_exception_handler(request, exception)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Logs the full traceback and returns a generic internal server error.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc,
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "user_id": getattr(request.state, "user_id", None),
        }
    )

    exception = InternalServerException(
        error_code="INT_001",
        detail="An unexpected error occurred",
        context={
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        }
    )

    include_debug = settings.include_debug_info
    if include_debug:
        exception.context["traceback"] = "".join(traceback.format_exception(exc))

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_minimal_response(exception, include_debug),
    )


def log_error(request: Request, exception: PaperbookException) -> None:
    """
    Log error with structured information.

    Args:
        request: FastAPI request object
        exception: The exception that was raised
    """
    log_data = {
        "error_code": exception.error_code,
        "status_code": exception.status_code,
        "method": request.method,
        "path": request.url.path,
        "request_id": getattr(request.state, "request_id", None),
        "user_id": exception.user_id or getattr(request.state, "user_id", None),
        "function": exception.function_name,
        "context": exception.context,
    }

    if exception.status_code >= 500:
        logger.error(
            f"Server error: {exception.error_code}",
            extra=log_data,
        )
    elif exception.status_code >= 400:
        logger.warning(
            f"Client error: {exception.error_code}",
            extra=log_data,
        )
    else:
        logger.info(
            f"Error: {exception.error_code}",
            extra=log_data,
        )


def register_exception_handlers(app) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(PaperbookException, paperbook_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)

    # Generic exception handler (catch-all)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Registered custom exception handlers")
