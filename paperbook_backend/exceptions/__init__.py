"""
Error handling package for the Paperbook backend.

This package provides:
- Custom exception classes with error codes
- Error registry management
- FastAPI exception handlers
- Structured error responses

Usage:
    from paperbook_backend.exceptions import (
        NotFoundException,
        ForbiddenException,
        register_exception_handlers,
    )
"""

from paperbook_backend.exceptions.exceptions import (
    # Base exception
    PaperbookException,

    # Authentication exceptions (401)
    UnauthorizedException,
    BasicAuthException,

    # Authorization exceptions (403)
    ForbiddenException,
    RoleRequiredException,

    # Validation exceptions (400)
    BadRequestException,
    WeakPasswordException,

    # Not found exceptions (404)
    NotFoundException,
    EndpointNotFoundException,

    # Conflict exceptions (409)
    ConflictException,
    EntityAlreadyDisabledException,
    EntityAlreadyEnabledException,
    DatabaseIntegrityException,

    # Server exceptions (500/503)
    InternalServerException,
    ServiceUnavailableException,
)

from paperbook_backend.exceptions.error_registry import (
    load_error_registry,
    get_error_definition,
    get_all_error_codes,
    get_errors_by_http_status,
    validate_error_registry,
)

from paperbook_backend.exceptions.error_handlers import (
    register_exception_handlers,
    paperbook_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    integrity_error_handler,
    generic_exception_handler,
)


__all__ = [
    "PaperbookException",
    "UnauthorizedException",
    "BasicAuthException",
    "ForbiddenException",
    "RoleRequiredException",
    "BadRequestException",
    "WeakPasswordException",
    "NotFoundException",
    "EndpointNotFoundException",
    "ConflictException",
    "EntityAlreadyDisabledException",
    "EntityAlreadyEnabledException",
    "DatabaseIntegrityException",
    "InternalServerException",
    "ServiceUnavailableException",
    "load_error_registry",
    "get_error_definition",
    "get_all_error_codes",
    "get_errors_by_http_status",
    "validate_error_registry",
    "register_exception_handlers",
    "paperbook_exception_handler",
    "validation_exception_handler",
    "http_exception_handler",
    "integrity_error_handler",
    "generic_exception_handler",
]
