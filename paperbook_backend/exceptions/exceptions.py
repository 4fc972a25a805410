"""
Exception classes with error codes and rich metadata.

This module provides custom HTTP exceptions that integrate with the error registry
to provide consistent, informative error responses with unique error codes.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status
import inspect
from datetime import datetime, timezone

from paperbook_backend.interfaces.errors import ErrorResponse, ErrorDebugInfo


class PaperbookException(HTTPException):
    """
    Base exception class for all Paperbook exceptions.

    Provides rich error handling with:
    - Unique error codes from registry
    - Structured error responses
    - Debug information in development mode
    - Context metadata for logging and debugging
    """

    def __init__(
        self,
        error_code: str,
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        context: Optional[Dict[str, Any]] = None,
        user_id: Optional[int] = None,
        request_id: Optional[str] = None,
    ):
        """
        Initialize exception with error code and metadata.

        Args:
            error_code: Error code from error registry (e.g., "NF_001")
            detail: Additional detail message (overrides registry message if provided)
            headers: HTTP response headers
            context: Additional context for debugging
            user_id: User ID if available
            request_id: Request ID for tracing
        """
        self.error_code = error_code
        self.context = context or {}
        self.user_id = user_id
        self.request_id = request_id

        # Get caller information for debugging
        frame = inspect.currentframe()
        caller_frame = frame.f_back.f_back if frame and frame.f_back else None  # Skip this __init__ and the subclass __init__
        if caller_frame:
            self.function_name = caller_frame.f_code.co_name
            self.file_name = caller_frame.f_code.co_filename
            self.line_number = caller_frame.f_lineno
        else:
            self.function_name = None
            self.file_name = None
            self.line_number = None

        # The actual status_code will be set by subclasses
        super().__init__(status_code=500, detail=detail, headers=headers)
        # Starlette fills a missing detail with the status phrase; keep None so the registry message applies
        self.detail = detail

    def to_error_response(self, include_debug: bool = False) -> ErrorResponse:
        """
        Convert exception to structured ErrorResponse.

        Args:
            include_debug: Whether to include debug information (dev mode only)

        Returns:
            ErrorResponse with error code, message, and optional debug info
        """
        from paperbook_backend.exceptions.error_registry import get_error_definition

        error_def = get_error_definition(self.error_code)

        debug_info = None
        if include_debug:
            debug_info = ErrorDebugInfo(
                timestamp=datetime.now(timezone.utc).isoformat(),
                request_id=self.request_id,
                function=self.function_name,
                file=self.file_name,
                line=self.line_number,
                user_id=self.user_id,
                additional_context=self.context,
            )

        # Determine message - use detail if it's a string, otherwise use default message
        message = error_def.message.plain
        details = self.context if self.context else None

        if self.detail:
            if isinstance(self.detail, str):
                message = self.detail
            elif isinstance(self.detail, dict):
                details = self.detail
                if "message" in self.detail and isinstance(self.detail["message"], str):
                    message = self.detail["message"]

        return ErrorResponse(
            error_code=self.error_code,
            message=message,
            details=details,
            severity=error_def.severity,
            category=error_def.category,
            retry_after=error_def.retry_after,
            debug=debug_info,
        )


# ============================================================================
# AUTHENTICATION EXCEPTIONS (401)
# ============================================================================


class UnauthorizedException(PaperbookException):
    """Authentication required - 401"""

    def __init__(
        self,
        error_code: str = "AUTH_001",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_401_UNAUTHORIZED


class BasicAuthException(PaperbookException):
    """Basic authentication failed - 401 with WWW-Authenticate header"""

    def __init__(
        self,
        error_code: str = "AUTH_002",
        detail: Any = None,
        **kwargs,
    ):
        headers = {"WWW-Authenticate": "Basic"}
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_401_UNAUTHORIZED


# ============================================================================
# AUTHORIZATION EXCEPTIONS (403)
# ============================================================================


class ForbiddenException(PaperbookException):
    """Caller is neither the owner nor an admin - 403"""

    def __init__(
        self,
        error_code: str = "AUTHZ_001",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_403_FORBIDDEN


class RoleRequiredException(PaperbookException):
    """Caller role not allowed on this route - 403"""

    def __init__(
        self,
        error_code: str = "AUTHZ_002",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        required_roles: Optional[list[str]] = None,
        **kwargs,
    ):
        if required_roles:
            if "context" not in kwargs or kwargs["context"] is None:
                kwargs["context"] = {}
            kwargs["context"]["required_roles"] = required_roles
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_403_FORBIDDEN


# ============================================================================
# VALIDATION EXCEPTIONS (400)
# ============================================================================


class BadRequestException(PaperbookException):
    """Bad request - 400"""

    def __init__(
        self,
        error_code: str = "VAL_003",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_400_BAD_REQUEST


class WeakPasswordException(PaperbookException):
    """Password rejected by the complexity policy - 400"""

    def __init__(
        self,
        error_code: str = "VAL_002",
        detail: Any = None,
        reason: Optional[str] = None,
        **kwargs,
    ):
        if reason:
            if "context" not in kwargs or kwargs["context"] is None:
                kwargs["context"] = {}
            kwargs["context"]["reason"] = reason
        super().__init__(error_code=error_code, detail=detail, **kwargs)
        self.status_code = status.HTTP_400_BAD_REQUEST


# ============================================================================
# NOT FOUND EXCEPTIONS (404)
# ============================================================================


class NotFoundException(PaperbookException):
    """
    Entity not found - 404

    Raised both for absent records and for inactive records on paths that
    require an active one.
    """

    def __init__(
        self,
        error_code: str = "NF_001",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        entity_id: Any = None,
        entity_type: Optional[str] = None,
        **kwargs,
    ):
        if entity_id is not None:
            if "context" not in kwargs or kwargs["context"] is None:
                kwargs["context"] = {}
            kwargs["context"]["entity_id"] = entity_id
            if entity_type:
                kwargs["context"]["entity_type"] = entity_type
            if detail is None:
                detail = (
                    f"The entity identified by '{entity_id}' of type '{entity_type}' was not found"
                    if entity_type
                    else f"The entity identified by '{entity_id}' was not found"
                )
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_404_NOT_FOUND


class EndpointNotFoundException(PaperbookException):
    """API endpoint not found - 404"""

    def __init__(
        self,
        error_code: str = "NF_002",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_404_NOT_FOUND


# ============================================================================
# CONFLICT EXCEPTIONS (409)
# ============================================================================


class ConflictException(PaperbookException):
    """Resource conflict - 409"""

    def __init__(
        self,
        error_code: str = "CONFLICT_001",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_409_CONFLICT


class EntityAlreadyDisabledException(ConflictException):
    """Disable requested on an inactive entity - 409"""

    def __init__(
        self,
        entity_id: Any = None,
        entity_type: Optional[str] = None,
        error_code: str = "CONFLICT_002",
        detail: Any = None,
        **kwargs,
    ):
        if detail is None and entity_id is not None:
            detail = f"The entity identified by '{entity_id}' of type '{entity_type}' is already disabled"
        kwargs.setdefault("context", {"entity_id": entity_id, "entity_type": entity_type})
        super().__init__(error_code=error_code, detail=detail, **kwargs)


class EntityAlreadyEnabledException(ConflictException):
    """Enable requested on an active entity - 409"""

    def __init__(
        self,
        entity_id: Any = None,
        entity_type: Optional[str] = None,
        error_code: str = "CONFLICT_003",
        detail: Any = None,
        **kwargs,
    ):
        if detail is None and entity_id is not None:
            detail = f"The entity identified by '{entity_id}' of type '{entity_type}' is already enabled"
        kwargs.setdefault("context", {"entity_id": entity_id, "entity_type": entity_type})
        super().__init__(error_code=error_code, detail=detail, **kwargs)


class DatabaseIntegrityException(PaperbookException):
    """Database constraint violated (duplicate email, dangling reference) - 409"""

    def __init__(
        self,
        error_code: str = "DB_002",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_409_CONFLICT


# ============================================================================
# INTERNAL SERVER EXCEPTIONS (500/503)
# ============================================================================


class InternalServerException(PaperbookException):
    """Internal server error - 500"""

    def __init__(
        self,
        error_code: str = "INT_001",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ServiceUnavailableException(PaperbookException):
    """Service temporarily unavailable - 503"""

    def __init__(
        self,
        error_code: str = "SVC_001",
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(error_code=error_code, detail=detail, headers=headers, **kwargs)
        self.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
