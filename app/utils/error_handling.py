"""
EarthSafe API - Error Handling

Domain exception hierarchy and the FastAPI exception handlers that turn
them (and framework/database errors) into a consistent JSON envelope:

    {"success": false, "error": {"code": ..., "message": ..., "type": ...}}
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Union
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standardized error codes"""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    RESOURCE_CONFLICT = "RESOURCE_CONFLICT"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base exception for all application exceptions"""

    error_type = "app_error"

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the "error" part of the JSON envelope"""
        result = {
            "code": self.code.value,
            "message": self.message,
            "type": self.error_type,
        }
        if self.details:
            result["details"] = self.details
        return result


class ValidationException(AppException):
    error_type = "validation_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
        )


class BadRequestException(AppException):
    error_type = "bad_request"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            code=ErrorCode.INVALID_INPUT,
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class AuthenticationException(AppException):
    error_type = "authentication_error"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            code=ErrorCode.UNAUTHORIZED,
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


class AuthorizationException(AppException):
    error_type = "permission_error"

    def __init__(self, message: str = "Permission denied"):
        super().__init__(
            code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
        )


class NotFoundException(AppException):
    """Resource not found exception"""

    error_type = "not_found"

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[Union[str, UUID]] = None,
        message: Optional[str] = None,
    ):
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=message or f"{resource_type} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": str(resource_id) if resource_id else None},
        )


class ConflictException(AppException):
    error_type = "conflict"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            code=ErrorCode.RESOURCE_CONFLICT,
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
        )


class BusinessRuleException(AppException):
    """A request that is well-formed but breaks a domain rule"""

    error_type = "business_rule_error"

    def __init__(self, message: str, rule: Optional[str] = None):
        super().__init__(
            code=ErrorCode.BUSINESS_RULE_VIOLATION,
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"rule": rule} if rule else None,
        )


class PayloadTooLargeException(AppException):
    error_type = "payload_too_large"

    def __init__(self, max_bytes: int):
        super().__init__(
            code=ErrorCode.PAYLOAD_TOO_LARGE,
            message=f"File exceeds the maximum upload size of {max_bytes // (1024 * 1024)} MB",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        )


# ============================================================================
# Exception Handlers
# ============================================================================

def create_error_response(
    status_code: int,
    code: Union[str, int],
    message: Any,
    error_type: str,
    details: Optional[Any] = None,
) -> JSONResponse:
    """Create a standardized error response"""
    error = {"code": code, "message": message, "type": error_type}
    if details:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    logger.warning(
        f"{exc.code.value} on {request.method} {request.url.path}: {exc.message}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.to_dict()},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent error format."""
    if exc.status_code >= 400:
        logger.warning(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
    response = create_error_response(
        status_code=exc.status_code,
        code=exc.status_code,
        message=exc.detail,
        error_type="http_error",
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors with detailed field info."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })

    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        code=ErrorCode.VALIDATION_ERROR.value,
        message="Validation error",
        error_type="validation_error",
        details=errors,
    )


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Handle value errors (business logic errors)."""
    logger.warning(f"ValueError: {exc}")
    return create_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        code=ErrorCode.INVALID_INPUT.value,
        message=str(exc),
        error_type="value_error",
    )


async def permission_error_handler(request: Request, exc: PermissionError) -> JSONResponse:
    logger.warning(f"PermissionError: {exc}")
    return create_error_response(
        status_code=status.HTTP_403_FORBIDDEN,
        code=ErrorCode.FORBIDDEN.value,
        message=str(exc) or "Permission denied",
        error_type="permission_error",
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy errors"""
    if isinstance(exc, IntegrityError):
        error_str = str(exc.orig).lower() if exc.orig else ""
        if "unique" in error_str or "duplicate" in error_str:
            logger.warning(f"Duplicate entry on {request.method} {request.url.path}")
            return create_error_response(
                status_code=status.HTTP_409_CONFLICT,
                code=ErrorCode.DUPLICATE_ENTRY.value,
                message="A record with this value already exists",
                error_type="conflict",
            )

    logger.error(
        f"SQLAlchemyError: {type(exc).__name__} - {exc}",
        exc_info=True,
    )
    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code=ErrorCode.DATABASE_ERROR.value,
        message="A database error occurred",
        error_type="database_error",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unhandled exceptions."""
    logger.critical(
        f"UnhandledException on {request.method} {request.url.path}: {type(exc).__name__} - {exc}",
        exc_info=True,
    )

    if settings.is_development:
        message = f"{type(exc).__name__}: {exc}"
    else:
        message = "An unexpected error occurred. Please try again later."

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code=ErrorCode.INTERNAL_ERROR.value,
        message=message,
        error_type="internal_error",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application"""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(PermissionError, permission_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "ErrorCode",
    "AppException",
    "ValidationException",
    "BadRequestException",
    "AuthenticationException",
    "AuthorizationException",
    "NotFoundException",
    "ConflictException",
    "BusinessRuleException",
    "PayloadTooLargeException",
    "create_error_response",
    "setup_exception_handlers",
]
