"""
Stock Panel - Custom Exceptions
Application-specific exceptions with HTTP error handling
"""
from typing import Optional, Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError


class StockPanelException(Exception):
    """Base exception for Stock Panel."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str = "An error occurred",
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


# =========================
# Request Exceptions
# =========================

class BadRequestError(StockPanelException):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Bad request", code: str = "BAD_REQUEST"):
        super().__init__(message=message, code=code)


class WeakPasswordError(BadRequestError):
    """Password does not meet the minimum length."""

    def __init__(self, min_length: int = 8):
        super().__init__(
            message=f"Password must be at least {min_length} characters long",
            code="WEAK_PASSWORD",
        )


class InvalidResetTokenError(BadRequestError):
    """Reset token is unknown, already used or expired."""

    def __init__(self, message: str = "Invalid or expired reset token"):
        super().__init__(message=message, code="INVALID_RESET_TOKEN")


# =========================
# Authentication Exceptions
# =========================

class AuthenticationError(StockPanelException):
    """Authentication related errors."""

    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidCredentialsError(AuthenticationError):
    """Invalid username or password."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message=message, code="INVALID_CREDENTIALS")


class InvalidTokenError(AuthenticationError):
    """Token is missing, unknown or expired."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message=message, code="INVALID_TOKEN")


# =========================
# User Exceptions
# =========================

class UserAlreadyExistsError(StockPanelException):
    """User already exists."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "User already exists", code: str = "USER_EXISTS"):
        super().__init__(message=message, code=code)


class UsernameAlreadyTakenError(UserAlreadyExistsError):
    """Username already taken."""

    def __init__(self, message: str = "Username already exists"):
        super().__init__(message=message, code="USERNAME_TAKEN")


class EmailAlreadyRegisteredError(UserAlreadyExistsError):
    """Email already registered."""

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message=message, code="EMAIL_REGISTERED")


# =========================
# Alert Exceptions
# =========================

class NotFoundError(StockPanelException):
    """Requested resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(message=message, code=code)


class AlertNotFoundError(NotFoundError):
    """Alert missing or owned by someone else."""

    def __init__(self, message: str = "Alert not found"):
        super().__init__(message=message, code="ALERT_NOT_FOUND")


class AlertForwardingError(StockPanelException):
    """The Kite API rejected or failed to receive an alert."""

    def __init__(self, message: str = "Alert forwarding failed"):
        super().__init__(message=message, code="ALERT_FORWARDING_FAILED")


# =========================
# Collaborator Exceptions
# =========================

class ServiceNotConfiguredError(BadRequestError):
    """An optional collaborator has no credentials."""

    def __init__(self, message: str = "Service not configured"):
        super().__init__(message=message, code="NOT_CONFIGURED")


class DeliveryError(StockPanelException):
    """A collaborator was configured but the call failed."""

    def __init__(self, message: str = "Delivery failed"):
        super().__init__(message=message, code="DELIVERY_FAILED")


# =========================
# Exception Handlers
# =========================

def _error_body(message: str, code: Optional[str] = None) -> dict:
    return {"detail": message, "code": code}


async def stock_panel_exception_handler(request: Request, exc: StockPanelException) -> JSONResponse:
    """Render a domain exception with its HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.code),
        headers={"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400 Bad Request."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("; ".join(messages) or "Bad request", "BAD_REQUEST"),
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Log storage failures and hide their details from the client."""
    logger.exception(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error", "INTERNAL_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error taxonomy to the application."""
    app.add_exception_handler(StockPanelException, stock_panel_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
