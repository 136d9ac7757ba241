"""
Stock Panel - Authentication Endpoints
Opaque bearer tokens held in the in-memory session store
"""
from typing import Optional

from fastapi import APIRouter, Depends, status

from stock_panel.core.auth import AuthService
from stock_panel.dependencies import get_auth_service, oauth2_scheme
from stock_panel.schemas.user import (
    EmailCheckRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    Message,
    RegisterRequest,
    ResetPasswordRequest,
    StatusMessage,
)

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login and get a bearer token",
)
async def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Authenticate with username and password.

    - **username**: Account username
    - **password**: Account password
    """
    token = await auth_service.login(credentials.username, credentials.password)
    return LoginResponse(token=token, message="Login successful")


@router.post(
    "/register",
    response_model=Message,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    user_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> Message:
    """
    Create a new account.

    - **username**: Unique username
    - **email**: Unique email address
    - **password**: At least 8 characters
    """
    await auth_service.register(user_data.username, user_data.email, user_data.password)
    return Message(message="Account created successfully")


@router.post("/logout", response_model=Message, summary="Revoke the current token")
async def logout(
    token: Optional[str] = Depends(oauth2_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> Message:
    """Always succeeds, with or without a token."""
    auth_service.logout(token)
    return Message(message="Logout successful")


@router.get("/verify", response_model=Message, summary="Check a bearer token")
async def verify(
    token: Optional[str] = Depends(oauth2_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> Message:
    auth_service.verify(token)
    return Message(message="Token is valid")


@router.post(
    "/forgot-password",
    response_model=StatusMessage,
    summary="Request a password reset link",
)
async def forgot_password(
    payload: ForgotPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> StatusMessage:
    """
    Send a reset link if the email belongs to an account.

    The response is identical whether or not the email is registered.
    """
    message = await auth_service.forgot_password(payload.email)
    return StatusMessage(success=True, message=message)


@router.post(
    "/reset-password",
    response_model=StatusMessage,
    summary="Set a new password with a reset token",
)
async def reset_password(
    payload: ResetPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> StatusMessage:
    await auth_service.reset_password(payload.token, payload.password)
    return StatusMessage(success=True, message="Password reset successfully")


@router.post(
    "/test-email",
    response_model=StatusMessage,
    summary="Send a test email",
)
async def test_email(
    payload: EmailCheckRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> StatusMessage:
    """Verify SMTP configuration by sending a message to the given address."""
    await auth_service.send_test_email(payload.email)
    return StatusMessage(success=True, message="Test email sent successfully!")
