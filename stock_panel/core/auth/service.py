"""
Stock Panel - Authentication Service

Login, logout and token verification against the bearer TokenStore,
registration, and the password-reset flow backed by the reset TokenStore.
"""
from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError

from stock_panel.config import Settings
from stock_panel.core.security import verify_password
from stock_panel.core.sessions import ResetTokenData, SessionInfo, TokenStore
from stock_panel.db.models.user import User
from stock_panel.db.repositories.user import UserRepository
from stock_panel.services.email_service import EmailService
from stock_panel.utils.exceptions import (
    BadRequestError,
    DeliveryError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidTokenError,
    ServiceNotConfiguredError,
    UserAlreadyExistsError,
    UsernameAlreadyTakenError,
    WeakPasswordError,
)


GENERIC_FORGOT_MESSAGE = "If the email exists in our system, a reset link has been sent."

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


class AuthService:
    """
    Account and session operations.

    Usage:
        service = AuthService(UserRepository(db), bearer_store, reset_store, email, settings)
        token = await service.login("alice", "longpass1")
    """

    def __init__(
        self,
        user_repo: UserRepository,
        tokens: TokenStore[SessionInfo],
        reset_tokens: TokenStore[ResetTokenData],
        email_service: EmailService,
        settings: Settings,
    ):
        self.user_repo = user_repo
        self.tokens = tokens
        self.reset_tokens = reset_tokens
        self.email_service = email_service
        self.settings = settings

    def _check_password(self, password: str) -> None:
        if len(password) < self.settings.MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(self.settings.MIN_PASSWORD_LENGTH)
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise BadRequestError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
                code="PASSWORD_TOO_LONG",
            )

    # =========================
    # Sessions
    # =========================

    async def login(self, username: str, password: str) -> str:
        """
        Authenticate and mint a bearer token.

        Raises:
            InvalidCredentialsError: unknown username or wrong password
        """
        user = await self.user_repo.get_by_username(username) if username else None
        if user is None or not verify_password(password, user.hashed_password):
            logger.warning(f"Failed login attempt for username: {username}")
            raise InvalidCredentialsError()

        token = self.tokens.issue(SessionInfo(user_id=user.id, username=user.username))
        logger.info(f"User logged in: {user.username}")
        return token

    def verify(self, token: Optional[str]) -> SessionInfo:
        """Return the session bound to ``token`` or raise InvalidTokenError."""
        session = self.tokens.verify(token) if token else None
        if session is None:
            raise InvalidTokenError()
        return session

    def logout(self, token: Optional[str]) -> None:
        """Revoke ``token``. Missing or unknown tokens are ignored."""
        if token:
            self.tokens.revoke(token)

    # =========================
    # Registration
    # =========================

    async def register(self, username: str, email: str, password: str) -> User:
        """
        Create an account.

        Raises:
            BadRequestError: a field is empty or the password is too short
            UserAlreadyExistsError: username or email is taken
        """
        if not username or not email or not password:
            raise BadRequestError("All fields are required")
        self._check_password(password)

        if await self.user_repo.get_by_username(username):
            raise UsernameAlreadyTakenError()
        if await self.user_repo.get_by_email(email):
            raise EmailAlreadyRegisteredError()

        try:
            user = await self.user_repo.create(username=username, email=email, password=password)
        except IntegrityError as e:
            logger.warning(f"Registration conflict for {username}: {e.orig}")
            raise UserAlreadyExistsError() from e

        logger.info(f"User registered: {user.username}")
        return user

    # =========================
    # Password reset
    # =========================

    def build_reset_link(self, token: str) -> str:
        return f"{self.settings.PUBLIC_BASE_URL.rstrip('/')}/reset-password?token={token}"

    async def forgot_password(self, email: str) -> str:
        """
        Issue a reset token for a registered email.

        The returned message never reveals whether the account exists.
        """
        if not email:
            raise BadRequestError("Email is required")

        user = await self.user_repo.get_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return GENERIC_FORGOT_MESSAGE

        token = self.reset_tokens.issue(ResetTokenData(username=user.username, email=user.email))
        reset_link = self.build_reset_link(token)

        if not self.email_service.is_configured():
            logger.warning(f"Email service not configured. Reset link for {user.username}: {reset_link}")
            return GENERIC_FORGOT_MESSAGE

        sent = await self.email_service.send_password_reset_email(user.email, reset_link)
        if not sent:
            logger.error(f"Failed to send password reset email to {user.email}")
        return GENERIC_FORGOT_MESSAGE

    async def reset_password(self, token: str, new_password: str) -> None:
        """
        Consume a reset token and store the new password.

        Raises:
            BadRequestError: missing fields or weak password
            InvalidResetTokenError: token unknown, used or expired
        """
        if not token or not new_password:
            raise BadRequestError("Token and password are required")
        self._check_password(new_password)

        data = self.reset_tokens.verify(token)
        if data is None:
            raise InvalidResetTokenError()

        user = await self.user_repo.get_by_username(data.username)
        if user is None:
            self.reset_tokens.revoke(token)
            raise InvalidResetTokenError()

        await self.user_repo.update_password(user, new_password)
        self.reset_tokens.revoke(token)
        logger.info(f"Password reset for user: {user.username}")

    async def send_test_email(self, email: str) -> None:
        """
        Send a configuration test message.

        Raises:
            BadRequestError: empty address
            ServiceNotConfiguredError: SMTP credentials missing
            DeliveryError: the SMTP send failed
        """
        if not email:
            raise BadRequestError("Email is required")
        if not self.email_service.is_configured():
            raise ServiceNotConfiguredError(
                "Email service is not configured. Set SMTP_USER and SMTP_PASSWORD environment variables."
            )
        if not await self.email_service.send_test_email(email):
            raise DeliveryError("Failed to send test email")
