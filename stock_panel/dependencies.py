"""
Stock Panel - Dependencies
Dependency injection for FastAPI endpoints
"""
from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from stock_panel.config import Settings, settings
from stock_panel.core.alerts import AlertService
from stock_panel.core.auth import AuthService
from stock_panel.core.sessions import ResetTokenData, SessionInfo, TokenStore
from stock_panel.core.trading import PnLCalculator
from stock_panel.db.database import async_session_maker
from stock_panel.db.models.user import User
from stock_panel.db.repositories import AlertRepository, StockRepository, UserRepository
from stock_panel.services.alert_forwarder import KiteAlertForwarder
from stock_panel.services.email_service import EmailService
from stock_panel.utils.exceptions import InvalidTokenError


# Bearer scheme; a missing header is reported by get_current_user, not here
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login",
    auto_error=False,
)


def get_settings() -> Settings:
    return settings


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Yields:
        AsyncSession: Database session
    """
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


# =========================
# Token stores (owned by the application lifespan)
# =========================

def get_token_store(request: Request) -> TokenStore[SessionInfo]:
    return request.app.state.bearer_tokens


def get_reset_token_store(request: Request) -> TokenStore[ResetTokenData]:
    return request.app.state.reset_tokens


# =========================
# Repositories
# =========================

async def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


async def get_stock_repository(db: AsyncSession = Depends(get_db)) -> StockRepository:
    return StockRepository(db)


async def get_alert_repository(db: AsyncSession = Depends(get_db)) -> AlertRepository:
    return AlertRepository(db)


# =========================
# Collaborators
# =========================

def get_email_service(app_settings: Settings = Depends(get_settings)) -> EmailService:
    return EmailService(app_settings)


def get_alert_forwarder(app_settings: Settings = Depends(get_settings)) -> Optional[KiteAlertForwarder]:
    """Kite forwarder, or None when credentials are not configured."""
    return KiteAlertForwarder.from_settings(app_settings)


# =========================
# Services
# =========================

async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    tokens: TokenStore[SessionInfo] = Depends(get_token_store),
    reset_tokens: TokenStore[ResetTokenData] = Depends(get_reset_token_store),
    email_service: EmailService = Depends(get_email_service),
    app_settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(user_repo, tokens, reset_tokens, email_service, app_settings)


async def get_alert_service(
    alert_repo: AlertRepository = Depends(get_alert_repository),
    forwarder: Optional[KiteAlertForwarder] = Depends(get_alert_forwarder),
) -> AlertService:
    return AlertService(alert_repo, forwarder)


async def get_pnl_calculator(
    stock_repo: StockRepository = Depends(get_stock_repository),
) -> PnLCalculator:
    return PnLCalculator(stock_repo)


# =========================
# Authentication gate
# =========================

async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    tokens: TokenStore[SessionInfo] = Depends(get_token_store),
    user_repo: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Resolve the caller from an ``Authorization: Bearer <token>`` header.

    Raises:
        InvalidTokenError: header missing, token unknown or expired, or the
            account no longer exists
    """
    if not token:
        raise InvalidTokenError("Authorization header required")

    session = tokens.verify(token)
    if session is None:
        raise InvalidTokenError()

    user = await user_repo.get_by_id(session.user_id)
    if user is None:
        raise InvalidTokenError()
    return user
