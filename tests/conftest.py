"""
Stock Panel - Test Configuration
Shared fixtures and test configuration.
"""
import os
import tempfile
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment before importing app modules
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), f"stock_panel_test_{os.getpid()}.db")
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["LOG_DIR"] = ""
os.environ["SMTP_USER"] = ""
os.environ["SMTP_PASSWORD"] = ""
os.environ["KITE_API_KEY"] = ""
os.environ["KITE_API_SECRET"] = ""
os.environ["KITE_BASE_URL"] = ""
os.environ["WEB_DIR"] = os.path.join(tempfile.gettempdir(), f"stock_panel_web_{os.getpid()}")


class FakeClock:
    """Manually advanced clock for token expiry tests."""

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2025, 7, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# =========================
# User Fixtures
# =========================

@pytest.fixture
def sample_user_data() -> dict:
    """Sample user registration data."""
    return {
        "username": "alice",
        "email": "a@x.com",
        "password": "longpass1",
    }


@pytest.fixture
def sample_user():
    """Sample user object mock."""
    from stock_panel.core.security import get_password_hash
    from stock_panel.db.models.user import User
    user = MagicMock(spec=User)
    user.id = 1
    user.username = "alice"
    user.email = "a@x.com"
    user.hashed_password = get_password_hash("longpass1")
    user.created_at = datetime.utcnow()
    user.updated_at = datetime.utcnow()
    return user


@pytest.fixture
def mock_user_repo(sample_user):
    """UserRepository with async methods mocked."""
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=sample_user)
    repo.get_by_username = AsyncMock(return_value=None)
    repo.get_by_email = AsyncMock(return_value=None)
    repo.create = AsyncMock(return_value=sample_user)
    repo.update_password = AsyncMock(return_value=sample_user)
    return repo


@pytest.fixture
def mock_email_service():
    """Configured email service that records sends."""
    service = MagicMock()
    service.is_configured = MagicMock(return_value=True)
    service.send_password_reset_email = AsyncMock(return_value=True)
    service.send_test_email = AsyncMock(return_value=True)
    return service


# =========================
# Trade Fixtures
# =========================

@pytest.fixture
def make_record():
    """Factory for unsaved StockRecord instances."""
    from stock_panel.db.models.stock import StockRecord, TradeSide

    def _make(side: str, price: float, timestamp: datetime, symbol: str = "NIFTY25000CE"):
        return StockRecord(
            symbol=symbol,
            underlying_symbol="NIFTY",
            option_type="CALL",
            strike_price=25000.0,
            expiry="2025-07-31",
            price=price,
            side=TradeSide(side),
            timestamp=timestamp,
        )
    return _make


@pytest.fixture
def sample_stock_data() -> dict:
    return {
        "symbol": "NIFTY25000CE",
        "underlying_symbol": "NIFTY",
        "option_type": "CALL",
        "strike_price": 25000,
        "expiry": "2025-07-31",
        "price": 100,
        "side": "BUY",
    }


# =========================
# Alert Fixtures
# =========================

@pytest.fixture
def sample_alert_data() -> dict:
    return {
        "symbol": "NIFTY25000CE",
        "underlying_symbol": "NIFTY",
        "option_type": "CALL",
        "strike_price": 25000,
        "expiry": "2025-07-31",
        "alert_type": "PRICE_ABOVE",
        "target_value": 120.5,
        "condition": ">",
        "message": "Take profit",
    }


@pytest.fixture
def sample_alert():
    """Alert object as loaded from the database."""
    from stock_panel.db.models.alert import Alert, AlertCondition, AlertType
    return Alert(
        id=7,
        user_id=1,
        symbol="NIFTY25000CE",
        underlying_symbol="NIFTY",
        option_type="CALL",
        strike_price=25000.0,
        expiry="2025-07-31",
        alert_type=AlertType.PRICE_ABOVE,
        target_value=120.5,
        condition=AlertCondition.GT,
        message="Take profit",
        is_active=True,
        created_at=datetime(2025, 7, 1, 9, 0),
        updated_at=datetime(2025, 7, 1, 9, 0),
    )
