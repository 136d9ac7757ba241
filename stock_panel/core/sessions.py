"""
Stock Panel - In-memory Token Stores

Bearer sessions and password-reset tokens live only in process memory and
are lost on restart. Each store is shared by request handlers and the
hourly sweep job, so every access goes through one lock.
"""
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Generic, Optional, TypeVar

from loguru import logger

from stock_panel.core.security import generate_token


Clock = Callable[[], datetime]
T = TypeVar("T")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionInfo:
    """Identity bound to a bearer token."""
    user_id: int
    username: str


@dataclass(frozen=True)
class ResetTokenData:
    """Account a reset token was issued for."""
    username: str
    email: str


@dataclass(frozen=True)
class _Entry(Generic[T]):
    data: T
    expires_at: datetime


class TokenStore(Generic[T]):
    """
    Thread-safe map of opaque token -> (payload, absolute expiry).

    Exposes four operations:
    - issue: mint a token valid for ``ttl``
    - verify: return the payload, evicting the token if it has expired
    - revoke: remove a token (idempotent)
    - sweep: purge every expired token

    Usage:
        store = TokenStore(ttl=timedelta(hours=24), name="bearer")
        token = store.issue(SessionInfo(user_id=1, username="alice"))
        info = store.verify(token)
    """

    def __init__(
        self,
        ttl: timedelta,
        name: str = "tokens",
        clock: Clock = utc_now,
        token_factory: Callable[[], str] = generate_token,
    ):
        self.ttl = ttl
        self.name = name
        self._clock = clock
        self._token_factory = token_factory
        self._entries: Dict[str, _Entry[T]] = {}
        self._lock = threading.Lock()

    def issue(self, data: T) -> str:
        """Mint a new token for ``data`` expiring ``ttl`` from now."""
        token = self._token_factory()
        expires_at = self._clock() + self.ttl
        with self._lock:
            self._entries[token] = _Entry(data=data, expires_at=expires_at)
        return token

    def verify(self, token: str) -> Optional[T]:
        """Return the payload of a live token, or None if absent or expired."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(token)
            if entry is None:
                return None
            if now >= entry.expires_at:
                del self._entries[token]
                return None
            return entry.data

    def revoke(self, token: str) -> None:
        """Remove a token whether or not it exists."""
        with self._lock:
            self._entries.pop(token, None)

    def sweep(self) -> int:
        """Purge expired tokens and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [t for t, e in self._entries.items() if now >= e.expires_at]
            for token in expired:
                del self._entries[token]
        if expired:
            logger.debug(f"Swept {len(expired)} expired {self.name} token(s)")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def create_bearer_store(hours: int = 24, clock: Clock = utc_now) -> TokenStore[SessionInfo]:
    return TokenStore(ttl=timedelta(hours=hours), name="bearer", clock=clock)


def create_reset_store(minutes: int = 60, clock: Clock = utc_now) -> TokenStore[ResetTokenData]:
    return TokenStore(ttl=timedelta(minutes=minutes), name="reset", clock=clock)
