"""
Stock Panel - User Repository
Lookup and persistence for User accounts
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stock_panel.db.models.user import User
from stock_panel.core.security import get_password_hash


class UserRepository:
    """Repository for User operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: The user's ID

        Returns:
            User object if found, None otherwise
        """
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """
        Get user by username.

        Args:
            username: The user's username

        Returns:
            User object if found, None otherwise
        """
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: The user's email address

        Returns:
            User object if found, None otherwise
        """
        result = await self.session.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def create(self, username: str, email: str, password: str) -> User:
        """
        Create a new user with a bcrypt-hashed password.

        Raises:
            sqlalchemy.exc.IntegrityError: if username or email is taken
        """
        user = User(
            username=username,
            email=email,
            hashed_password=get_password_hash(password),
        )
        self.session.add(user)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(user)
        return user

    async def update_password(self, user: User, new_password: str) -> User:
        """Replace the stored hash for ``user``."""
        user.hashed_password = get_password_hash(new_password)
        user.updated_at = datetime.utcnow()
        await self.session.commit()
        await self.session.refresh(user)
        return user
