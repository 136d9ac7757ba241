"""
Stock Panel - Alert Repository
CRUD for user-owned alerts. Every lookup is scoped to the owner.
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stock_panel.db.models.alert import Alert
from stock_panel.schemas.alert import AlertRequest


class AlertRepository:
    """Repository for Alert operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_for_user(self, alert_id: int, user_id: int) -> Optional[Alert]:
        """
        Get an alert only if ``user_id`` owns it.

        Returns:
            Alert if found and owned, None otherwise
        """
        result = await self.session.execute(
            select(Alert).where(
                Alert.id == alert_id,
                Alert.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> List[Alert]:
        """Alerts of ``user_id``, newest first."""
        result = await self.session.execute(
            select(Alert)
            .where(Alert.user_id == user_id)
            .order_by(Alert.created_at.desc(), Alert.id.desc())
        )
        return list(result.scalars().all())

    async def create(self, user_id: int, data: AlertRequest) -> Alert:
        """Create an active alert owned by ``user_id``."""
        alert = Alert(
            user_id=user_id,
            is_active=True,
            **data.model_dump(),
        )
        self.session.add(alert)
        await self.session.commit()
        await self.session.refresh(alert)
        return alert

    async def update(self, alert: Alert, data: AlertRequest) -> Alert:
        """Replace the editable fields of ``alert``; owner and is_active are kept."""
        for field, value in data.model_dump().items():
            setattr(alert, field, value)
        alert.updated_at = datetime.utcnow()
        await self.session.commit()
        await self.session.refresh(alert)
        return alert

    async def delete(self, alert: Alert) -> None:
        await self.session.delete(alert)
        await self.session.commit()

    async def toggle(self, alert: Alert) -> Alert:
        """Flip is_active."""
        alert.is_active = not alert.is_active
        alert.updated_at = datetime.utcnow()
        await self.session.commit()
        await self.session.refresh(alert)
        return alert
