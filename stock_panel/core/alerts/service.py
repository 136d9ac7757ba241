"""
Stock Panel - Alert Service

Owner-scoped CRUD over alert rules. New alerts are pushed to the Kite
forwarder when one is configured; forwarding never fails the request.
Active alerts can be re-sent in bulk, and Kite's view of them fetched.
"""
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from stock_panel.db.models.alert import Alert
from stock_panel.db.repositories.alert import AlertRepository
from stock_panel.schemas.alert import AlertRequest
from stock_panel.services.alert_forwarder import KiteAlertForwarder, build_alert_payload
from stock_panel.utils.exceptions import (
    AlertForwardingError,
    AlertNotFoundError,
    DeliveryError,
    ServiceNotConfiguredError,
)


class AlertService:
    """Alert operations for a single authenticated user."""

    def __init__(self, alert_repo: AlertRepository, forwarder: Optional[KiteAlertForwarder] = None):
        self.alert_repo = alert_repo
        self.forwarder = forwarder

    async def _get_owned(self, alert_id: int, user_id: int, action: str) -> Alert:
        alert = await self.alert_repo.get_for_user(alert_id, user_id)
        if alert is None:
            raise AlertNotFoundError(
                f"Alert not found or you don't have permission to {action} it"
            )
        return alert

    async def _forward(self, alert: Alert) -> None:
        if self.forwarder is None:
            return
        try:
            await self.forwarder.send_alert(build_alert_payload(alert))
        except AlertForwardingError as e:
            logger.warning(f"Failed to send alert {alert.id} to Kite API: {e.message}")

    async def create(self, user_id: int, data: AlertRequest) -> Alert:
        alert = await self.alert_repo.create(user_id, data)
        logger.info(f"Alert {alert.id} created for user {user_id}: {alert.symbol}")
        await self._forward(alert)
        return alert

    async def list(self, user_id: int) -> List[Alert]:
        return await self.alert_repo.list_for_user(user_id)

    async def update(self, alert_id: int, user_id: int, data: AlertRequest) -> Alert:
        alert = await self._get_owned(alert_id, user_id, "update")
        return await self.alert_repo.update(alert, data)

    async def delete(self, alert_id: int, user_id: int) -> None:
        alert = await self._get_owned(alert_id, user_id, "delete")
        await self.alert_repo.delete(alert)
        logger.info(f"Alert {alert_id} deleted by user {user_id}")

    async def toggle(self, alert_id: int, user_id: int) -> Alert:
        alert = await self._get_owned(alert_id, user_id, "toggle")
        return await self.alert_repo.toggle(alert)

    def _require_forwarder(self) -> KiteAlertForwarder:
        if self.forwarder is None:
            raise ServiceNotConfiguredError(
                "Kite API credentials not configured. Please set KITE_API_KEY, "
                "KITE_API_SECRET, and KITE_BASE_URL environment variables."
            )
        return self.forwarder

    async def test_forwarder(self) -> None:
        """
        Check connectivity to the Kite API.

        Raises:
            ServiceNotConfiguredError: no Kite credentials
            DeliveryError: the health check failed
        """
        forwarder = self._require_forwarder()
        try:
            await forwarder.test_connection()
        except AlertForwardingError as e:
            raise DeliveryError(e.message) from e

    async def sync(self, user_id: int) -> Tuple[int, int]:
        """
        Re-send every active alert of a user to Kite.

        Returns:
            (delivered, total) counts
        """
        forwarder = self._require_forwarder()
        active = [a for a in await self.alert_repo.list_for_user(user_id) if a.is_active]
        delivered = await forwarder.send_bulk_alerts([build_alert_payload(a) for a in active])
        logger.info(f"Synced {delivered}/{len(active)} alerts to Kite for user {user_id}")
        return delivered, len(active)

    async def forwarder_status(self, user_id: int) -> List[Dict[str, Any]]:
        """Fetch the Kite-side alert status entries for a user."""
        forwarder = self._require_forwarder()
        try:
            return await forwarder.get_alert_status(user_id)
        except AlertForwardingError as e:
            raise DeliveryError(e.message) from e
