"""
Stock Panel - Kite Alert Forwarder

Pushes alert definitions to an external Kite-compatible alerts API.

Endpoints used (relative to the configured base URL):
- POST /alerts                       create an alert
- GET  /health                       connectivity check
- GET  /alerts/status?user_id=<id>   per-user alert status

Every request carries the X-API-Key and X-API-Secret headers. A create is
only considered delivered when the API answers 200 with
{"status": "success"}. Any body that is not a JSON object is rejected.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from stock_panel.config import Settings
from stock_panel.db.models.alert import Alert
from stock_panel.utils.exceptions import AlertForwardingError


def build_alert_payload(alert: Alert, timestamp: Optional[datetime] = None) -> Dict[str, Any]:
    """Map a stored alert to the Kite wire format."""
    timestamp = timestamp or datetime.now(timezone.utc)
    return {
        "symbol": alert.symbol,
        "underlying_symbol": alert.underlying_symbol or "",
        "option_type": alert.option_type or "",
        "strike_price": alert.strike_price or 0.0,
        "expiry": alert.expiry or "",
        "alert_type": alert.alert_type.value,
        "target_value": alert.target_value,
        "condition": alert.condition.value,
        "message": alert.message or "",
        "timestamp": timestamp.isoformat(),
        "user_id": alert.user_id,
    }


class KiteAlertForwarder:
    """
    HTTP client for the Kite alerts API.

    Usage:
        forwarder = KiteAlertForwarder.from_settings(settings)
        await forwarder.send_alert(build_alert_payload(alert))
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the forwarder.

        Args:
            api_key: Value of the X-API-Key header
            api_secret: Value of the X-API-Secret header
            base_url: Root URL of the alerts API
            timeout: HTTP request timeout in seconds
            transport: Optional httpx transport override
        """
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> Optional["KiteAlertForwarder"]:
        """Build a forwarder, or None when Kite credentials are absent."""
        if not (settings.KITE_API_KEY and settings.KITE_API_SECRET and settings.KITE_BASE_URL):
            return None
        return cls(
            api_key=settings.KITE_API_KEY,
            api_secret=settings.KITE_API_SECRET,
            base_url=settings.KITE_BASE_URL,
            timeout=settings.KITE_TIMEOUT_SECONDS,
        )

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-API-Key": self.api_key,
            "X-API-Secret": self.api_secret,
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def send_alert(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create one alert on the Kite API.

        Raises:
            AlertForwardingError: on transport failure, non-200 status or a
                body whose status is not "success"
        """
        try:
            async with self._client() as client:
                response = await client.post("/alerts", json=payload)
        except httpx.RequestError as e:
            logger.error(f"Request error forwarding alert for {payload.get('symbol')}: {e}")
            raise AlertForwardingError(f"Failed to send alert: {e}") from e

        if response.status_code != 200:
            logger.error(f"Kite API returned status {response.status_code}: {response.text}")
            raise AlertForwardingError(f"API returned status {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise AlertForwardingError("Failed to decode API response") from e

        if not isinstance(body, dict):
            raise AlertForwardingError("Unexpected API response")
        if body.get("status") != "success":
            raise AlertForwardingError(f"API error: {body.get('message', 'unknown error')}")

        logger.info(f"Alert sent to Kite: {payload.get('symbol')} {payload.get('alert_type')}")
        return body

    async def send_bulk_alerts(self, payloads: List[Dict[str, Any]]) -> int:
        """Send several alerts, continuing past failures. Returns the number delivered."""
        delivered = 0
        for payload in payloads:
            try:
                await self.send_alert(payload)
                delivered += 1
            except AlertForwardingError as e:
                logger.warning(f"Bulk forward skipped {payload.get('symbol')}: {e.message}")
        return delivered

    async def test_connection(self) -> None:
        """
        Check that the Kite API is reachable.

        Raises:
            AlertForwardingError: if the health endpoint is unreachable or not 200
        """
        try:
            async with self._client() as client:
                response = await client.get("/health")
        except httpx.RequestError as e:
            raise AlertForwardingError(f"Failed to connect to Kite API: {e}") from e

        if response.status_code != 200:
            raise AlertForwardingError(f"API health check failed with status {response.status_code}")

    async def get_alert_status(self, user_id: int) -> List[Dict[str, Any]]:
        """
        Fetch the per-alert status entries Kite holds for a user.

        The API answers {"status": "success", "data": [...]}; a missing
        "data" key means no alerts.
        """
        try:
            async with self._client() as client:
                response = await client.get("/alerts/status", params={"user_id": user_id})
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            raise AlertForwardingError(f"API returned status {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise AlertForwardingError(f"Failed to get alert status: {e}") from e
        except ValueError as e:
            raise AlertForwardingError("Failed to decode API response") from e

        if not isinstance(body, dict):
            raise AlertForwardingError("Unexpected API response")
        if body.get("status") != "success":
            raise AlertForwardingError("API returned error status")

        data = body.get("data") or []
        if not isinstance(data, list):
            raise AlertForwardingError("Unexpected API response")
        return data
