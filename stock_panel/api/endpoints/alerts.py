"""
Stock Panel - Alert Endpoints
API for managing price and percentage alerts
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from stock_panel.core.alerts import AlertService
from stock_panel.db.models.user import User
from stock_panel.dependencies import get_alert_service, get_current_user
from stock_panel.schemas.alert import (
    AlertEnvelope,
    AlertRequest,
    AlertResponse,
    AlertsEnvelope,
    AlertSyncResponse,
    KiteStatusResponse,
)
from stock_panel.schemas.user import StatusMessage
from stock_panel.utils.exceptions import BadRequestError

router = APIRouter()

AlertId = Annotated[Optional[int], Query(alias="id", description="Alert ID")]


def _require_id(alert_id: Optional[int]) -> int:
    if alert_id is None:
        raise BadRequestError("Alert ID is required")
    return alert_id


@router.post("", response_model=AlertEnvelope, status_code=status.HTTP_201_CREATED)
async def create_alert(
    data: AlertRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AlertService, Depends(get_alert_service)],
):
    """Create a new alert and forward it to Kite when configured."""
    alert = await service.create(current_user.id, data)
    return AlertEnvelope(
        success=True,
        message="Alert created successfully",
        alert=AlertResponse.model_validate(alert),
    )


@router.get("", response_model=AlertsEnvelope)
async def list_alerts(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AlertService, Depends(get_alert_service)],
):
    """Get all alerts for current user, newest first."""
    alerts = await service.list(current_user.id)
    return AlertsEnvelope(
        success=True,
        alerts=[AlertResponse.model_validate(a) for a in alerts],
    )


@router.put("", response_model=StatusMessage)
async def update_alert(
    data: AlertRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AlertService, Depends(get_alert_service)],
    alert_id: AlertId = None,
):
    """Replace an alert's definition."""
    await service.update(_require_id(alert_id), current_user.id, data)
    return StatusMessage(success=True, message="Alert updated successfully")


@router.delete("", response_model=StatusMessage)
async def delete_alert(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AlertService, Depends(get_alert_service)],
    alert_id: AlertId = None,
):
    """Delete an alert."""
    await service.delete(_require_id(alert_id), current_user.id)
    return StatusMessage(success=True, message="Alert deleted successfully")


@router.patch("/toggle", response_model=StatusMessage)
async def toggle_alert(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AlertService, Depends(get_alert_service)],
    alert_id: AlertId = None,
):
    """Activate or deactivate an alert."""
    await service.toggle(_require_id(alert_id), current_user.id)
    return StatusMessage(success=True, message="Alert status toggled successfully")


@router.post("/test-kite", response_model=StatusMessage)
async def test_kite_connection(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AlertService, Depends(get_alert_service)],
):
    """Check connectivity to the Kite alerts API."""
    await service.test_forwarder()
    return StatusMessage(success=True, message="Successfully connected to Kite API")


@router.post("/sync", response_model=AlertSyncResponse)
async def sync_alerts(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AlertService, Depends(get_alert_service)],
):
    """Re-send all active alerts to Kite. Individual failures are skipped."""
    delivered, total = await service.sync(current_user.id)
    return AlertSyncResponse(
        success=True,
        message=f"Forwarded {delivered} of {total} active alerts",
        delivered=delivered,
        total=total,
    )


@router.get("/kite-status", response_model=KiteStatusResponse)
async def kite_alert_status(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AlertService, Depends(get_alert_service)],
):
    """Alert status for the caller as reported by Kite."""
    return KiteStatusResponse(success=True, alerts=await service.forwarder_status(current_user.id))
