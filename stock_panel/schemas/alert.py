"""
Stock Panel - Alert Schemas
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from stock_panel.db.models.alert import AlertType, AlertCondition


class AlertRequest(BaseModel):
    """Schema for creating or replacing an alert."""
    symbol: str = Field(..., min_length=1, max_length=50, description="Instrument symbol")
    underlying_symbol: str = Field("", max_length=50)
    option_type: str = Field("", max_length=4)
    strike_price: float = 0.0
    expiry: str = Field("", max_length=20)
    alert_type: AlertType = Field(..., description="Type of alert")
    target_value: float = Field(0.0, description="Target price or percentage")
    condition: AlertCondition = Field(..., description="Comparison operator")
    message: str = Field("", max_length=500)

    model_config = ConfigDict(allow_inf_nan=False)

    @field_validator("symbol")
    @classmethod
    def symbol_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Symbol, alert type, and condition are required")
        return v


class AlertResponse(BaseModel):
    """Response schema for alert."""
    id: int
    symbol: str
    underlying_symbol: str = ""
    option_type: str = ""
    strike_price: float = 0.0
    expiry: str = ""
    alert_type: AlertType
    target_value: float
    condition: AlertCondition
    message: str = ""
    is_active: bool
    created_at: datetime
    updated_at: datetime
    user_id: int

    model_config = {"from_attributes": True}


class AlertEnvelope(BaseModel):
    """Result of a single alert operation."""
    success: bool
    message: str
    alert: Optional[AlertResponse] = None


class AlertsEnvelope(BaseModel):
    """All alerts of the caller."""
    success: bool
    alerts: list[AlertResponse]


class AlertSyncResponse(BaseModel):
    """Outcome of re-sending active alerts to Kite."""
    success: bool
    message: str
    delivered: int
    total: int


class KiteStatusResponse(BaseModel):
    """Alert status entries as reported by the Kite API."""
    success: bool
    alerts: List[Dict[str, Any]]
