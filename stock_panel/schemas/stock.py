"""
Stock Panel - Stock Record and P&L Schemas
"""
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict

from stock_panel.db.models.stock import TradeSide, OptionType


class StockRecordCreate(BaseModel):
    """Incoming trade execution."""
    symbol: str = Field(..., min_length=1, max_length=50, description="Traded symbol")
    underlying_symbol: str = Field("", max_length=50)
    option_type: OptionType = Field(OptionType.NONE, description="CALL, PUT or empty for stock")
    strike_price: float = 0.0
    expiry: str = Field("", max_length=20)
    price: float = Field(..., description="Execution price")
    side: TradeSide

    model_config = ConfigDict(
        allow_inf_nan=False,
        json_schema_extra={
            "example": {
                "symbol": "NIFTY25000CE",
                "underlying_symbol": "NIFTY",
                "option_type": "CALL",
                "strike_price": 25000,
                "expiry": "2025-07-31",
                "price": 100,
                "side": "BUY"
            }
        }
    )


class StockRecordResponse(BaseModel):
    """Stored trade execution."""
    symbol: str
    underlying_symbol: str = ""
    option_type: str = ""
    strike_price: float = 0.0
    expiry: str = ""
    price: float
    side: TradeSide
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class DailyPnLResponse(BaseModel):
    """Signed P&L for one calendar date."""
    date: str = Field(..., description="YYYY-MM-DD")
    pnl: float
