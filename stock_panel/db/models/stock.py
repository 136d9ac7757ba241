"""
Stock Panel - Stock Record Model
Option/stock executions, append-only
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, Enum as SQLEnum
import enum

from stock_panel.db.database import Base


class TradeSide(str, enum.Enum):
    """Execution side."""
    BUY = "BUY"
    SELL = "SELL"


class OptionType(str, enum.Enum):
    """Option kind; empty for plain stock."""
    CALL = "CALL"
    PUT = "PUT"
    NONE = ""


class StockRecord(Base):
    """Recorded trade execution."""

    __tablename__ = "stocks"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Instrument
    symbol = Column(String(50), nullable=False)
    underlying_symbol = Column(String(50), default="")
    option_type = Column(String(4), default="")
    strike_price = Column(Float, default=0.0)
    expiry = Column(String(20), default="")

    # Execution
    price = Column(Float, nullable=False)
    side = Column(SQLEnum(TradeSide), nullable=False)
    timestamp = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<StockRecord {self.side.value} {self.symbol} @ {self.price}>"
