"""
Stock Panel - Alert Model
Price and percentage alerts owned by a user
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Float, Boolean, Enum as SQLEnum
from sqlalchemy.orm import relationship

from stock_panel.db.database import Base


class AlertType(str, Enum):
    """Type of alert."""
    PRICE_ABOVE = "PRICE_ABOVE"
    PRICE_BELOW = "PRICE_BELOW"
    PERCENTAGE_CHANGE = "PERCENTAGE_CHANGE"


class AlertCondition(str, Enum):
    """Comparison applied against the target value."""
    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="
    EQ = "=="


class Alert(Base):
    """Alert rule model."""

    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Instrument
    symbol = Column(String(50), nullable=False, index=True)
    underlying_symbol = Column(String(50), default="")
    option_type = Column(String(4), default="")
    strike_price = Column(Float, default=0.0)
    expiry = Column(String(20), default="")

    # Alert configuration
    alert_type = Column(SQLEnum(AlertType), nullable=False)
    target_value = Column(Float, nullable=False, default=0.0)
    condition = Column(SQLEnum(AlertCondition), nullable=False)
    message = Column(String(500), default="")
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="alerts")

    def __repr__(self):
        return f"<Alert {self.symbol} {self.alert_type.value} {self.condition.value} {self.target_value}>"
