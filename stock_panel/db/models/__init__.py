"""
Stock Panel - Database Models
"""
from stock_panel.db.models.user import User
from stock_panel.db.models.stock import StockRecord, TradeSide, OptionType
from stock_panel.db.models.alert import Alert, AlertType, AlertCondition

__all__ = [
    "User",
    "StockRecord",
    "TradeSide",
    "OptionType",
    "Alert",
    "AlertType",
    "AlertCondition",
]
