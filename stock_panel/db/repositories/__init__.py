"""
Stock Panel - Data Repositories

Repository pattern implementations for database operations.
"""
from stock_panel.db.repositories.user import UserRepository
from stock_panel.db.repositories.stock import StockRepository
from stock_panel.db.repositories.alert import AlertRepository

__all__ = [
    "UserRepository",
    "StockRepository",
    "AlertRepository",
]
