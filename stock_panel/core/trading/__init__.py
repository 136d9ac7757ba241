"""
Stock Panel - Trading Journal Calculations
"""
from stock_panel.core.trading.pnl_calculator import PnLCalculator, DailyPnL

__all__ = ["PnLCalculator", "DailyPnL"]
