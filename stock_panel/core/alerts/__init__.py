"""
Stock Panel - Alert Management
"""
from stock_panel.core.alerts.service import AlertService

__all__ = ["AlertService"]
