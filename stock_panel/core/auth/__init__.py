"""
Stock Panel - Authentication
"""
from stock_panel.core.auth.service import AuthService, GENERIC_FORGOT_MESSAGE

__all__ = ["AuthService", "GENERIC_FORGOT_MESSAGE"]
