"""
Stock Panel - Personal Trading Journal

Trade recording, daily P&L and price alerts behind bearer-token auth.
"""
__version__ = "1.0.0"
