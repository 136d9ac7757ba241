"""
Stock Panel - Utilities
"""
