"""
Stock Panel - HTTP API
"""
