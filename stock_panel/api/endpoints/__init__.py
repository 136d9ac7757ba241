"""
Stock Panel - API Endpoints
"""
