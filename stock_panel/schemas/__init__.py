"""
Stock Panel - Pydantic Schemas
"""
