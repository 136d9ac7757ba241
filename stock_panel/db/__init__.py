"""
Stock Panel - Persistence layer
"""
