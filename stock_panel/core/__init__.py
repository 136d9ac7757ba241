"""
Stock Panel - Core Business Logic
"""
