"""
HMS Scheduling Backend

A FastAPI-based clinical scheduling service for managing staff accounts,
patients, departments and appointments behind role-aware authentication.
"""

__version__ = "1.0.0"
