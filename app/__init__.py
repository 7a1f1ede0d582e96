# app/__init__.py
"""
Invoice dashboard data API.

Exposes the FastAPI instance so the service starts with:
    uvicorn app:app --reload
"""

from .main import app

__all__ = ["app"]
