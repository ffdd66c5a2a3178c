"""
HTTP entry point.

Modules:
    app - FastAPI application (POST /webhook/products/create)
"""

from .app import app, get_pipeline

__all__ = ['app', 'get_pipeline']
