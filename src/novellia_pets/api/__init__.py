"""
HTTP layer of the pets service.

This module exposes the FastAPI application factory and the server entry
point.
"""

from .app import create_app, main

__all__ = ["create_app", "main"]
