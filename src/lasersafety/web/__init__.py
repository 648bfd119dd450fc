"""FastAPI REST API for the laser safety engine.

This module provides a REST API for evaluating exposure limits, hazard
distances, classification, eyewear and whole scenarios.

Usage:
    uvicorn lasersafety.web:app --reload
"""

from lasersafety.web.app import app, create_app

__all__ = ["app", "create_app"]
