"""
REST transport for session-spine.

Usage::

    uvicorn sessionspine.api:create_app --factory
"""

from sessionspine.api.app import create_app

__all__ = ["create_app"]
