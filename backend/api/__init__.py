"""
ZoškaGram API package.

Provides the FastAPI application that gates page requests on the session
and profile completion, plus the profile check endpoints.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
