"""
API v1 package.

Contains versioned API routes for account registration and login.
"""

from authcore.api.v1.routes import router

__all__ = ["router"]
