"""
API Package

This package contains the HTTP route handlers:
- routes: teams, reviewers and pending PR count endpoints
"""

from review_queue.api.routes import router

__all__ = ["router"]
