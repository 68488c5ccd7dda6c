"""
Services Package

This package contains the service modules for the PR Review Queue:
- github_client: GitHub API client
- shaper: search result filtering and projection
"""

from review_queue.services.github_client import GitHubClient
from review_queue.services.shaper import is_recent, project, shape

__all__ = [
    "GitHubClient",
    "is_recent",
    "project",
    "shape",
]
