"""
Error Taxonomy

Every failure a request can hit is one of these exceptions. They are
raised by the GitHub client and the route handlers and turned into
HTTP responses by the exception handler registered in main.py.
"""

import json
from typing import Any, Dict, Optional


class ReviewQueueError(Exception):
    """
    Base exception for request failures.

    The string form is a JSON object with the human-readable message
    and a stable error id; it is sent verbatim as the response body.
    """

    error_id = "review-queue:error"

    def __init__(self, message: str, error_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_id is not None:
            self.error_id = error_id

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "id": self.error_id}

    def __str__(self) -> str:
        return json.dumps(self.to_dict())


class ValidationError(ReviewQueueError):
    """A required query parameter is missing or empty."""

    error_id = "request:invalid"


class InvalidTeamError(ReviewQueueError):
    """The team slug does not resolve to a team id."""

    error_id = "team-slug:invalid"

    def __init__(self, team_slug: str):
        super().__init__("Invalid Team Id")
        self.team_slug = team_slug


class UpstreamError(ReviewQueueError):
    """The GitHub API call failed, returned non-2xx or an unexpected body."""

    error_id = "upstream:error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.status_code is not None:
            data["status"] = self.status_code
        if self.response_body:
            data["body"] = self.response_body[:500]
        return data
