"""
Test Configuration

Pytest configuration and fixtures for the test suite.
"""

import os

# Settings are read when review_queue.main is imported
os.environ.setdefault("GITHUB_TOKEN", "test-token")
os.environ.setdefault("GITHUB_ORG", "acme")

from datetime import datetime, timezone
from typing import Dict, Generator, List, Optional, Set

import httpx
import pytest
from fastapi.testclient import TestClient

from review_queue.config import Settings
from review_queue.main import create_app


def make_search_item(
    number: int,
    updated_at: Optional[str] = None,
    repo: str = "my-repo",
    author: str = "dave",
) -> dict:
    """Build a search result item shaped like the GitHub API's."""
    if updated_at is None:
        updated_at = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return {
        "id": 1000 + number,
        "number": number,
        "title": f"PR number {number}",
        "user": {"login": author, "id": 42},
        "html_url": f"https://github.com/acme/{repo}/pull/{number}",
        "repository_url": f"https://api.github.com/repos/acme/{repo}",
        "state": "open",
        "created_at": updated_at,
        "updated_at": updated_at,
    }


class FakeGitHub:
    """
    Minimal stand-in for the GitHub REST API, used as an httpx MockTransport
    handler. Records every request it receives.
    """

    def __init__(self, org: str = "acme"):
        self.org = org
        self.teams: List[dict] = [
            {"id": 7, "name": "Platform", "slug": "platform"},
            {"id": 8, "name": "Web Frontend", "slug": "web-frontend"},
        ]
        self.members: Dict[int, List[str]] = {
            7: ["alice", "bob", "carol"],
            8: [],
        }
        self.search_results: Dict[str, List[dict]] = {}
        self.failing_reviewers: Set[str] = set()
        self.network_down = False
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.network_down:
            raise httpx.ConnectError("connection refused", request=request)

        path = request.url.path
        teams_path = f"/orgs/{self.org}/teams"

        if path == teams_path:
            return httpx.Response(200, json=self.teams)

        if path.startswith(teams_path + "/"):
            slug = path.rsplit("/", 1)[1]
            for team in self.teams:
                if team["slug"] == slug:
                    return httpx.Response(200, json=team)
            return httpx.Response(404, json={"message": "Not Found"})

        if path.startswith("/teams/") and path.endswith("/members"):
            team_id = int(path.split("/")[2])
            logins = self.members.get(team_id, [])
            return httpx.Response(
                200, json=[{"login": login, "id": i} for i, login in enumerate(logins)]
            )

        if path == "/search/issues":
            query = request.url.params["q"]
            reviewer = query.split("review-requested:", 1)[1]
            if reviewer in self.failing_reviewers:
                return httpx.Response(500, text="search backend unavailable")
            items = self.search_results.get(reviewer, [])
            return httpx.Response(
                200,
                json={"total_count": len(items), "incomplete_results": False, "items": items},
            )

        return httpx.Response(404, json={"message": "Not Found"})

    def search_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/search/issues"]


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the process environment."""
    return Settings(
        _env_file=None,
        github_token="test-token",
        github_org="acme",
    )


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Fake upstream API."""
    return FakeGitHub()


@pytest.fixture
def transport(fake_github: FakeGitHub) -> httpx.MockTransport:
    return httpx.MockTransport(fake_github)


@pytest.fixture
def client(settings: Settings, transport: httpx.MockTransport) -> Generator[TestClient, None, None]:
    """Create a test client wired to the fake GitHub API."""
    app = create_app(settings, transport=transport)
    with TestClient(app) as test_client:
        yield test_client
