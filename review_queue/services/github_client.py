"""
GitHub API Client Module

This module provides the client the route handlers use to query the
GitHub REST API: organization teams, team membership, and the
issue search for PRs awaiting a reviewer.

Design Decisions:
- Use httpx for async HTTP requests, one AsyncClient per application
- Static bearer token from settings, attached to every request
- No retries and no rate-limit handling: failures surface immediately
- Accept an injectable transport so tests can fake the upstream API
"""

from typing import Any, List, Optional
from urllib.parse import quote

import httpx
import pydantic

from review_queue.config import Settings
from review_queue.errors import InvalidTeamError, UpstreamError
from review_queue.logging_config import get_logger
from review_queue.models import (
    GitHubSearchItem,
    GitHubSearchResult,
    GitHubTeam,
    GitHubTeamLookup,
    GitHubUser,
)

logger = get_logger(__name__)


class GitHubClient:
    """
    Async GitHub API client scoped to one organization.

    Usage:
        client = GitHubClient(settings)
        teams = await client.list_teams()
        await client.aclose()
    """

    API_VERSION = "2022-11-28"

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the GitHub client.

        Args:
            settings: Application settings (token, org, API base URL)
            transport: Optional httpx transport, used by tests
        """
        self.org = settings.github_org
        self._client = httpx.AsyncClient(
            base_url=settings.github_api_url,
            headers={
                "Authorization": f"Bearer {settings.github_token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": self.API_VERSION,
            },
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> httpx.Response:
        """
        Make an authenticated request to the GitHub API.

        Args:
            method: HTTP method
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments to pass to httpx

        Returns:
            httpx.Response with a 2xx status

        Raises:
            UpstreamError: On transport failure or non-2xx status
        """
        logger.debug("GitHub API request", method=method, endpoint=endpoint)

        try:
            response = await self._client.request(method, endpoint, **kwargs)
        except httpx.HTTPError as e:
            logger.error(
                "GitHub API request failed",
                endpoint=endpoint,
                error=str(e),
                error_type=type(e).__name__
            )
            raise UpstreamError(f"GitHub API request failed: {e}") from e

        if not response.is_success:
            error_body = response.text
            logger.error(
                "GitHub API error",
                status_code=response.status_code,
                endpoint=endpoint,
                error=error_body[:500]
            )
            raise UpstreamError(
                f"GitHub API error: {response.status_code}",
                status_code=response.status_code,
                response_body=error_body
            )

        return response

    @staticmethod
    def _parse(response: httpx.Response, model: Any) -> Any:
        """Validate a response body against a model or a TypeAdapter."""
        try:
            if isinstance(model, pydantic.TypeAdapter):
                return model.validate_json(response.content)
            return model.model_validate_json(response.content)
        except pydantic.ValidationError as e:
            logger.error(
                "Unexpected GitHub API payload",
                url=str(response.request.url),
                error_count=e.error_count()
            )
            raise UpstreamError(
                "Unexpected GitHub API payload",
                status_code=response.status_code,
                response_body=response.text
            ) from e

    async def list_teams(self) -> List[GitHubTeam]:
        """
        Fetch the organization's teams.

        Returns:
            Teams in upstream order
        """
        response = await self._request("GET", f"/orgs/{self.org}/teams")
        teams = self._parse(response, _TEAM_LIST)
        logger.info("Fetched teams", org=self.org, count=len(teams))
        return teams

    async def get_team_id(self, team_slug: str) -> int:
        """
        Resolve a team slug to its numeric id.

        Raises:
            InvalidTeamError: If the slug does not name a team
            UpstreamError: On any other upstream failure
        """
        # Dot segments would be normalized away and escape the teams path
        if team_slug in (".", ".."):
            logger.warning("Unknown team slug", team=team_slug)
            raise InvalidTeamError(team_slug)

        endpoint = f"/orgs/{self.org}/teams/{quote(team_slug, safe='')}"
        try:
            response = await self._request("GET", endpoint)
        except UpstreamError as e:
            if e.status_code == 404:
                logger.warning("Unknown team slug", team=team_slug)
                raise InvalidTeamError(team_slug) from e
            raise

        team_id = self._parse(response, GitHubTeamLookup).id

        if not team_id:
            logger.warning("Team lookup returned no id", team=team_slug)
            raise InvalidTeamError(team_slug)

        return team_id

    async def list_team_members(self, team_slug: str) -> List[str]:
        """
        Fetch the logins of a team's members.

        The slug is resolved to a team id first; membership is
        looked up by id.
        """
        team_id = await self.get_team_id(team_slug)
        response = await self._request("GET", f"/teams/{team_id}/members")
        members = self._parse(response, _USER_LIST)

        logger.info(
            "Fetched team members",
            team=team_slug,
            team_id=team_id,
            count=len(members)
        )
        return [member.login for member in members]

    async def search_assigned_prs(self, reviewer: str) -> List[GitHubSearchItem]:
        """
        Search open PRs in the organization awaiting a review from `reviewer`.

        The login is used verbatim in the query. Results come back
        most recently created first.
        """
        query = f"is:open is:pr org:{self.org} review-requested:{reviewer}"
        response = await self._request(
            "GET",
            "/search/issues",
            params={"q": query, "sort": "created", "order": "desc"}
        )
        result = self._parse(response, GitHubSearchResult)

        logger.debug(
            "Fetched assigned PRs",
            reviewer=reviewer,
            count=len(result.items)
        )
        return result.items


_TEAM_LIST = pydantic.TypeAdapter(List[GitHubTeam])
_USER_LIST = pydantic.TypeAdapter(List[GitHubUser])
