"""
API Route Handlers

This module defines the read-only endpoints consumed by the review
dashboard. Each handler composes GitHub client calls with the response
shaper and returns a JSON body.

Design Decisions:
- Missing query parameters default to "" so the handler raises the
  domain ValidationError (403) rather than FastAPI answering 422
- Per-reviewer searches run concurrently with asyncio.gather; the first
  failure fails the request and no partial map is returned
- Errors propagate to the exception handler registered in main.py
"""

import asyncio
from datetime import datetime, timezone
from typing import List, Tuple

from fastapi import APIRouter, Depends, Request

from review_queue.errors import ValidationError
from review_queue.logging_config import get_logger
from review_queue.models import (
    PendingPRCountResponse,
    PullRequestSummary,
    ReviewersResponse,
    Team,
    TeamsResponse,
)
from review_queue.services.github_client import GitHubClient
from review_queue.services.shaper import shape

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["reviews"])


def get_github_client(request: Request) -> GitHubClient:
    """Dependency returning the client created at application startup."""
    return request.app.state.github_client


async def _assigned_prs(
    client: GitHubClient, reviewer: str, now: datetime
) -> Tuple[str, List[PullRequestSummary]]:
    items = await client.search_assigned_prs(reviewer)
    return reviewer, shape(items, now)


async def _assigned_prs_for_all(
    client: GitHubClient, reviewers: List[str]
) -> List[Tuple[str, List[PullRequestSummary]]]:
    """Fetch and shape every reviewer's queue concurrently."""
    now = datetime.now(timezone.utc)
    return await asyncio.gather(
        *(_assigned_prs(client, reviewer, now) for reviewer in reviewers)
    )


@router.get("/teams", response_model=TeamsResponse)
async def list_teams(
    client: GitHubClient = Depends(get_github_client)
) -> TeamsResponse:
    """List the organization's teams."""
    teams = await client.list_teams()
    return TeamsResponse(
        teams_list=[Team(name=team.name, slug=team.slug) for team in teams]
    )


@router.get("/reviewers", response_model=ReviewersResponse)
async def list_reviewers(
    team: str = "",
    client: GitHubClient = Depends(get_github_client)
) -> ReviewersResponse:
    """
    List a team's reviewers with the PRs awaiting their review.

    Args:
        team: Team slug

    Raises:
        ValidationError: If no team slug is given
    """
    if not team:
        raise ValidationError("Please provide a team slug", "team-slug:absent")

    reviewers = await client.list_team_members(team)
    results = await _assigned_prs_for_all(client, reviewers)

    logger.info(
        "Built reviewer queues",
        team=team,
        reviewers=len(reviewers),
        pending=sum(len(prs) for _, prs in results)
    )

    return ReviewersResponse(
        reviewers_list=reviewers,
        assigned_pr={reviewer: prs for reviewer, prs in results},
    )


@router.get("/pendingPRCount", response_model=PendingPRCountResponse)
async def pending_pr_count(
    reviewers: str = "",
    client: GitHubClient = Depends(get_github_client)
) -> PendingPRCountResponse:
    """
    Count recent PRs awaiting review for each login in a CSV list.

    Entries are used verbatim: no trimming, no deduplication.

    Raises:
        ValidationError: If the reviewers list is empty
    """
    if not reviewers:
        raise ValidationError(
            "Please provide a comma separated list of reviewers",
            "reviewers-list:absent"
        )

    reviewers_list = reviewers.split(",")
    logger.info("Counting pending PRs", reviewers=reviewers_list)

    results = await _assigned_prs_for_all(client, reviewers_list)

    return PendingPRCountResponse(
        assigned_pr={reviewer: len(prs) for reviewer, prs in results}
    )
