"""
Data Models Module

This module defines the Pydantic models used throughout the application.

Design Decisions:
- Parse upstream GitHub payloads into models, ignoring fields we do not use
- Response bodies keep the camelCase keys the dashboard consumes
- Nothing here is persisted; every instance lives for one request
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# GitHub API Models
# =============================================================================

class GitHubUser(BaseModel):
    """GitHub user information."""
    login: str
    id: Optional[int] = None


class GitHubTeam(BaseModel):
    """Organization team as returned by the teams endpoints."""
    id: Optional[int] = None
    name: str
    slug: str


class GitHubTeamLookup(BaseModel):
    """Team-by-slug lookup; only the numeric id is used."""
    id: Optional[int] = None


class GitHubSearchItem(BaseModel):
    """One result of the issue/PR search endpoint."""
    id: int
    number: int
    title: str
    user: GitHubUser
    html_url: str
    repository_url: str
    created_at: Optional[datetime] = None
    updated_at: datetime


class GitHubSearchResult(BaseModel):
    """Issue/PR search response envelope."""
    total_count: int = 0
    incomplete_results: bool = False
    items: List[GitHubSearchItem] = Field(default_factory=list)


# =============================================================================
# Response Models
# =============================================================================

class ResponseModel(BaseModel):
    """Base for response bodies, populated by field name, dumped by alias."""
    model_config = ConfigDict(populate_by_name=True)


class Team(ResponseModel):
    """Review group identity exposed by /api/teams."""
    name: str
    slug: str


class PullRequestSummary(ResponseModel):
    """Compact projection of a search item."""
    id: int
    title: str
    author: str
    link: str
    number: int
    repo: str
    age_seconds: float = Field(alias="ageSeconds")


class TeamsResponse(ResponseModel):
    """Body of /api/teams."""
    teams_list: List[Team] = Field(alias="teamsList")


class ReviewersResponse(ResponseModel):
    """Body of /api/reviewers: members and their pending PRs."""
    reviewers_list: List[str] = Field(alias="reviewersList")
    assigned_pr: Dict[str, List[PullRequestSummary]] = Field(alias="assignedPR")


class PendingPRCountResponse(ResponseModel):
    """Body of /api/pendingPRCount: pending PR count per login."""
    assigned_pr: Dict[str, int] = Field(alias="assignedPR")
