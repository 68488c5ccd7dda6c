"""
Response Shaper

Turns raw search items into the compact summaries returned to clients:
drop items that were not updated recently, then project the rest.

All functions take an optional `now` so that a whole list is shaped
against one instant and tests can pin the clock.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from review_queue.models import GitHubSearchItem, PullRequestSummary


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _now(now: Optional[datetime]) -> datetime:
    return _utc(now) if now is not None else datetime.now(timezone.utc)


def is_recent(pr: GitHubSearchItem, now: Optional[datetime] = None) -> bool:
    """
    Coarse, calendar-based recency check in UTC.

    An item is stale when it was last updated in another calendar year,
    or when its update month lags the current month by more than one.
    The year check wins, so a December update seen in January is stale
    even though the months are adjacent.
    """
    now = _now(now)
    updated = _utc(pr.updated_at)

    if updated.year != now.year:
        return False

    if now.month - updated.month > 1:
        return False

    return True


def repo_name(repository_url: str) -> str:
    """Return the path segment after the last '/' of a repository URL."""
    return repository_url[repository_url.rfind("/") + 1:]


def project(pr: GitHubSearchItem, now: Optional[datetime] = None) -> PullRequestSummary:
    """Map a search item to a PullRequestSummary."""
    now = _now(now)
    return PullRequestSummary(
        id=pr.id,
        title=pr.title,
        author=pr.user.login,
        link=pr.html_url,
        number=pr.number,
        repo=repo_name(pr.repository_url),
        age_seconds=(now - _utc(pr.updated_at)).total_seconds(),
    )


def shape(
    prs: Iterable[GitHubSearchItem], now: Optional[datetime] = None
) -> List[PullRequestSummary]:
    """Filter by is_recent then project, keeping upstream order."""
    now = _now(now)
    return [project(pr, now) for pr in prs if is_recent(pr, now)]
