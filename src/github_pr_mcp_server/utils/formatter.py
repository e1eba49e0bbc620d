"""Response formatting utilities for MCP tools and the PR list view.

Provides functions to format timestamps and counts for consistent
tool responses and UI labels.
"""

from datetime import datetime, timezone


def format_github_timestamp(value: datetime | None) -> str | None:
    """Format a datetime the way the GitHub REST API writes it (UTC, "Z" suffix)."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO 8601 timestamp ("Z" suffix allowed) into an aware datetime."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_relative_date(value: str, now: datetime | None = None) -> str:
    """Format a timestamp relative to now.

    Args:
        value: ISO 8601 timestamp from GitHub
        now: Reference time (defaults to the current UTC time)

    Returns:
        "Nm ago" or "Nh ago" within the same day, "yesterday", "Nd ago" within
        a week, otherwise the calendar date (YYYY-MM-DD)
    """
    date = parse_timestamp(value)
    now = now or datetime.now(timezone.utc)
    diff_seconds = (now - date).total_seconds()
    diff_days = int(diff_seconds // 86400)

    if diff_days == 0:
        diff_hours = int(diff_seconds // 3600)
        if diff_hours == 0:
            return f"{int(diff_seconds // 60)}m ago"
        return f"{diff_hours}h ago"
    if diff_days == 1:
        return "yesterday"
    if 1 < diff_days < 7:
        return f"{diff_days}d ago"
    return date.date().isoformat()


def format_pr_count(count: int, owner: str, repo: str) -> str:
    """Format the summary sentence returned by show_pull_requests."""
    return f"Found {count} open pull request(s) for {owner}/{repo}"
