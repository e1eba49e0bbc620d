"""GitHub PR MCP server utilities."""

from .errors import GitHubAPIError, ToolCallError, handle_github_error
from .formatter import format_github_timestamp, format_pr_count, format_relative_date
from .github_client import (
    fetch_open_pull_requests,
    get_github_client,
    get_repository,
    reset_github_client,
    validate_repository,
)

__all__ = [
    "GitHubAPIError",
    "ToolCallError",
    "handle_github_error",
    "format_github_timestamp",
    "format_pr_count",
    "format_relative_date",
    "fetch_open_pull_requests",
    "get_github_client",
    "get_repository",
    "reset_github_client",
    "validate_repository",
]
