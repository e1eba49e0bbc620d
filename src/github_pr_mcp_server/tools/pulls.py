"""GitHub pull request operations MCP tools.

Provides MCP tools for listing open pull requests and merging them. These
are the operations the PR list UI calls back into.
"""

import json
import logging
from typing import Any

from github.PullRequest import PullRequest
from mcp.types import ToolAnnotations

from ..config.defaults import DEFAULT_MERGE_METHOD, DEFAULT_REPOSITORY
from ..server import mcp
from ..utils.errors import handle_github_error
from ..utils.formatter import format_github_timestamp
from ..utils.github_client import fetch_open_pull_requests, get_repository, validate_repository
from ..utils.types import MERGE_METHODS, MergeOutcome, PullRequestSummary

logger = logging.getLogger(__name__)


def _validate_merge_inputs(owner: str, repo: str, pull_number: int, merge_method: str) -> None:
    validate_repository(owner, repo)

    if not isinstance(pull_number, int) or pull_number <= 0:
        raise ValueError("'pull_number' must be a positive integer")

    if merge_method not in MERGE_METHODS:
        raise ValueError(
            f"Invalid merge_method '{merge_method}'. Must be one of: {', '.join(MERGE_METHODS)}"
        )


def summarize_pull_request(pr: PullRequest) -> PullRequestSummary:
    """Reshape a PyGithub pull request into the stable summary schema."""
    return {
        "number": pr.number,
        "title": pr.title,
        "user": pr.user.login if pr.user and pr.user.login else "unknown",
        "created_at": format_github_timestamp(pr.created_at),
        "updated_at": format_github_timestamp(pr.updated_at),
        "html_url": pr.html_url,
        "head_ref": pr.head.ref,
        "base_ref": pr.base.ref,
        "draft": bool(pr.draft),
    }


@mcp.tool(
    title="List Pull Requests",
    annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True),
)
def list_pull_requests(
    owner: str = DEFAULT_REPOSITORY.owner,
    repo: str = DEFAULT_REPOSITORY.repo,
) -> str:
    """Get a list of open pull requests for a repository.

    Returns a JSON array of {number, title, user, created_at, updated_at,
    html_url, head_ref, base_ref, draft} for the first page of open PRs.
    """
    validate_repository(owner, repo)

    try:
        logger.info(f"Listing open PRs for {owner}/{repo}")
        pulls = fetch_open_pull_requests(owner, repo)
    except Exception as e:
        # Upstream errors reach the caller unchanged
        logger.error(f"Failed to list PRs for {owner}/{repo}: {e}")
        raise

    pull_requests: list[PullRequestSummary] = []
    seen: set[int] = set()
    for pr in pulls:
        if pr.number in seen:
            logger.warning(f"Skipping duplicate PR #{pr.number} in listing")
            continue
        seen.add(pr.number)
        pull_requests.append(summarize_pull_request(pr))

    logger.info(f"Found {len(pull_requests)} open PRs for {owner}/{repo}")

    return json.dumps(pull_requests, indent=2)


@mcp.tool(
    title="Merge Pull Request",
    annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True, openWorldHint=True),
)
def merge_pull_request(
    pull_number: int,
    merge_method: str = DEFAULT_MERGE_METHOD,
    owner: str = DEFAULT_REPOSITORY.owner,
    repo: str = DEFAULT_REPOSITORY.repo,
) -> dict[str, Any]:
    """Merge a pull request.

    Options:
    - merge_method: "merge" (default), "squash", or "rebase"

    Never raises. Returns {success: true, merged, message, sha} or
    {success: false, merged: false, message, error, code, suggestions}.
    Draft PRs are refused.
    """
    try:
        _validate_merge_inputs(owner, repo, pull_number, merge_method)
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return MergeOutcome.failed(str(e), code="VALIDATION_FAILED").to_dict()

    try:
        repository = get_repository(owner, repo)

        logger.info(f"Attempting to merge PR #{pull_number} with method '{merge_method}'")

        pr = repository.get_pull(pull_number)

        if pr.draft:
            logger.warning(f"Refusing to merge draft PR #{pull_number}")
            return MergeOutcome.failed(
                f"Cannot merge PR #{pull_number}: Pull request is a draft",
                code="DRAFT_PULL_REQUEST",
                suggestions=["Mark the pull request as ready for review first"],
            ).to_dict()

        merge_result = pr.merge(merge_method=merge_method)

        logger.info(f"Merged PR #{pull_number} (merged={merge_result.merged}, sha={merge_result.sha})")

        return MergeOutcome.succeeded(
            merged=merge_result.merged,
            message=merge_result.message,
            sha=merge_result.sha,
        ).to_dict()

    except Exception as e:
        logger.error(f"Failed to merge PR #{pull_number}: {e}")
        api_error = handle_github_error(e)
        return MergeOutcome.failed(
            api_error.message,
            code=api_error.code,
            suggestions=api_error.suggestions,
        ).to_dict()


logger.info("PR tools registered: list_pull_requests, merge_pull_request")
