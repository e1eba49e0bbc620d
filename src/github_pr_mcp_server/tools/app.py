"""PR list app MCP tool and UI resource.

Provides the host-facing show_pull_requests tool, which points MCP hosts
at the PR list UI, and the resource that serves the UI document.
"""

import logging
from typing import Any

from mcp.types import ToolAnnotations

from ..config.defaults import (
    DEFAULT_REPOSITORY,
    UI_DOCUMENT_NAME,
    UI_RESOURCE_MIME_TYPE,
    UI_RESOURCE_URI,
    UI_STATIC_DIR,
)
from ..server import mcp
from ..utils.formatter import format_pr_count
from ..utils.github_client import fetch_open_pull_requests, validate_repository

logger = logging.getLogger(__name__)


@mcp.tool(
    title="Show Pull Requests",
    annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True),
    meta={"ui": {"resourceUri": UI_RESOURCE_URI}},
)
def show_pull_requests(
    owner: str = DEFAULT_REPOSITORY.owner,
    repo: str = DEFAULT_REPOSITORY.repo,
) -> dict[str, Any]:
    """Display a list of open pull requests for a GitHub repository with merge buttons.

    owner: repository owner (username or organization)
    repo: repository name

    Returns: {success, count, message}
    """
    validate_repository(owner, repo)

    try:
        pulls = fetch_open_pull_requests(owner, repo)
    except Exception as e:
        logger.error(f"Failed to count PRs for {owner}/{repo}: {e}")
        raise

    count = len(pulls)
    logger.info(f"Showing {count} open PRs for {owner}/{repo}")

    return {
        "success": True,
        "count": count,
        "message": format_pr_count(count, owner, repo),
    }


@mcp.resource(
    UI_RESOURCE_URI,
    name="github-pr-list-ui",
    description="GitHub PR List UI",
    mime_type=UI_RESOURCE_MIME_TYPE,
)
def pr_list_ui() -> str:
    """Serve the PR list UI document, read fresh from disk on every request."""
    path = UI_STATIC_DIR / UI_DOCUMENT_NAME
    logger.info(f"Serving UI document from {path}")
    return path.read_text(encoding="utf-8")


logger.info("App tools registered: show_pull_requests, ui resource")
