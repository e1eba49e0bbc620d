"""Shared fakes for PR list UI and tool tests."""

import json
from typing import Any

from mcp.types import CallToolResult, TextContent


def tool_result(payload: Any, is_error: bool = False) -> CallToolResult:
    """Build a tool result holding one JSON text block, as the server returns it."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


def make_summary(number: int, draft: bool = False, **overrides: Any) -> dict[str, Any]:
    """Build a PullRequestSummary dict for the octo/demo repository."""
    summary = {
        "number": number,
        "title": f"PR number {number}",
        "user": "octocat",
        "created_at": "2026-10-17T10:00:00Z",
        "updated_at": "2026-10-18T09:00:00Z",
        "html_url": f"https://github.com/octo/demo/pull/{number}",
        "head_ref": f"feature-{number}",
        "base_ref": "main",
        "draft": draft,
    }
    summary.update(overrides)
    return summary
