"""Common type definitions using TypedDict and dataclasses.

Provides structured types for MCP tool responses and internal data structures.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, TypedDict

MergeMethod = Literal["merge", "squash", "rebase"]

MERGE_METHODS: tuple[str, ...] = ("merge", "squash", "rebase")


class PullRequestSummary(TypedDict):
    """
    Summary of an open pull request as returned by list_pull_requests.

    Attributes:
        number: PR number (unique within the repository)
        title: PR title
        user: Author login, "unknown" if GitHub did not report one
        created_at: Creation time (ISO 8601)
        updated_at: Last update time (ISO 8601)
        html_url: HTML URL to the PR
        head_ref: Source branch name
        base_ref: Target branch name
        draft: Whether the PR is a draft (drafts cannot be merged)
    """

    number: int
    title: str
    user: str
    created_at: str | None
    updated_at: str | None
    html_url: str
    head_ref: str
    base_ref: str
    draft: bool


@dataclass(frozen=True)
class MergeOutcome:
    """
    Result of a merge attempt. Callers branch on ``success``, never on exceptions.

    Attributes:
        success: Whether the merge call completed without error
        merged: GitHub's confirmation that the PR was merged
        message: Outcome description or failure reason
        sha: Merge commit SHA (successful merges only)
        code: Structured error code (failures only)
        suggestions: Troubleshooting suggestions (failures only)
    """

    success: bool
    merged: bool
    message: str
    sha: str | None = None
    code: str | None = None
    suggestions: list[str] = field(default_factory=list)

    @classmethod
    def succeeded(cls, merged: bool, message: str, sha: str | None) -> "MergeOutcome":
        return cls(success=True, merged=merged, message=message, sha=sha)

    @classmethod
    def failed(
        cls, message: str, code: str, suggestions: list[str] | None = None
    ) -> "MergeOutcome":
        return cls(
            success=False,
            merged=False,
            message=message,
            code=code,
            suggestions=list(suggestions or []),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert outcome to the JSON payload returned by merge_pull_request."""
        if self.success:
            return {
                "success": True,
                "merged": self.merged,
                "message": self.message,
                "sha": self.sha,
            }
        return {
            "success": False,
            "merged": False,
            "message": self.message,
            "error": self.message,
            "code": self.code,
            "suggestions": self.suggestions,
        }


@dataclass(frozen=True)
class RepositoryConfig:
    """
    Repository configuration for GitHub operations.

    Attributes:
        owner: Repository owner username or organization
        repo: Repository name
    """

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        """
        Get full repository name in 'owner/repo' format.

        Returns:
            Full repository name
        """
        return f"{self.owner}/{self.repo}"


class MergeStatus(str, Enum):
    """Merge lifecycle of one pull request within a UI session."""

    IDLE = "idle"
    MERGING = "merging"
    MERGED = "merged"
    ERROR = "error"


@dataclass(frozen=True)
class MergeState:
    """
    Local merge state of one pull request, keyed by PR number.

    Attributes:
        status: Current merge status (idle when the number is untracked)
        message: Merge result or error message (merged and error only)
    """

    status: MergeStatus = MergeStatus.IDLE
    message: str | None = None
