"""Structured error handling for GitHub API operations.

Provides custom error classes and utilities for handling GitHub API errors
with actionable error messages and troubleshooting suggestions.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class GitHubAPIError(Exception):
    """
    Custom error class for GitHub API errors with structured information.

    Attributes:
        code: Error code for categorization (e.g., "MERGE_CONFLICT")
        message: Human-readable error message
        details: Optional additional error details
        suggestions: Optional troubleshooting suggestions
    """

    code: str
    message: str
    details: dict[str, Any] | None = None
    suggestions: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Initialize the exception base class."""
        super().__init__(self.message)


class ToolCallError(Exception):
    """A server tool invoked through the UI host failed or returned an unusable payload."""


def _upstream_message(error: Exception, data: Any) -> str:
    """Prefer GitHub's own "message" field over the exception's string form."""
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return str(error)


def _extract_validation_errors(data: Any) -> tuple[str, list[str]]:
    """
    Extract detailed validation error messages from GitHub API response.

    Args:
        data: Response data from GithubException (typically a dict)

    Returns:
        Tuple of (main_message, list_of_field_errors)
    """
    if not isinstance(data, dict):
        return "Validation failed", []

    # GitHub API returns errors in different formats
    message = data.get("message", "Validation failed")
    errors = data.get("errors", [])

    field_errors = []
    for error in errors:
        if isinstance(error, dict):
            field_name = error.get("field", "unknown")
            code = error.get("code", "invalid")
            error_message = error.get("message", "")

            if error_message:
                field_errors.append(f"Field '{field_name}': {error_message}")
            elif code == "missing_field":
                field_errors.append(f"Field '{field_name}' is required but missing")
            elif code == "invalid":
                field_errors.append(f"Field '{field_name}' has an invalid value")
            else:
                field_errors.append(f"Field '{field_name}': {code}")
        elif isinstance(error, str):
            field_errors.append(error)

    return message, field_errors


def handle_github_error(error: Exception) -> GitHubAPIError:
    """
    Handle GitHub API errors and convert to structured GitHubAPIError.

    Provides specific error codes and actionable suggestions based on
    HTTP status codes. Merge refusals (405) and head conflicts (409) get
    their own codes so the UI can show GitHub's reason verbatim.

    Args:
        error: Exception from PyGithub API call (typically GithubException)

    Returns:
        GitHubAPIError with structured information

    Example:
        >>> try:
        ...     pr.merge(merge_method="merge")
        ... except Exception as e:
        ...     api_error = handle_github_error(e)
        ...     print(api_error.code, api_error.message)
    """
    # Try to extract status and data from GithubException
    status = getattr(error, "status", None)
    data = getattr(error, "data", None)

    error_str = str(error)

    if status == 404 or (status is None and "404" in error_str):
        return GitHubAPIError(
            code="RESOURCE_NOT_FOUND",
            message=_upstream_message(error, data),
            details={"status": 404},
            suggestions=[
                "Verify the pull request number exists",
                "Check you have access to this repository",
            ],
        )

    if status == 403 or (status is None and "403" in error_str):
        return GitHubAPIError(
            code="FORBIDDEN",
            message=_upstream_message(error, data),
            details={"status": 403},
            suggestions=[
                "Access denied. Verify GITHUB_TOKEN has write access to the repository",
                "Check branch protection rules allow you to merge",
            ],
        )

    if status == 401 or (status is None and "401" in error_str):
        return GitHubAPIError(
            code="UNAUTHORIZED",
            message=_upstream_message(error, data),
            details={"status": 401},
            suggestions=[
                "Authentication failed. Verify GITHUB_TOKEN is valid",
                "Token may have expired",
            ],
        )

    if status == 405 or (status is None and "405" in error_str):
        return GitHubAPIError(
            code="NOT_MERGEABLE",
            message=_upstream_message(error, data),
            details={"status": 405},
            suggestions=[
                "Resolve merge conflicts with the base branch",
                "Wait for required status checks and reviews",
                "Check the merge method is allowed in repository settings",
            ],
        )

    if status == 409 or (status is None and "409" in error_str):
        return GitHubAPIError(
            code="MERGE_CONFLICT",
            message=_upstream_message(error, data),
            details={"status": 409},
            suggestions=["Refresh the pull request list and retry the merge"],
        )

    if status == 422 or (status is None and "422" in error_str):
        # Extract detailed validation errors
        main_message, field_errors = _extract_validation_errors(data)

        if field_errors:
            detailed_message = f"{main_message}:\n" + "\n".join(f"  - {e}" for e in field_errors)
        else:
            detailed_message = main_message

        return GitHubAPIError(
            code="VALIDATION_FAILED",
            message=detailed_message,
            details={"status": 422, "field_errors": field_errors, "raw_data": data},
            suggestions=[
                "Review the parameter values in your request",
                "Check GitHub API documentation for required fields and formats",
            ],
        )

    return GitHubAPIError(
        code="GITHUB_API_ERROR",
        message=_upstream_message(error, data),
        details={"original_error": type(error).__name__},
    )
