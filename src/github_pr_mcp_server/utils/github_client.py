"""GitHub client utilities."""

import logging
import os

from github import Auth, Github
from github.PullRequest import PullRequest
from github.Repository import Repository

from .types import RepositoryConfig

logger = logging.getLogger(__name__)

_github_instance: Github | None = None


def get_github_token() -> str | None:
    """Read the static GitHub token from the environment."""
    return os.getenv("GITHUB_TOKEN") or os.getenv("GITHUB_PERSONAL_ACCESS_TOKEN")


def get_github_client() -> Github:
    """Get authenticated GitHub client (singleton)."""
    global _github_instance

    if _github_instance is None:
        token = get_github_token()

        if not token:
            raise ValueError(
                "GITHUB_TOKEN environment variable not set. "
                "Please create .env file with GITHUB_TOKEN=ghp_..."
            )

        auth = Auth.Token(token)
        _github_instance = Github(auth=auth)

        # Verify authentication
        try:
            user = _github_instance.get_user()
            logger.info(f"✅ Authenticated as: {user.login}")
        except Exception as e:
            _github_instance = None
            raise Exception(
                f"GitHub authentication failed: {str(e)}. Check GITHUB_TOKEN is valid."
            ) from e

    return _github_instance


def validate_repository(owner: str, repo: str) -> None:
    """
    Validate repository identity before making API call.

    Raises:
        ValueError: If owner or repo is empty
    """
    errors = []

    if not owner or not owner.strip():
        errors.append("'owner' cannot be empty")
    if not repo or not repo.strip():
        errors.append("'repo' cannot be empty")

    if errors:
        error_list = "\n  - ".join(errors)
        raise ValueError(f"Invalid repository parameters:\n  - {error_list}")


def get_repository(owner: str, repo: str) -> Repository:
    """Get authenticated repository instance."""
    gh = get_github_client()
    return gh.get_repo(RepositoryConfig(owner=owner, repo=repo).full_name)


def fetch_open_pull_requests(owner: str, repo: str) -> list[PullRequest]:
    """Fetch the first page of open pull requests, in GitHub's default order."""
    repository = get_repository(owner, repo)

    # Single page only: no pagination parameters are exposed
    return repository.get_pulls(state="open").get_page(0)


def reset_github_client() -> None:
    """Reset GitHub client singleton (for testing)."""
    global _github_instance
    _github_instance = None
