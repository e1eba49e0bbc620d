"""Pytest configuration and fixtures for integration tests.

Provides test configuration and GitHub client setup.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv
from github import Auth, Github
from github.Repository import Repository

# Load test environment variables
TEST_ENV_FILE = Path(__file__).parent.parent.parent / ".env.test"
if TEST_ENV_FILE.exists():
    load_dotenv(TEST_ENV_FILE)
else:
    # Fall back to regular .env for local development
    load_dotenv()


@pytest.fixture(scope="session")
def test_config() -> dict:
    """Provide test configuration from environment variables.

    Returns:
        Dictionary with test configuration including owner, repo, and token.

    Raises:
        pytest.skip: If GITHUB_TOKEN is not set (skips integration tests).
    """
    token = os.getenv("GITHUB_TOKEN")
    if not token:
        pytest.skip("GITHUB_TOKEN not set - skipping integration tests")

    owner = os.getenv("TEST_OWNER")
    repo = os.getenv("TEST_REPO")
    if not owner or not repo:
        pytest.skip("TEST_OWNER and TEST_REPO must be set for integration tests")

    return {
        "owner": owner,
        "repo": repo,
        "token": token,
    }


@pytest.fixture(scope="session")
def test_repository(test_config: dict) -> Repository:
    """Provide the test repository, read directly through PyGithub.

    Args:
        test_config: Test configuration fixture.

    Returns:
        PyGithub Repository instance for the test repository.
    """
    github = Github(auth=Auth.Token(test_config["token"]))
    return github.get_repo(f"{test_config['owner']}/{test_config['repo']}")
