"""Root pytest configuration for github-pr-mcp-server tests.

Sets up environment variables for default owner/repo used in unit tests,
and a fake host for the PR list UI.
"""

import importlib
import os
from unittest.mock import AsyncMock, Mock

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Set up test environment before tests run."""
    # Set default owner/repo for unit tests
    # These are used by defaults.py when tools are called without explicit owner/repo
    os.environ["GITHUB_OWNER"] = "testowner"
    os.environ["GITHUB_REPO"] = "testrepo"

    # Reload the defaults module to pick up the new environment variables
    # This is needed because defaults.py evaluates os.getenv at import time
    import github_pr_mcp_server.config.defaults as defaults_module

    importlib.reload(defaults_module)


@pytest.fixture
def host() -> Mock:
    """Fake UI host with async capabilities and no safe-area insets."""
    fake = Mock()
    fake.host_context = None
    fake.call_server_tool = AsyncMock()
    fake.open_link = AsyncMock()
    fake.send_log = AsyncMock()
    return fake
