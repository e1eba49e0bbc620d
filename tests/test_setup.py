"""Tests for MCP server setup and infrastructure.

Tests GitHub client authentication and server startup checks.
"""

import os
import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest
from github_pr_mcp_server.utils.github_client import (
    get_github_client,
    get_repository,
    reset_github_client,
)


class TestGitHubClient:
    """Test GitHub client singleton functionality."""

    def setup_method(self) -> None:
        """Reset singleton before each test."""
        reset_github_client()

    def teardown_method(self) -> None:
        """Reset singleton after each test."""
        reset_github_client()

    @patch.dict(os.environ, {"GITHUB_TOKEN": "test_token"})
    @patch("github_pr_mcp_server.utils.github_client.Github")
    def test_get_github_client_success(self, mock_github: MagicMock) -> None:
        """Test successful GitHub client initialization."""
        mock_user = MagicMock()
        mock_user.login = "testuser"
        mock_github.return_value.get_user.return_value = mock_user

        client = get_github_client()

        mock_github.assert_called_once()
        assert client is mock_github.return_value

    @patch.dict(os.environ, {"GITHUB_PERSONAL_ACCESS_TOKEN": "pat_token"}, clear=True)
    @patch("github_pr_mcp_server.utils.github_client.Auth")
    @patch("github_pr_mcp_server.utils.github_client.Github")
    def test_personal_access_token_fallback(
        self, mock_github: MagicMock, mock_auth: MagicMock
    ) -> None:
        """Test GITHUB_PERSONAL_ACCESS_TOKEN is used when GITHUB_TOKEN is absent."""
        get_github_client()

        mock_auth.Token.assert_called_once_with("pat_token")

    @patch.dict(os.environ, {}, clear=True)
    def test_get_github_client_no_token(self) -> None:
        """Test error when no token is set."""
        with pytest.raises(ValueError) as exc_info:
            get_github_client()

        assert "GITHUB_TOKEN environment variable not set" in str(exc_info.value)

    @patch.dict(os.environ, {"GITHUB_TOKEN": "invalid_token"})
    @patch("github_pr_mcp_server.utils.github_client.Github")
    def test_get_github_client_auth_failure(self, mock_github: MagicMock) -> None:
        """Test error when authentication fails, and that the next call retries."""
        mock_github.return_value.get_user.side_effect = Exception("Bad credentials")

        with pytest.raises(Exception) as exc_info:
            get_github_client()

        assert "GitHub authentication failed" in str(exc_info.value)

        with pytest.raises(Exception):
            get_github_client()
        assert mock_github.call_count == 2

    @patch.dict(os.environ, {"GITHUB_TOKEN": "test_token"})
    @patch("github_pr_mcp_server.utils.github_client.Github")
    def test_get_github_client_singleton(self, mock_github: MagicMock) -> None:
        """Test that get_github_client returns the same instance."""
        client1 = get_github_client()
        client2 = get_github_client()

        assert client1 is client2
        assert mock_github.call_count == 1

    @patch.dict(os.environ, {"GITHUB_TOKEN": "test_token"})
    @patch("github_pr_mcp_server.utils.github_client.Github")
    def test_get_repository(self, mock_github: MagicMock) -> None:
        """Test repository lookup uses 'owner/repo'."""
        get_repository("octo", "demo")

        mock_github.return_value.get_repo.assert_called_once_with("octo/demo")


class TestServerMain:
    """Test server startup checks."""

    @patch.dict(os.environ, {"MCP_TRANSPORT": "carrier-pigeon"})
    def test_invalid_transport_rejected(self) -> None:
        """Test an unknown transport fails before the server starts."""
        from github_pr_mcp_server.server import main

        with pytest.raises(ValueError) as exc_info:
            main()

        assert "carrier-pigeon" in str(exc_info.value)

    @patch.dict(os.environ, {"MCP_TRANSPORT": "stdio"})
    def test_main_runs_with_registered_tools(self) -> None:
        """Test main verifies tool registration and runs on the chosen transport."""
        from github_pr_mcp_server import server

        with patch.object(server.mcp, "run") as mock_run:
            server.main()

        mock_run.assert_called_once_with(transport="stdio")


class TestImports:
    """Test every tool module can be the first one imported."""

    @pytest.mark.parametrize(
        "module",
        [
            "github_pr_mcp_server.tools.pulls",
            "github_pr_mcp_server.tools.app",
            "github_pr_mcp_server.server",
        ],
    )
    def test_module_imports_in_fresh_interpreter(self, module: str) -> None:
        """Test importing the module alone registers all tools without an import cycle."""
        code = (
            f"import {module}\n"
            "from github_pr_mcp_server import mcp\n"
            "names = sorted(t.name for t in mcp._tool_manager.list_tools())\n"
            "print(','.join(names))\n"
        )

        result = subprocess.run(
            [sys.executable, "-c", code],
            capture_output=True,
            text=True,
            timeout=60,
        )

        assert result.returncode == 0, result.stderr
        assert result.stdout.strip() == "list_pull_requests,merge_pull_request,show_pull_requests"
