"""Integration tests for GitHub pull request operations.

These tests make real API calls to GitHub and require a valid GITHUB_TOKEN.
None of them merges anything: the merge test targets a PR number that does
not exist.
Run with: pytest tests/integration/test_pulls_integration.py -m integration
"""

import json

import pytest
from github.Repository import Repository
from github_pr_mcp_server.tools.app import show_pull_requests
from github_pr_mcp_server.tools.pulls import list_pull_requests, merge_pull_request

SUMMARY_FIELDS = {
    "number",
    "title",
    "user",
    "created_at",
    "updated_at",
    "html_url",
    "head_ref",
    "base_ref",
    "draft",
}


@pytest.mark.integration
class TestListPullRequestsIntegration:
    """Integration tests for list_pull_requests with the real GitHub API."""

    def test_list_open_prs(self, test_config: dict, test_repository: Repository) -> None:
        """Test listing matches GitHub's first page of open PRs.

        This test:
        1. Lists open PRs through the tool
        2. Verifies every element has the summary schema and a unique number
        3. Compares numbers with PyGithub's own first page
        """
        result = json.loads(
            list_pull_requests(owner=test_config["owner"], repo=test_config["repo"])
        )

        assert isinstance(result, list)
        for pr in result:
            assert set(pr) == SUMMARY_FIELDS
            assert isinstance(pr["number"], int)
            assert isinstance(pr["draft"], bool)
            assert "github.com" in pr["html_url"]

        numbers = [pr["number"] for pr in result]
        assert len(numbers) == len(set(numbers))

        expected = [pr.number for pr in test_repository.get_pulls(state="open").get_page(0)]
        assert numbers == expected

    def test_show_counts_match_list(self, test_config: dict) -> None:
        """Test show_pull_requests reports the same count as the listing."""
        owner, repo = test_config["owner"], test_config["repo"]

        shown = show_pull_requests(owner=owner, repo=repo)
        listed = json.loads(list_pull_requests(owner=owner, repo=repo))

        assert shown["success"] is True
        assert shown["count"] == len(listed)


@pytest.mark.integration
class TestMergePullRequestIntegration:
    """Integration tests for merge_pull_request failure reporting."""

    def test_merge_nonexistent_pr_returns_failure(self, test_config: dict) -> None:
        """Test a merge against a missing PR returns a failure result instead of raising."""
        result = merge_pull_request(
            pull_number=999999,
            owner=test_config["owner"],
            repo=test_config["repo"],
        )

        assert result["success"] is False
        assert result["merged"] is False
        assert result["code"] == "RESOURCE_NOT_FOUND"
        assert result["message"]
