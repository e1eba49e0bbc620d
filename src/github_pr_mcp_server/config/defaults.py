"""Default configuration values for GitHub pull request operations.

Provides default repository settings and UI settings from environment variables.
Users can set GITHUB_OWNER and GITHUB_REPO environment variables
to configure a default repository for all operations.
"""

import os
from pathlib import Path

from ..utils.types import MergeMethod, RepositoryConfig

# Default repository configuration from environment variables
# If not set, defaults to empty string (tools will require explicit values)
DEFAULT_OWNER = os.getenv("GITHUB_OWNER", "")
DEFAULT_REPO = os.getenv("GITHUB_REPO", "")

# Create default repository config instance
DEFAULT_REPOSITORY = RepositoryConfig(owner=DEFAULT_OWNER, repo=DEFAULT_REPO)

DEFAULT_MERGE_METHOD: MergeMethod = "merge"

# UI resource served to MCP hosts that support embedded apps
UI_RESOURCE_URI = "ui://github-pr/mcp-app.html"
UI_RESOURCE_MIME_TYPE = "text/html;profile=mcp-app"
UI_DOCUMENT_NAME = "mcp-app.html"
UI_STATIC_DIR = Path(os.getenv("GITHUB_PR_UI_DIR", Path(__file__).parent.parent / "ui" / "static"))

# Merged pull requests stay visible this long before leaving the list (2000 ms)
MERGED_REMOVAL_DELAY_SECONDS = 2.0
