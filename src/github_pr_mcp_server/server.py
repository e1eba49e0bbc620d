"""GitHub PR MCP Server - Main entry point.

FastMCP server that provides pull request list/merge tools and the PR list UI
resource to MCP hosts.
"""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Import the singleton mcp instance from package level
from . import mcp
from .utils.github_client import get_github_token

__all__ = ["mcp", "main"]

# Load environment variables from project root .env file
# This file is at: <project>/src/github_pr_mcp_server/server.py
project_root = Path(__file__).parent.parent.parent
env_path = project_root / ".env"
load_dotenv(env_path, override=True)

# Configure logging to stderr (stdout is used for MCP protocol)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

TRANSPORTS = ("stdio", "sse", "streamable-http")

# Validate the GitHub token is available (read once at startup)
if not get_github_token():
    logger.error("GITHUB_TOKEN not found in environment!")
    logger.error(f"Searched for .env at: {env_path}")
    logger.error("GitHub API operations will fail without authentication.")
else:
    logger.info("GitHub token loaded from environment")

# Import tool modules to register tools
# Tools are registered via @mcp.tool() / @mcp.resource() decorators in each module
try:
    from .tools import app, pulls  # noqa: F401

    logger.info("All tool modules loaded successfully")
except ImportError as e:
    logger.error(f"Failed to import tool modules: {e}")
    raise


def main() -> None:
    """
    Run the MCP server.

    Starts the FastMCP server on the transport named by MCP_TRANSPORT
    (stdio by default).
    """
    logger.info("GitHub PR MCP Server starting...")

    transport = os.getenv("MCP_TRANSPORT", "stdio")
    if transport not in TRANSPORTS:
        raise ValueError(
            f"Invalid MCP_TRANSPORT '{transport}'. Must be one of: {', '.join(TRANSPORTS)}"
        )

    # Verify tools are registered before starting server
    try:
        tools = mcp._tool_manager.list_tools()
        tool_count = len(tools)
        logger.info(f"✅ {tool_count} tools registered: {', '.join(t.name for t in tools)}")

        if tool_count == 0:
            logger.error("❌ CRITICAL: No tools registered before server start!")
            logger.error("Check that tool modules are importing correctly")
            raise RuntimeError("Tool registration failed - cannot start server")

        logger.info(f"✅ Server ready with {tool_count} tools")
    except Exception as e:
        logger.error(f"Tool verification failed: {e}", exc_info=True)
        raise

    logger.info(f"Server name: {mcp.name}")
    logger.info(f"Listening on {transport} for MCP protocol messages")

    try:
        # Run the MCP server (blocks until terminated)
        mcp.run(transport=transport)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
