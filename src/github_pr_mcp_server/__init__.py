"""GitHub Pull Request MCP Server Package.

Provides MCP tools for listing and merging pull requests, plus the UI
resource and controller that drive them, via a FastMCP server.
"""

from mcp.server.fastmcp import FastMCP

# Create single global MCP server instance
# This MUST be at package level to avoid double-instantiation when module is run as __main__
mcp = FastMCP("GitHub PR Server")

__all__ = ["mcp"]
