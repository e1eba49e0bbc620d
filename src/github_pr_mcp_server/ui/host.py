"""Host capabilities available to the PR list UI.

The UI never talks to GitHub directly. Everything goes through the host:
calling server tools by name, opening links and emitting log entries.
"""

import logging
import webbrowser
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal, Protocol

from mcp import ClientSession
from mcp.types import CallToolResult

logger = logging.getLogger(__name__)

LogLevel = Literal["debug", "info", "notice", "warning", "error", "critical", "alert", "emergency"]

# MCP log levels mapped onto the logging module
_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "alert": logging.CRITICAL,
    "emergency": logging.CRITICAL,
}


@dataclass(frozen=True)
class SafeAreaInsets:
    """Insets (in px) the host reserves around the rendered UI."""

    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0


@dataclass(frozen=True)
class HostContext:
    """Rendering context supplied by the host."""

    safe_area_insets: SafeAreaInsets | None = None


class UIHost(Protocol):
    """Capability object the PR list controller runs against."""

    host_context: HostContext | None

    async def call_server_tool(self, name: str, arguments: dict[str, Any]) -> CallToolResult: ...

    async def open_link(self, url: str) -> None: ...

    async def send_log(self, level: LogLevel, data: str) -> None: ...


class SessionHost:
    """UIHost backed by an MCP client session connected to the PR server.

    Args:
        session: Initialized MCP client session
        host_context: Optional rendering context (safe-area insets)
        on_open_link: Callable receiving URLs to open (default: system browser)
    """

    def __init__(
        self,
        session: ClientSession,
        host_context: HostContext | None = None,
        on_open_link: Callable[[str], Any] = webbrowser.open,
    ) -> None:
        self.session = session
        self.host_context = host_context
        self._on_open_link = on_open_link

    async def call_server_tool(self, name: str, arguments: dict[str, Any]) -> CallToolResult:
        return await self.session.call_tool(name, arguments)

    async def open_link(self, url: str) -> None:
        logger.info(f"Opening {url}")
        self._on_open_link(url)

    async def send_log(self, level: LogLevel, data: str) -> None:
        logger.log(_LOG_LEVELS.get(level, logging.INFO), data)
