"""Presentation controller for the PR list UI.

Tracks the open pull requests of one repository and a merge state per pull
request, keyed by PR number, calling the server's list_pull_requests and
merge_pull_request tools through the host.

Merge lifecycle per number::

    idle -> merging -> merged   (removed from the list after removal_delay)
                    -> error -> merging (retry)

Runs on a single asyncio event loop. Each list fetch takes a generation
number and only the newest fetch may update the list, the error or the
loading flag, so a slow stale response cannot overwrite a newer one. Merge
results are tied to the repository identity they were issued for and are
dropped if the identity changed or the controller was closed meanwhile.
"""

import asyncio
import json
import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from mcp.types import CallToolResult

from ..config.defaults import DEFAULT_MERGE_METHOD, MERGED_REMOVAL_DELAY_SECONDS
from ..utils.errors import ToolCallError
from ..utils.types import MergeState, MergeStatus, PullRequestSummary
from .host import LogLevel, UIHost
from .view import View, build_view, mount_fragment, render_html

logger = logging.getLogger(__name__)

LIST_TOOL = "list_pull_requests"
MERGE_TOOL = "merge_pull_request"


def _text_payload(result: CallToolResult, tool_name: str) -> Any:
    """Decode the JSON text block of a tool result, raising ToolCallError on tool failure."""
    text = next((block.text for block in result.content or [] if block.type == "text"), None)
    if result.isError:
        raise ToolCallError(text or f"{tool_name} failed")
    if text is None:
        raise ToolCallError(f"{tool_name} returned no text content")
    return json.loads(text)


def _identity_field(
    name: str, final: Mapping[str, Any] | None, partial: Mapping[str, Any] | None
) -> str | None:
    for inputs in (final, partial):
        if inputs and inputs.get(name):
            return inputs[name]
    return None


class PullRequestListController:
    """Drives the PR list UI for one host session.

    Args:
        host: Host capabilities (tool calls, links, logging, context)
        merge_method: Merge method passed to merge_pull_request
        removal_delay: Seconds a merged PR stays visible before removal
        on_change: Called with the new View after every state change
    """

    def __init__(
        self,
        host: UIHost,
        *,
        merge_method: str = DEFAULT_MERGE_METHOD,
        removal_delay: float = MERGED_REMOVAL_DELAY_SECONDS,
        on_change: Callable[[View], None] | None = None,
    ) -> None:
        self.host = host
        self.merge_method = merge_method
        self.removal_delay = removal_delay
        self.on_change = on_change

        self.pull_requests: list[PullRequestSummary] = []
        self.is_loading = False
        self.error: str | None = None
        self.merge_states: dict[int, MergeState] = {}

        self.tool_inputs: dict[str, Any] | None = None
        self.tool_inputs_partial: dict[str, Any] | None = None

        self._removal_timers: dict[int, asyncio.TimerHandle] = {}
        self._fetch_generation = 0
        self._identity_generation = 0
        self._closed = False
        self._requested_identity: tuple[str, str] | None = None

    # -- repository identity ------------------------------------------------

    @property
    def owner(self) -> str | None:
        return _identity_field("owner", self.tool_inputs, self.tool_inputs_partial)

    @property
    def repo(self) -> str | None:
        return _identity_field("repo", self.tool_inputs, self.tool_inputs_partial)

    @property
    def is_streaming(self) -> bool:
        """True while only partial tool inputs have arrived."""
        return self.tool_inputs is None and self.tool_inputs_partial is not None

    @property
    def has_identity(self) -> bool:
        return bool(self.owner and self.repo) and not self.is_streaming

    def set_tool_inputs_partial(self, arguments: Mapping[str, Any]) -> None:
        """Record streaming tool inputs. Never triggers a fetch."""
        self.tool_inputs_partial = dict(arguments)
        self._changed()

    async def set_tool_inputs(self, arguments: Mapping[str, Any]) -> None:
        """Record the final tool inputs and fetch when the repository identity changed."""
        self.tool_inputs = dict(arguments)

        if not self.has_identity:
            self._changed()
            return

        identity = (self.owner, self.repo)
        if identity == self._requested_identity:
            self._changed()
            return

        if self._requested_identity is not None:
            # Merge states are per repository
            self._cancel_removals()
            self.merge_states.clear()
        self._requested_identity = identity
        self._identity_generation += 1
        await self.refresh()

    # -- operations ---------------------------------------------------------

    def merge_state(self, number: int) -> MergeState:
        return self.merge_states.get(number, MergeState())

    async def refresh(self) -> None:
        """Fetch the open pull requests and replace the list wholesale."""
        if self._closed or not self.has_identity:
            return
        owner, repo = self.owner, self.repo

        self._fetch_generation += 1
        generation = self._fetch_generation
        self.is_loading = True
        self.error = None
        self._changed()

        try:
            await self._log("info", f"Fetching PRs for {owner}/{repo}")
            result = await self.host.call_server_tool(LIST_TOOL, {"owner": owner, "repo": repo})
            pull_requests = _text_payload(result, LIST_TOOL)
            if not isinstance(pull_requests, list):
                raise ToolCallError(f"{LIST_TOOL} returned an unexpected payload")
        except Exception as e:
            if self._closed or generation != self._fetch_generation:
                logger.info(f"Ignoring failure of superseded fetch for {owner}/{repo}: {e}")
                return
            message = str(e) or "Failed to fetch PRs"
            self.pull_requests = []
            self.error = message
            self.is_loading = False
            await self._log("error", message)
            self._changed()
            return

        if self._closed or generation != self._fetch_generation:
            logger.info(f"Ignoring superseded PR list for {owner}/{repo} (closed={self._closed})")
            return

        self.pull_requests = pull_requests
        self.is_loading = False
        self._prune_merge_states()
        await self._log("info", f"Loaded {len(pull_requests)} PRs")
        self._changed()

    async def merge(self, number: int) -> None:
        """Merge one pull request. No-op for drafts and while merging or merged."""
        if self._closed or not self.has_identity:
            return
        owner, repo = self.owner, self.repo
        identity_generation = self._identity_generation

        pr = self._find(number)
        if pr is None:
            logger.warning(f"PR #{number} is not in the list; ignoring merge request")
            return

        status = self.merge_state(number).status
        if pr["draft"] or status in (MergeStatus.MERGING, MergeStatus.MERGED):
            logger.debug(f"Ignoring merge request for PR #{number} (draft={pr['draft']}, status={status.value})")
            return

        self.merge_states[number] = MergeState(MergeStatus.MERGING)
        self._changed()

        try:
            await self._log("info", f"Merging PR #{number}")
            result = await self.host.call_server_tool(
                MERGE_TOOL,
                {
                    "owner": owner,
                    "repo": repo,
                    "pull_number": number,
                    "merge_method": self.merge_method,
                },
            )
            response = _text_payload(result, MERGE_TOOL)
            if not isinstance(response, dict):
                raise ToolCallError(f"{MERGE_TOOL} returned an unexpected payload")
        except Exception as e:
            if self._merge_superseded(identity_generation):
                logger.info(
                    f"Ignoring failed merge of {owner}/{repo} #{number} after teardown or repository change: {e}"
                )
                return
            message = str(e) or "Merge failed"
            self.merge_states[number] = MergeState(MergeStatus.ERROR, message)
            await self._log("error", f"Merge error: {message}")
            self._changed()
            return

        if self._merge_superseded(identity_generation):
            logger.info(
                f"Ignoring merge result for {owner}/{repo} #{number} after teardown or repository change "
                f"(success={response.get('success')})"
            )
            return

        if response.get("success"):
            self.merge_states[number] = MergeState(MergeStatus.MERGED, response.get("message"))
            self._schedule_removal(number)
            await self._log("info", f"PR #{number} merged successfully")
        else:
            message = response.get("message") or response.get("error") or "Merge failed"
            self.merge_states[number] = MergeState(MergeStatus.ERROR, message)
            await self._log("error", f"Failed to merge PR #{number}: {message}")
        self._changed()

    async def view(self, number: int) -> None:
        """Ask the host to open the pull request on GitHub."""
        pr = self._find(number)
        if pr is None:
            logger.warning(f"PR #{number} is not in the list; nothing to open")
            return
        await self.host.open_link(pr["html_url"])

    def close(self) -> None:
        """Tear down: cancel pending removals and ignore results of in-flight tool calls."""
        self._closed = True
        self._cancel_removals()
        self.on_change = None

    # -- rendering ----------------------------------------------------------

    def render(self, now: datetime | None = None) -> View:
        return build_view(
            self.owner,
            self.repo,
            is_streaming=self.is_streaming,
            is_loading=self.is_loading,
            error=self.error,
            pull_requests=self.pull_requests,
            merge_states=self.merge_states,
            host_context=getattr(self.host, "host_context", None),
            now=now,
        )

    def render_html(self, now: datetime | None = None) -> str:
        return render_html(self.render(now))

    def render_document(self, document: str, now: datetime | None = None) -> str:
        """Return the UI document with the current view mounted in its #root element."""
        return mount_fragment(document, self.render_html(now))

    # -- internals ----------------------------------------------------------

    def _find(self, number: int) -> PullRequestSummary | None:
        return next((pr for pr in self.pull_requests if pr["number"] == number), None)

    def _schedule_removal(self, number: int) -> None:
        if self._closed:
            return
        existing = self._removal_timers.pop(number, None)
        if existing is not None:
            existing.cancel()
        loop = asyncio.get_running_loop()
        self._removal_timers[number] = loop.call_later(self.removal_delay, self._remove, number)

    def _remove(self, number: int) -> None:
        self._removal_timers.pop(number, None)
        self.pull_requests = [pr for pr in self.pull_requests if pr["number"] != number]
        logger.info(f"Removed merged PR #{number} from the list")
        self._changed()

    def _merge_superseded(self, identity_generation: int) -> bool:
        return self._closed or identity_generation != self._identity_generation

    def _cancel_removals(self) -> None:
        for handle in self._removal_timers.values():
            handle.cancel()
        self._removal_timers.clear()

    def _prune_merge_states(self) -> None:
        """Forget states of PRs the latest listing no longer returns, unless a merge is in flight."""
        visible = {pr["number"] for pr in self.pull_requests}
        self.merge_states = {
            number: state
            for number, state in self.merge_states.items()
            if number in visible or state.status is MergeStatus.MERGING
        }

    async def _log(self, level: LogLevel, data: str) -> None:
        logger.log(logging.ERROR if level == "error" else logging.INFO, data)
        await self.host.send_log(level, data)

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self.render())
