"""View model and HTML rendering for the PR list UI."""

import re
from dataclasses import dataclass
from datetime import datetime
from html import escape

from ..utils.formatter import format_relative_date
from ..utils.types import MergeState, MergeStatus, PullRequestSummary
from .host import HostContext

WAITING = "waiting"
ERROR = "error"
LOADING = "loading"
EMPTY = "empty"
LIST = "list"

# Element of the UI document that holds the rendered fragment
_MOUNT = re.compile(r'(<div id="root">)(.*?)(</div>\s*</body>)', re.DOTALL)


@dataclass(frozen=True)
class MergeButton:
    """
    Merge control for one pull request.

    Attributes:
        label: "Merge", "Merging...", "Merged" or "Retry"
        disabled: True while merging, once merged, and for drafts
        css_class: "merge-btn" plus the merge status
        title: Tooltip (drafts only)
        spinner: Whether to show the in-progress spinner
    """

    label: str
    disabled: bool
    css_class: str
    title: str | None = None
    spinner: bool = False


@dataclass(frozen=True)
class PullRequestRow:
    number: int
    title: str
    draft: bool
    user: str
    updated: str
    branches: str
    html_url: str
    error_message: str | None
    merge_button: MergeButton


@dataclass(frozen=True)
class View:
    """
    Everything needed to draw the PR list at one point in time.

    Attributes:
        kind: waiting, error, loading, empty or list
        container_style: Inline style honoring the host's safe-area insets
        heading: "owner/repo"
        count_label: "N open"
        refresh_label: "Refresh", or "..." while loading
        refresh_disabled: True while a list fetch is in flight
        message: Loading, error or empty-state text
        rows: One row per visible pull request, in list order
    """

    kind: str
    container_style: str = ""
    heading: str = ""
    count_label: str = ""
    refresh_label: str = "Refresh"
    refresh_disabled: bool = False
    message: str | None = None
    rows: tuple[PullRequestRow, ...] = ()


def merge_button(pr: PullRequestSummary, state: MergeState) -> MergeButton:
    merging = state.status is MergeStatus.MERGING
    merged = state.status is MergeStatus.MERGED
    failed = state.status is MergeStatus.ERROR

    if merging:
        label = "Merging..."
    elif merged:
        label = "Merged"
    elif failed:
        label = "Retry"
    else:
        label = "Merge"

    return MergeButton(
        label=label,
        disabled=merging or merged or pr["draft"],
        css_class=f"merge-btn {state.status.value}",
        title="Cannot merge draft PR" if pr["draft"] else None,
        spinner=merging,
    )


def container_style(host_context: HostContext | None) -> str:
    insets = host_context.safe_area_insets if host_context else None
    if insets is None:
        return ""
    return (
        f"padding-top: {insets.top}px; padding-right: {insets.right}px; "
        f"padding-bottom: {insets.bottom}px; padding-left: {insets.left}px"
    )


def build_row(pr: PullRequestSummary, state: MergeState, now: datetime | None = None) -> PullRequestRow:
    return PullRequestRow(
        number=pr["number"],
        title=pr["title"],
        draft=pr["draft"],
        user=pr["user"],
        updated=format_relative_date(pr["updated_at"], now) if pr.get("updated_at") else "",
        branches=f"{pr['head_ref']} -> {pr['base_ref']}",
        html_url=pr["html_url"],
        error_message=state.message if state.status is MergeStatus.ERROR else None,
        merge_button=merge_button(pr, state),
    )


def build_view(
    owner: str | None,
    repo: str | None,
    *,
    is_streaming: bool,
    is_loading: bool,
    error: str | None,
    pull_requests: list[PullRequestSummary],
    merge_states: dict[int, MergeState],
    host_context: HostContext | None = None,
    now: datetime | None = None,
) -> View:
    """Build the view for the current controller state.

    A missing or still-streaming repository identity is a waiting state, not an error.
    """
    style = container_style(host_context)

    if is_streaming or not owner or not repo:
        return View(kind=WAITING, container_style=style, message="Loading repository info...")

    if error:
        return View(kind=ERROR, container_style=style, message=error, refresh_label="Retry")

    header = {
        "container_style": style,
        "heading": f"{owner}/{repo}",
        "count_label": f"{len(pull_requests)} open",
        "refresh_label": "..." if is_loading else "Refresh",
        "refresh_disabled": is_loading,
    }

    if not pull_requests:
        if is_loading:
            return View(kind=LOADING, message="Loading pull requests...", **header)
        return View(kind=EMPTY, message="No open pull requests", **header)

    rows = tuple(
        build_row(pr, merge_states.get(pr["number"], MergeState()), now) for pr in pull_requests
    )
    return View(kind=LIST, rows=rows, **header)


def _render_row(row: PullRequestRow) -> str:
    button = row.merge_button
    parts = [
        f'<div class="pr-item" data-number="{row.number}">',
        '<div class="pr-info">',
        '<div class="pr-title-row">',
        f'<span class="pr-number">#{row.number}</span>',
        f'<span class="pr-title">{escape(row.title)}</span>',
    ]
    if row.draft:
        parts.append('<span class="pr-draft">Draft</span>')
    parts += [
        "</div>",
        '<div class="pr-meta">',
        f"<span>by {escape(row.user)}</span>",
        f"<span>{escape(row.updated)}</span>",
        f'<span class="pr-branch">{escape(row.branches)}</span>',
        "</div>",
    ]
    if row.error_message:
        parts.append(f'<div class="pr-error">{escape(row.error_message)}</div>')

    attributes = f'class="{button.css_class}" data-action="merge" data-number="{row.number}"'
    if button.title:
        attributes += f' title="{escape(button.title)}"'
    if button.disabled:
        attributes += " disabled"
    spinner = '<span class="spinner"></span>' if button.spinner else ""

    parts += [
        "</div>",
        '<div class="pr-actions">',
        f'<button class="view-btn" data-action="view" data-number="{row.number}">View</button>',
        f"<button {attributes}>{spinner}{escape(button.label)}</button>",
        "</div>",
        "</div>",
    ]
    return "".join(parts)


def render_html(view: View) -> str:
    """Render a view as an HTML fragment for the PR list document."""
    style = f' style="{escape(view.container_style)}"' if view.container_style else ""
    parts = [f'<div class="pr-container"{style}>']

    if view.kind == WAITING:
        parts.append(f'<div class="loading">{escape(view.message or "")}</div>')
    elif view.kind == ERROR:
        parts.append(f'<div class="error">{escape(view.message or "")}</div>')
        parts.append(f'<button class="refresh-btn" data-action="refresh">{view.refresh_label}</button>')
    else:
        disabled = " disabled" if view.refresh_disabled else ""
        parts += [
            '<div class="pr-header">',
            f"<h2>{escape(view.heading)}</h2>",
            '<div class="pr-header-actions">',
            f'<span class="pr-count">{escape(view.count_label)}</span>',
            f'<button class="refresh-btn" data-action="refresh"{disabled}>{view.refresh_label}</button>',
            "</div>",
            "</div>",
        ]
        if view.kind == LOADING:
            parts.append(f'<div class="loading">{escape(view.message or "")}</div>')
        elif view.kind == EMPTY:
            parts.append(
                '<div class="empty-state"><div class="empty-state-icon">PR</div>'
                f"<p>{escape(view.message or '')}</p></div>"
            )
        else:
            parts.append('<div class="pr-list">')
            parts += [_render_row(row) for row in view.rows]
            parts.append("</div>")

    parts.append("</div>")
    return "".join(parts)


def mount_fragment(document: str, fragment: str) -> str:
    """Place a rendered fragment inside the #root element of the UI document.

    Raises:
        ValueError: If the document has no #root element directly before </body>
    """
    document, count = _MOUNT.subn(
        lambda m: f"{m.group(1)}\n{fragment}\n{m.group(3)}", document, count=1
    )
    if count == 0:
        raise ValueError('UI document has no <div id="root"> mount point')
    return document
