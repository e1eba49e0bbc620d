"""PR list UI: controller, host capabilities and view rendering."""

from .controller import PullRequestListController
from .host import HostContext, SafeAreaInsets, SessionHost, UIHost
from .view import View, build_view, mount_fragment, render_html

__all__ = [
    "PullRequestListController",
    "HostContext",
    "SafeAreaInsets",
    "SessionHost",
    "UIHost",
    "View",
    "build_view",
    "mount_fragment",
    "render_html",
]
