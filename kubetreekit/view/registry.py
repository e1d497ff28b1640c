"""
Registry of open tree views.

Each view shows the tree of one Kubernetes object (``<kind>/<name>``) and
knows how to refresh itself. The registry tracks views by resource and
which one is active; callers own the registry and pass it where needed.
"""

import logging
from typing import Callable, Dict, List, Optional

from kubetreekit.core.result import (
    ErrorKind,
    Result,
    ShellResult,
    Succeeded,
    fail,
    failed,
)
from kubetreekit.view.render import render_tree_html

logger = logging.getLogger(__name__)

RefreshFn = Callable[[], Result[ShellResult]]


class TreeView:
    """
    Tree output of one resource plus the means to refresh it.

    Attributes:
        resource: Resource identity, e.g. 'Deployment/web'
        content: Latest ``kubectl tree`` output
        refresh: Callable re-running the command for this resource
    """

    def __init__(self, resource: str, content: str, refresh: RefreshFn):
        self.resource = resource
        self.content = content
        self.refresh = refresh

    @property
    def title(self) -> str:
        return f"Kubernetes treeview {self.resource}"

    def html(self) -> str:
        return render_tree_html(self.content)

    def do_refresh(self) -> Result[str]:
        """
        Re-run the command and replace the content on success.

        Returns:
            Succeeded with the new content, or Failed leaving content untouched
        """
        result = self.refresh()
        if failed(result):
            return fail(
                result.kind or ErrorKind.EXEC_FAILURE,
                f"Error refreshing: {result.message}",
            )
        shell_result = result.value
        if not shell_result.ok:
            return fail(
                ErrorKind.EXEC_FAILURE, f"Error refreshing: {shell_result.stderr}"
            )

        self.content = shell_result.stdout
        return Succeeded(self.content)


class ViewRegistry:
    """Open TreeViews keyed by resource identity, with one optional active view."""

    def __init__(self):
        self._views: Dict[str, TreeView] = {}
        self._active: Optional[str] = None

    def __len__(self) -> int:
        return len(self._views)

    def __contains__(self, resource: str) -> bool:
        return resource in self._views

    def get(self, resource: str) -> Optional[TreeView]:
        return self._views.get(resource)

    def resources(self) -> List[str]:
        return list(self._views)

    def create_or_show(
        self, content: str, resource: str, refresh: RefreshFn
    ) -> TreeView:
        """
        Show ``resource``, reusing its view if one is already open.

        The shown view becomes the active one.
        """
        view = self._views.get(resource)
        if view is None:
            view = TreeView(resource, content, refresh)
            self._views[resource] = view
            logger.debug(f"Opened view {resource}")
        else:
            view.content = content
            view.refresh = refresh
        self._active = resource
        return view

    def active(self) -> Optional[TreeView]:
        if self._active is None:
            return None
        return self._views.get(self._active)

    def set_active(self, resource: str, active: bool) -> None:
        """Mark ``resource`` active, or clear it if it is the active one."""
        if active:
            if resource not in self._views:
                raise KeyError(resource)
            self._active = resource
        elif self._active == resource:
            self._active = None

    def refresh_active(self) -> Optional[Result[str]]:
        """Refresh the active view; None when no view is active."""
        view = self.active()
        if view is None:
            return None
        return view.do_refresh()

    def evict(self, resource: str) -> Optional[TreeView]:
        """Remove a view (e.g. when it was closed) and return it."""
        view = self._views.pop(resource, None)
        if self._active == resource:
            self._active = None
        return view
