"""Presentation model for ``kubectl tree`` output."""

from .registry import TreeView, ViewRegistry
from .render import render_tree_html, render_page

__all__ = ["TreeView", "ViewRegistry", "render_tree_html", "render_page"]
