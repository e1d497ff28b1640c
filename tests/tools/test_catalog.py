"""
Unit tests for the managed tool catalog.
"""

import pytest

from kubetreekit.config.parser import KubeTreeKitConfig, ToolOverride
from kubetreekit.core.exceptions import UnknownToolError
from kubetreekit.tools.catalog import KUBECTL_TREE, get_tool, list_tools


class TestManagedTool:
    """Test ManagedTool helpers."""

    def test_binary_name(self):
        assert KUBECTL_TREE.binary_name(windows=False) == "kubectl-tree"
        assert KUBECTL_TREE.binary_name(windows=True) == "kubectl-tree.exe"

    def test_remediation_message(self):
        message = KUBECTL_TREE.remediation_message()
        assert 'kubectl plugin "tree"' in message
        assert "kubectl krew install tree" in message
        assert "https://github.com/ahmetb/kubectl-tree" in message

    def test_pinned_release(self):
        assert KUBECTL_TREE.version == "v0.4.0"
        assert "{platform}" in KUBECTL_TREE.url_template
        assert "{version}" in KUBECTL_TREE.url_template


class TestGetTool:
    """Test catalog lookup."""

    def test_list(self):
        assert list_tools() == ["kubectl-tree"]

    def test_known_tool(self):
        assert get_tool("kubectl-tree") is KUBECTL_TREE

    def test_unknown_tool(self):
        with pytest.raises(UnknownToolError, match="kubectl-bogus"):
            get_tool("kubectl-bogus")

    def test_version_override(self):
        override = ToolOverride(version="v0.5.0")
        config = KubeTreeKitConfig(tools={"kubectl-tree": override})
        tool = get_tool("kubectl-tree", config)
        assert tool.version == "v0.5.0"
        assert tool.url_template == KUBECTL_TREE.url_template
        assert KUBECTL_TREE.version == "v0.4.0"

    def test_url_override(self):
        url = "https://mirror.example.com/{version}/tree_{platform}.tar.gz"
        config = KubeTreeKitConfig(tools={"kubectl-tree": ToolOverride(url=url)})
        assert get_tool("kubectl-tree", config).url_template == url

    def test_empty_override(self):
        config = KubeTreeKitConfig(tools={"kubectl-tree": ToolOverride()})
        assert get_tool("kubectl-tree", config) == KUBECTL_TREE
