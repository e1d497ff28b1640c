"""
Unit tests for the install directory layout.
"""

from unittest.mock import Mock

from kubetreekit.core.directory import (
    ensure_directory,
    get_install_folder,
    get_tools_dir,
)
from kubetreekit.core.result import ErrorKind


class TestToolsDir:
    """Test tools directory resolution."""

    def test_default_namespace(self, resolver, home_dir):
        result = get_tools_dir(resolver)
        assert result.succeeded
        assert result.value == f"{home_dir}/.vs-kubernetes/tools"

    def test_custom_namespace(self, resolver, home_dir):
        result = get_tools_dir(resolver, namespace="acme")
        assert result.value == f"{home_dir}/.acme/tools"

    def test_windows_separators(self, windows_resolver):
        result = get_tools_dir(windows_resolver)
        assert result.value == "C:\\Users\\me\\.vs-kubernetes\\tools"

    def test_bridge_uses_wsl_home(self, bridge_resolver):
        result = get_tools_dir(bridge_resolver)
        assert result.value == "/home/me/.vs-kubernetes/tools"

    def test_missing_home(self):
        """An undeterminable home is a configuration failure, not an exception."""
        resolver = Mock()
        resolver.home.return_value = ""
        result = get_tools_dir(resolver)
        assert not result.succeeded
        assert result.kind is ErrorKind.CONFIG_UNAVAILABLE


class TestInstallFolder:
    """Test per-tool install folder."""

    def test_stable_across_calls(self, resolver, home_dir):
        """The folder depends on the tool name only."""
        first = get_install_folder(resolver, "kubectl-tree")
        second = get_install_folder(resolver, "kubectl-tree")
        assert first.value == second.value
        assert first.value == f"{home_dir}/.vs-kubernetes/tools/kubectl-tree"

    def test_propagates_failure(self):
        resolver = Mock()
        resolver.home.return_value = ""
        result = get_install_folder(resolver, "kubectl-tree")
        assert result.kind is ErrorKind.CONFIG_UNAVAILABLE


class TestEnsureDirectory:
    """Test directory creation."""

    def test_creates_parents(self, tmp_path):
        target = tmp_path / "a" / "b" / "c"
        result = ensure_directory(str(target))
        assert result.succeeded
        assert target.is_dir()

    def test_existing_directory_ok(self, tmp_path):
        assert ensure_directory(str(tmp_path)).succeeded

    def test_file_in_the_way(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        result = ensure_directory(str(blocker / "sub"))
        assert not result.succeeded
        assert result.kind is ErrorKind.CONFIG_UNAVAILABLE
