"""
Unit tests for the kubectl tree caller.
"""

import os
from unittest.mock import Mock

import pytest
from helpers import shell_ok

from kubetreekit.core.result import ErrorKind, fail
from kubetreekit.kubectl import (
    HOST_PATH,
    WSL_PATH,
    KubeconfigPath,
    TreeRunner,
    resolve_kubeconfig,
    tree_command,
)


class TestResolveKubeconfig:
    """Test kubeconfig lookup order."""

    def test_explicit_wins(self, resolver):
        result = resolve_kubeconfig(
            resolver, explicit="/a", configured="/b", env={"KUBECONFIG": "/c"}
        )
        assert result == KubeconfigPath(path_type=HOST_PATH, host_path="/a")

    def test_configured_before_env(self, resolver):
        result = resolve_kubeconfig(resolver, configured="/b", env={"KUBECONFIG": "/c"})
        assert result.host_path == "/b"

    def test_env(self, resolver):
        result = resolve_kubeconfig(resolver, env={"KUBECONFIG": "/c"})
        assert result.host_path == "/c"

    def test_home_default(self, resolver, home_dir):
        result = resolve_kubeconfig(resolver, env={})
        assert result.host_path == f"{home_dir}/.kube/config"

    def test_windows_home_default(self, windows_resolver):
        result = resolve_kubeconfig(windows_resolver, env={})
        assert result.host_path == "C:\\Users\\me\\.kube\\config"

    def test_tilde_expanded(self, resolver):
        result = resolve_kubeconfig(resolver, explicit="~/kc", env={})
        assert result.host_path == os.path.expanduser("~/kc")

    def test_no_home(self):
        resolver = Mock()
        resolver.home.return_value = ""
        assert resolve_kubeconfig(resolver, env={}) is None

    def test_bridge_translates(self, bridge_resolver):
        result = resolve_kubeconfig(
            bridge_resolver, explicit="C:\\Users\\me\\kc", env={}
        )
        assert result == KubeconfigPath(
            path_type=WSL_PATH, wsl_path="/mnt/c/Users/me/kc"
        )

    def test_bridge_home_default(self, bridge_resolver):
        result = resolve_kubeconfig(bridge_resolver, env={})
        assert result.wsl_path == "/home/me/.kube/config"


class TestTreeCommand:
    """Test command construction."""

    def test_command(self):
        assert tree_command("Deployment", "web") == "tree -A Deployment web"

    def test_qualified_kind(self):
        command = tree_command("deployments.apps", "web-1")
        assert command == "tree -A deployments.apps web-1"

    @pytest.mark.parametrize("name", ["", "web; rm -rf /", "$(id)", "a b", "-x"])
    def test_rejects_unsafe(self, name):
        with pytest.raises(ValueError, match="Invalid resource identifier"):
            tree_command("Pod", name)


class TestTreeRunner:
    """Test TreeRunner.run."""

    def test_host_kubeconfig(self):
        orchestrator = Mock()
        orchestrator.execute.return_value = shell_ok(stdout="NAME READY")

        result = TreeRunner(orchestrator).run(
            "Pod", "x", KubeconfigPath(HOST_PATH, host_path="/kc")
        )

        assert result.value.stdout == "NAME READY"
        orchestrator.execute.assert_called_once_with(
            "kubectl tree -A Pod x", kubeconfig="/kc"
        )

    def test_wsl_kubeconfig_flag(self):
        orchestrator = Mock()
        orchestrator.execute.return_value = shell_ok()

        TreeRunner(orchestrator).run(
            "Pod", "x", KubeconfigPath(WSL_PATH, wsl_path="/mnt/c/kc")
        )

        orchestrator.execute.assert_called_once_with(
            'kubectl tree -A Pod x --kubeconfig "/mnt/c/kc"'
        )

    def test_no_kubeconfig(self):
        orchestrator = Mock()
        result = TreeRunner(orchestrator).run("Pod", "x", None)
        assert result.kind is ErrorKind.CONFIG_UNAVAILABLE
        assert "Unable to get active K8s cluster" in result.message
        orchestrator.execute.assert_not_called()

    def test_unknown_path_type(self):
        result = TreeRunner(Mock()).run("Pod", "x", KubeconfigPath("ssh"))
        assert result.kind is ErrorKind.CONFIG_UNAVAILABLE

    def test_invalid_name(self):
        orchestrator = Mock()
        result = TreeRunner(orchestrator).run(
            "Pod", "x;y", KubeconfigPath(HOST_PATH, host_path="/kc")
        )
        assert result.kind is ErrorKind.EXEC_FAILURE
        orchestrator.execute.assert_not_called()

    def test_non_zero_exit(self):
        orchestrator = Mock()
        orchestrator.execute.return_value = shell_ok(
            stderr='Error: pods "x" not found\n', exit_code=1
        )

        result = TreeRunner(orchestrator).run(
            "Pod", "x", KubeconfigPath(HOST_PATH, host_path="/kc")
        )

        assert result.kind is ErrorKind.EXEC_FAILURE
        assert result.message == 'Treeview failed: Error: pods "x" not found'

    def test_non_zero_exit_without_stderr(self):
        orchestrator = Mock()
        orchestrator.execute.return_value = shell_ok(exit_code=1)

        result = TreeRunner(orchestrator).run(
            "Pod", "x", KubeconfigPath(HOST_PATH, host_path="/kc")
        )

        assert result.message == "Treeview failed: Unable to get the resource Pod/x"

    def test_install_failure_passed_through(self):
        orchestrator = Mock()
        orchestrator.execute.return_value = fail(ErrorKind.DOWNLOAD_FAILURE, "remedy")

        result = TreeRunner(orchestrator).run(
            "Pod", "x", KubeconfigPath(HOST_PATH, host_path="/kc")
        )

        assert result.kind is ErrorKind.DOWNLOAD_FAILURE
        assert result.message == "remedy"
