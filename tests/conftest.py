"""
Pytest configuration and shared fixtures for KubeTreeKit tests.
"""

from unittest.mock import Mock

import pytest

from kubetreekit.config.parser import KubeTreeKitConfig
from kubetreekit.core.platform import PlatformResolver


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


@pytest.fixture
def host_os(monkeypatch):
    """Return a setter that fakes the host OS reported by platform.system()."""

    def set_host(system: str):
        monkeypatch.setattr(
            "kubetreekit.core.platform.host_platform.system", lambda: system
        )

    set_host("Linux")
    return set_host


@pytest.fixture
def home_dir(tmp_path):
    """Home directory inside the test's temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def resolver(host_os, home_dir):
    """Resolver for a Linux host with bridge mode off."""
    return PlatformResolver(KubeTreeKitConfig(), env={"HOME": str(home_dir)})


@pytest.fixture
def windows_resolver(host_os):
    """Resolver for a native Windows host."""
    host_os("Windows")
    return PlatformResolver(
        KubeTreeKitConfig(), env={"USERPROFILE": "C:\\Users\\me", "Path": "C:\\bin"}
    )


@pytest.fixture
def bridge_resolver(host_os, monkeypatch):
    """Resolver for a Windows host with bridge mode on; WSL home is /home/me."""
    host_os("Windows")
    wsl_run = Mock(return_value=Mock(returncode=0, stdout="/home/me\n", stderr=""))
    monkeypatch.setattr("kubetreekit.core.platform.subprocess.run", wsl_run)
    resolver = PlatformResolver(
        KubeTreeKitConfig(use_wsl=True), env={"USERPROFILE": "C:\\Users\\me"}
    )
    resolver.wsl_run = wsl_run
    return resolver
