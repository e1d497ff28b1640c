"""
Unit tests for host/bridge path translation.

All functions under test are pure; no subprocess is involved.
"""

import pytest

from kubetreekit.config.parser import KubeTreeKitConfig
from kubetreekit.core.paths import (
    PathTranslator,
    combine_path,
    file_uri,
    is_windows_file_path,
    to_bridge_path,
    unquoted_path,
)
from kubetreekit.core.platform import PlatformResolver


class TestToBridgePath:
    """Tests for to_bridge_path."""

    def test_drive_path(self):
        assert to_bridge_path("C:\\Users\\a\\b") == "/mnt/c/Users/a/b"

    def test_drive_letter_lower_cased(self):
        assert to_bridge_path("D:\\Temp\\x.tar.gz") == "/mnt/d/Temp/x.tar.gz"
        assert to_bridge_path("e:\\data") == "/mnt/e/data"

    def test_drive_root(self):
        assert to_bridge_path("C:\\") == "/mnt/c/"

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/home/me/.vs-kubernetes/tools", "/home/me/.vs-kubernetes/tools"),
            ("\\home\\me\\tools", "/home/me/tools"),
            ("relative\\dir", "relative/dir"),
            ("C:/already/forward", "C:/already/forward"),
        ],
    )
    def test_non_drive_paths_only_normalize_separators(self, path, expected):
        assert to_bridge_path(path) == expected

    def test_unchanged_without_bridge_mode(self):
        assert to_bridge_path("C:\\Users\\a", bridge_mode=False) == "C:\\Users\\a"
        assert to_bridge_path("a\\b", bridge_mode=False) == "a\\b"


class TestPathHelpers:
    """Tests for combine_path, unquoted_path, file_uri."""

    def test_is_windows_file_path(self):
        assert is_windows_file_path("C:\\x") is True
        assert is_windows_file_path("/c/x") is False
        assert is_windows_file_path("") is False

    def test_combine_unix(self):
        result = combine_path("/home/me", ".vs-kubernetes/tools")
        assert result == "/home/me/.vs-kubernetes/tools"

    def test_combine_windows(self):
        result = combine_path("C:\\Users\\me", ".vs-kubernetes/tools", windows=True)
        assert result == "C:\\Users\\me\\.vs-kubernetes\\tools"

    def test_unquoted_on_windows(self):
        result = unquoted_path('"C:\\Program Files\\x"', windows=True)
        assert result == "C:\\Program Files\\x"

    def test_unquoted_keeps_quotes_elsewhere(self):
        assert unquoted_path('"/opt/x"') == '"/opt/x"'

    def test_unquoted_single_quote_char(self):
        assert unquoted_path('"', windows=True) == '"'

    def test_file_uri(self):
        assert file_uri("C:\\tmp\\x.txt") == "file:///C:/tmp/x.txt"
        assert file_uri("/tmp/x.txt") == "file:///tmp/x.txt"


class TestPathTranslator:
    """Tests for the resolver-bound translator."""

    def test_bridge_mode(self, host_os):
        host_os("Windows")
        config = KubeTreeKitConfig(use_wsl=True)
        translator = PathTranslator(PlatformResolver(config, env={}))
        assert translator.to_bridge_path("C:\\Users\\a\\b") == "/mnt/c/Users/a/b"
        assert translator.combine_path("/home/me", "x/y") == "/home/me/x/y"

    def test_native_windows(self, host_os):
        host_os("Windows")
        translator = PathTranslator(PlatformResolver(KubeTreeKitConfig(), env={}))
        assert translator.to_bridge_path("C:\\Users\\a") == "C:\\Users\\a"
        assert translator.combine_path("C:\\me", "x/y") == "C:\\me\\x\\y"
        assert translator.unquoted_path('"C:\\a b"') == "C:\\a b"
