"""
Unit tests for result values.
"""

import dataclasses

import pytest

from kubetreekit.core.result import (
    ErrorKind,
    Failed,
    ShellResult,
    Succeeded,
    fail,
    failed,
    shell_message,
    succeeded,
)


class TestShellResult:
    """Test ShellResult record."""

    def test_zero_exit_is_ok(self):
        """Exit code 0 is success even with stderr output."""
        result = ShellResult(exit_code=0, stdout="out", stderr="warning: x")
        assert result.ok is True

    def test_non_zero_exit_is_failure(self):
        """Any non-zero exit code is failure even with empty stderr."""
        assert ShellResult(exit_code=2, stdout="", stderr="").ok is False
        assert ShellResult(exit_code=-9, stdout="", stderr="").ok is False

    def test_immutable(self):
        """ShellResult cannot be modified after creation."""
        result = ShellResult(exit_code=0, stdout="", stderr="")
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.exit_code = 1


class TestResult:
    """Test Succeeded/Failed and helpers."""

    def test_succeeded(self):
        """Succeeded carries a value and the success tag."""
        result = Succeeded(42)
        assert result.value == 42
        assert succeeded(result) is True
        assert failed(result) is False

    def test_fail_builds_failed(self):
        """fail() collects messages and the error kind."""
        result = fail(ErrorKind.DOWNLOAD_FAILURE, "first", "second")
        assert isinstance(result, Failed)
        assert result.errors == ("first", "second")
        assert result.kind is ErrorKind.DOWNLOAD_FAILURE
        assert result.message == "first"
        assert failed(result) is True

    def test_failed_has_no_value(self):
        """A failure exposes no value attribute."""
        result = fail(ErrorKind.EXEC_FAILURE, "boom")
        assert not hasattr(result, "value")

    def test_failed_empty_message(self):
        """message is empty when there are no errors."""
        assert Failed(errors=()).message == ""


class TestShellMessage:
    """Test shell_message helper."""

    def test_stdout_on_success(self):
        result = Succeeded(ShellResult(0, "tree output", "noise"))
        assert shell_message(result, "fallback") == "tree output"

    def test_stderr_on_failure(self):
        result = Succeeded(ShellResult(1, "", "not found"))
        assert shell_message(result, "fallback") == "not found"

    def test_fallback_when_not_run(self):
        assert shell_message(None, "could not run") == "could not run"
        assert shell_message(fail(ErrorKind.EXEC_FAILURE, "x"), "fb") == "fb"
