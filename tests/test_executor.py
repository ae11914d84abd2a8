"""Unit tests for CommandExecutor."""

import subprocess
from unittest.mock import patch

import pytest

from kubeclean.errors import KubectlError
from kubeclean.executor import CommandExecutor, get_executor


class TestCommandExecutor:
    """Test cases for CommandExecutor."""

    @patch("kubeclean.executor.subprocess.run")
    def test_run_success(self, mock_run, output):
        """Test that output is captured as text."""
        mock_run.return_value = subprocess.CompletedProcess(["kubectl"], 0, "ok", "")
        result = CommandExecutor(output).run(["kubectl", "get", "pods"])
        assert result.stdout == "ok"
        mock_run.assert_called_once_with(
            ["kubectl", "get", "pods"], capture_output=True, text=True, check=False
        )

    @patch("kubeclean.executor.subprocess.run")
    def test_run_traces_command(self, mock_run, output, capsys):
        """Test that the command line is shown at debug verbosity."""
        mock_run.return_value = subprocess.CompletedProcess(["kubectl"], 0, "", "")
        CommandExecutor(output).run(["kubectl", "get", "pods"])
        assert "Executing: kubectl get pods" in capsys.readouterr().err

    @patch("kubeclean.executor.subprocess.run")
    def test_run_failure(self, mock_run, output):
        """Test that a non-zero exit raises KubectlError with stderr."""
        mock_run.return_value = subprocess.CompletedProcess(
            ["kubectl"], 1, "", "Error from server (Forbidden)\n"
        )
        with pytest.raises(KubectlError) as exc_info:
            CommandExecutor(output).run(["kubectl", "get", "pods"])
        assert exc_info.value.returncode == 1
        assert exc_info.value.stderr == "Error from server (Forbidden)"
        assert "Forbidden" in str(exc_info.value)

    @patch("kubeclean.executor.subprocess.run")
    def test_run_failure_unchecked(self, mock_run, output):
        """Test that check=False returns the failed result."""
        mock_run.return_value = subprocess.CompletedProcess(["kubectl"], 2, "", "boom")
        result = CommandExecutor(output).run(["kubectl"], check=False)
        assert result.returncode == 2

    @patch("kubeclean.executor.subprocess.run")
    def test_command_not_found(self, mock_run, output):
        """Test that a missing executable propagates FileNotFoundError."""
        mock_run.side_effect = FileNotFoundError()
        with pytest.raises(FileNotFoundError):
            CommandExecutor(output).run(["kubectl", "version"])

    def test_default_executor(self):
        """Test that the shared executor is reused."""
        assert get_executor() is get_executor()
        assert isinstance(get_executor(), CommandExecutor)
