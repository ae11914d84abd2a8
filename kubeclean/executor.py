"""
Command execution abstraction for kubectl calls.

Every subprocess kubeclean starts goes through CommandExecutor, which keeps
error handling and logging in one place and gives tests a single seam to mock.
"""

import subprocess
import logging
from typing import List, Optional

from kubeclean.errors import KubectlError
from kubeclean.output import OutputManager, get_output

logger = logging.getLogger(__name__)


class CommandExecutor:
    """
    Runs commands with captured text output.

    Safe to call from several threads at once: it holds no per-call state.
    """

    def __init__(self, output: Optional[OutputManager] = None):
        """
        Initialize the command executor.

        Args:
            output: Output sink for command traces (defaults to the global one)
        """
        self._output = output

    @property
    def output(self) -> OutputManager:
        return self._output or get_output()

    def run(self, cmd: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """
        Execute a command and return the result.

        Args:
            cmd: Command to execute as a list of strings
            check: If True, raise KubectlError on a non-zero exit code

        Returns:
            CompletedProcess instance with stdout, stderr, and returncode

        Raises:
            KubectlError: If check=True and the command fails
            FileNotFoundError: If the command executable is not found
            OSError: If the command executable cannot be run
        """
        command = " ".join(cmd)
        logger.debug(f"Executing command: {command}")
        self.output.debug(f"Executing: {command}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError:
            logger.debug(f"Command not found: {cmd[0]}")
            raise

        logger.debug(f"Command completed with return code: {result.returncode}")
        if check and result.returncode != 0:
            logger.debug(f"Command failed: {command}")
            if result.stderr:
                logger.debug(f"Stderr: {result.stderr}")
            raise KubectlError(cmd, result.returncode, result.stderr)
        return result


# Default executor instance for convenience
_default_executor = CommandExecutor()


def get_executor() -> CommandExecutor:
    """
    Get the default command executor instance.

    Returns:
        Default CommandExecutor instance
    """
    return _default_executor
