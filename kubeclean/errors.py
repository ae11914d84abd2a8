"""
Exception types raised by kubeclean.

Fatal errors (client construction, listing, invalid filters) stop a run before
anything is deleted. MissingSpec is never fatal: the workload simply
contributes no ConfigMap references.
"""

from typing import List, Optional


class KubecleanError(Exception):
    """Base class for all kubeclean errors."""

    suggestion: Optional[str] = None


class KubectlError(KubecleanError):
    """A kubectl call against the cluster failed."""

    suggestion = "Check kubectl configuration and cluster connectivity"

    def __init__(self, cmd: List[str], returncode: int, stderr: Optional[str] = None):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        message = f"Command failed with return code {returncode}: {' '.join(cmd)}"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)


class ClientConstructionError(KubecleanError):
    """kubectl is unavailable or the requested kubeconfig context is unusable."""

    suggestion = "Ensure kubectl is installed and the kubeconfig context exists"


class InvalidFilterError(KubecleanError):
    """The user-supplied filter is not a valid regular expression."""

    suggestion = "Check the --filter regular expression syntax"

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__(f"Invalid filter pattern {pattern!r}: {reason}")


class MissingSpec(KubecleanError):
    """A workload object has no embedded pod spec (yet)."""

    def __init__(self, kind: str, name: Optional[str], path: str):
        self.kind = kind
        self.name = name
        self.path = path
        super().__init__(f"{kind} {name} has no {path}")
