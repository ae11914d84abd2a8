"""
Sequential, best-effort deletion of named resources.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from kubeclean.errors import KubecleanError
from kubeclean.fetcher import ResourceClient
from kubeclean.output import OutputManager, get_output


@dataclass
class DeletionReport:
    """Outcome of a deletion pass."""

    deleted: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


class DeletionExecutor:
    """
    Deletes resources one at a time.

    A failed delete is reported and the remaining names are still attempted.
    Completed deletions are never rolled back.
    """

    def __init__(self, client: ResourceClient, output: Optional[OutputManager] = None):
        self.client = client
        self.output = output or get_output()

    def delete_all(
        self, kind: str, namespace: Optional[str], names: Iterable[str]
    ) -> DeletionReport:
        """
        Delete every named resource of a kind.

        Args:
            kind: Kubernetes kind
            namespace: Namespace, or None for the context's namespace
            names: Bare names to delete

        Returns:
            DeletionReport listing deleted and failed names
        """
        report = DeletionReport()
        for name in sorted(set(names)):
            try:
                self.client.delete(kind, namespace, name)
            except (KubecleanError, OSError) as e:
                self.output.error(f"Failed to delete {kind} {name}: {e}")
                report.failed[name] = str(e)
                continue
            self.output.info(f"Deleted {kind} {name}")
            report.deleted.append(name)

        if report.failed:
            self.output.warning(
                f"Deleted {len(report.deleted)} {kind}(s), "
                f"{len(report.failed)} could not be deleted: {', '.join(sorted(report.failed))}"
            )
        return report
