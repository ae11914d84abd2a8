"""
Retrieval of every object of a kind in a namespace.
"""

from typing import Any, Dict, List, Optional, Protocol

from kubeclean.output import OutputManager, get_output
from kubeclean.resource_utils import is_ownerless, object_name, object_namespace


class ResourceClient(Protocol):
    """What kubeclean needs from a cluster client."""

    def list(self, kind: str, namespace: Optional[str] = None) -> List[Dict[str, Any]]:
        ...

    def delete(self, kind: str, namespace: Optional[str], name: str) -> None:
        ...


class ResourceFetcher:
    """
    Fetch resources through a client, tracing what was found.

    Client errors are not caught here: a failed list aborts the reconciliation.
    """

    def __init__(self, client: ResourceClient, output: Optional[OutputManager] = None):
        self.client = client
        self.output = output or get_output()

    def fetch(self, kind: str, namespace: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Return every object of a kind in the namespace.

        Args:
            kind: Kubernetes kind
            namespace: Namespace, or None for the context's namespace

        Returns:
            List of objects (possibly empty)
        """
        objects = self.client.list(kind, namespace)
        if objects:
            scope = object_namespace(objects[0]) or namespace or "of the current context"
            plural = "s" if len(objects) > 1 else ""
            self.output.debug(f"Got {len(objects)} {kind}{plural} from the namespace {scope}")
        return objects

    def fetch_ownerless(self, kind: str, namespace: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Return only the objects of a kind that have no owner references.

        Controller-managed Pods and Jobs are skipped since their templates are
        read from the owning Deployment, CronJob, etc.
        """
        ownerless = []
        for obj in self.fetch(kind, namespace):
            if is_ownerless(obj):
                self.output.debug(f"Found {kind} {object_name(obj)} without an owner.")
                ownerless.append(obj)
        return ownerless
