"""
Access to the pod spec embedded in each workload kind.

The pod spec sits at a different depth for each kind:

- Pod: ``spec``
- Deployment, ReplicaSet, StatefulSet, DaemonSet, Job: ``spec.template.spec``
- CronJob: ``spec.jobTemplate.spec.template.spec``

Accessors raise MissingSpec instead of assuming every step exists, since an
object that is still being created may legitimately have no spec.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

from kubeclean.errors import MissingSpec
from kubeclean.resource_utils import (
    CRON_JOB,
    DAEMON_SET,
    DEPLOYMENT,
    JOB,
    POD,
    REPLICA_SET,
    STATEFUL_SET,
    object_name,
)


class PodSpecAccessor(ABC):
    """Knows where one workload kind keeps its pod spec."""

    @property
    @abstractmethod
    def kind(self) -> str:
        """Return the workload kind this accessor handles"""
        pass

    @property
    @abstractmethod
    def path(self) -> Tuple[str, ...]:
        """Return the field path from the object root to the pod spec"""
        pass

    def pod_spec(self, obj: Dict[str, Any]) -> Dict[str, Any]:
        """
        Return the pod spec embedded in obj.

        Args:
            obj: Workload object as returned by the cluster

        Returns:
            The pod spec mapping

        Raises:
            MissingSpec: If any step of the path is absent or null
        """
        node: Any = obj
        for depth, field in enumerate(self.path):
            node = node.get(field) if isinstance(node, dict) else None
            if not isinstance(node, dict):
                missing = ".".join(self.path[: depth + 1])
                raise MissingSpec(self.kind, object_name(obj), missing)
        return node


class PodAccessor(PodSpecAccessor):
    """A bare Pod is its own pod spec."""

    kind = POD
    path = ("spec",)


class PodTemplateAccessor(PodSpecAccessor):
    """Controllers whose spec carries a pod template directly."""

    path = ("spec", "template", "spec")

    def __init__(self, kind: str):
        self._kind = kind

    @property
    def kind(self) -> str:
        return self._kind


class CronJobAccessor(PodSpecAccessor):
    """CronJobs nest the pod template inside a job template."""

    kind = CRON_JOB
    path = ("spec", "jobTemplate", "spec", "template", "spec")


ACCESSORS: Dict[str, PodSpecAccessor] = {
    POD: PodAccessor(),
    DEPLOYMENT: PodTemplateAccessor(DEPLOYMENT),
    REPLICA_SET: PodTemplateAccessor(REPLICA_SET),
    STATEFUL_SET: PodTemplateAccessor(STATEFUL_SET),
    DAEMON_SET: PodTemplateAccessor(DAEMON_SET),
    JOB: PodTemplateAccessor(JOB),
    CRON_JOB: CronJobAccessor(),
}


def get_accessor(kind: str) -> PodSpecAccessor:
    """
    Return the pod spec accessor for a workload kind.

    Raises:
        ValueError: If the kind carries no pod template
    """
    try:
        return ACCESSORS[kind]
    except KeyError:
        raise ValueError(f"{kind} is not a workload kind")
