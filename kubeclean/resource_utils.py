"""
Utility functions and constants for the Kubernetes kinds kubeclean reads.

Objects are the plain mappings kubectl returns; these helpers read the few
metadata fields the reconciliation needs without assuming they are present.
"""

from typing import Any, Dict, List, Optional

CONFIG_MAP = "ConfigMap"
POD = "Pod"
DEPLOYMENT = "Deployment"
REPLICA_SET = "ReplicaSet"
STATEFUL_SET = "StatefulSet"
DAEMON_SET = "DaemonSet"
CRON_JOB = "CronJob"
JOB = "Job"

# Kind -> fully qualified kubectl resource name
RESOURCE_NAMES = {
    CONFIG_MAP: "configmaps",
    POD: "pods",
    DEPLOYMENT: "deployments.apps",
    REPLICA_SET: "replicasets.apps",
    STATEFUL_SET: "statefulsets.apps",
    DAEMON_SET: "daemonsets.apps",
    CRON_JOB: "cronjobs.batch",
    JOB: "jobs.batch",
}

# Kinds carrying a pod template, in the order they are fetched
WORKLOAD_KINDS = [POD, DEPLOYMENT, REPLICA_SET, STATEFUL_SET, DAEMON_SET, CRON_JOB, JOB]

# Pods and Jobs created by a controller are already covered by their parent's template
OWNERLESS_ONLY_KINDS = [POD, JOB]

# ConfigMaps that are never deletion candidates
EXEMPTIONS = frozenset({"kube-root-ca.crt"})


def resource_name(kind: str) -> str:
    """
    Return the kubectl resource name for a kind.

    Args:
        kind: The Kubernetes kind (e.g., "Deployment")

    Returns:
        The resource name kubectl accepts (e.g., "deployments.apps")

    Raises:
        ValueError: If the kind is not one kubeclean handles
    """
    try:
        return RESOURCE_NAMES[kind]
    except KeyError:
        raise ValueError(f"Unsupported resource kind: {kind}")


def _metadata(obj: Dict[str, Any]) -> Dict[str, Any]:
    metadata = obj.get("metadata") if isinstance(obj, dict) else None
    return metadata if isinstance(metadata, dict) else {}


def object_name(obj: Dict[str, Any]) -> Optional[str]:
    """Return metadata.name, or None if absent."""
    return _metadata(obj).get("name")


def object_namespace(obj: Dict[str, Any]) -> Optional[str]:
    """Return metadata.namespace, or None if absent."""
    return _metadata(obj).get("namespace")


def owner_references(obj: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return metadata.ownerReferences, treating absent or null as empty."""
    return _metadata(obj).get("ownerReferences") or []


def is_ownerless(obj: Dict[str, Any]) -> bool:
    """Return True if no controller or other object owns this one."""
    return not owner_references(obj)
