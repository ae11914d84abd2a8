"""Pytest configuration and shared fixtures."""
import os
import sys
import threading
from typing import Any, Dict, List, Optional

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from kubeclean.errors import KubectlError
from kubeclean.output import OutputManager, Verbosity, set_output


class FakeClient:
    """In-memory stand-in for KubectlClient."""

    def __init__(
        self,
        objects: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        list_errors: Optional[List[str]] = None,
        delete_errors: Optional[List[str]] = None,
    ):
        self.objects = {kind: list(items) for kind, items in (objects or {}).items()}
        self.list_errors = set(list_errors or [])
        self.delete_errors = set(delete_errors or [])
        self.list_calls: List[tuple] = []
        self.delete_calls: List[tuple] = []
        self._lock = threading.Lock()

    def list(self, kind, namespace=None):
        with self._lock:
            self.list_calls.append((kind, namespace))
        if kind in self.list_errors:
            raise KubectlError(["kubectl", "get", kind], 1, f"cannot list {kind}")
        return list(self.objects.get(kind, []))

    def delete(self, kind, namespace, name):
        self.delete_calls.append((kind, namespace, name))
        if name in self.delete_errors:
            raise KubectlError(["kubectl", "delete", kind, name], 1, f"cannot delete {name}")
        self.objects[kind] = [
            obj for obj in self.objects.get(kind, []) if obj["metadata"]["name"] != name
        ]


def metadata(name, namespace="default", owners=None):
    meta = {"name": name, "namespace": namespace}
    if owners is not None:
        meta["ownerReferences"] = owners
    return meta


def config_map(name, namespace="default"):
    return {"kind": "ConfigMap", "metadata": metadata(name, namespace), "data": {"k": "v"}}


def pod(name, pod_spec, owners=None):
    return {"kind": "Pod", "metadata": metadata(name, owners=owners), "spec": pod_spec}


def templated(kind, name, pod_spec, owners=None):
    """Deployment, ReplicaSet, StatefulSet, DaemonSet or Job."""
    return {
        "kind": kind,
        "metadata": metadata(name, owners=owners),
        "spec": {"template": {"metadata": {"labels": {"app": name}}, "spec": pod_spec}},
    }


def cron_job(name, pod_spec):
    return {
        "kind": "CronJob",
        "metadata": metadata(name),
        "spec": {
            "schedule": "*/5 * * * *",
            "jobTemplate": {"spec": {"template": {"spec": pod_spec}}},
        },
    }


def container(name="app", env=None, env_from=None):
    result = {"name": name, "image": "nginx"}
    if env is not None:
        result["env"] = env
    if env_from is not None:
        result["envFrom"] = env_from
    return result


def env_var_ref(config_map_name, var="SETTING", key="setting"):
    return {
        "name": var,
        "valueFrom": {"configMapKeyRef": {"name": config_map_name, "key": key}},
    }


def env_from_ref(config_map_name):
    return {"configMapRef": {"name": config_map_name}}


def volume_ref(config_map_name, volume="config"):
    return {"name": volume, "configMap": {"name": config_map_name}}


def projected_ref(*config_map_names, volume="projected"):
    return {
        "name": volume,
        "projected": {"sources": [{"configMap": {"name": n}} for n in config_map_names]},
    }


OWNED_BY_REPLICA_SET = [{"apiVersion": "apps/v1", "kind": "ReplicaSet", "name": "web-abc"}]


@pytest.fixture
def output():
    """Output manager showing everything, installed as the global one."""
    manager = OutputManager(verbosity=Verbosity.TRACE)
    set_output(manager)
    yield manager
    set_output(OutputManager())
