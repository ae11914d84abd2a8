"""
Discovery of the ConfigMaps a pod spec consumes.

A pod spec can reference a ConfigMap in four ways, each handled by its own
pass:

- ``env[].valueFrom.configMapKeyRef`` on a container (env var)
- ``envFrom[].configMapRef`` on a container (bulk env)
- ``volumes[].configMap`` (volume)
- ``volumes[].projected.sources[].configMap`` (projected volume)

Passes never fail: sparse or malformed objects simply contribute nothing.
Init containers are scanned along with regular containers.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Set

from kubeclean.errors import MissingSpec
from kubeclean.output import OutputManager, get_output
from kubeclean.podspec import get_accessor
from kubeclean.resource_utils import object_name, object_namespace

CONTAINER_FIELDS = ("containers", "initContainers")


@dataclass(frozen=True)
class Owner:
    """Identity of the workload a pod spec belongs to, used in traces."""

    kind: str
    name: Optional[str]
    namespace: Optional[str]

    @classmethod
    def of(cls, kind: str, obj: Dict[str, Any]) -> "Owner":
        return cls(kind, object_name(obj), object_namespace(obj))

    def __str__(self) -> str:
        return f"{self.kind} {self.name} in namespace {self.namespace or ''}"


def _dicts(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _dig(mapping: Dict[str, Any], *path: str) -> Any:
    node: Any = mapping
    for field in path:
        if not isinstance(node, dict):
            return None
        node = node.get(field)
    return node


def _name_at(mapping: Dict[str, Any], *path: str) -> Optional[str]:
    name = _dig(mapping, *path, "name")
    return name if isinstance(name, str) and name else None


def _containers(pod_spec: Dict[str, Any]) -> Iterable[Dict[str, Any]]:
    for field in CONTAINER_FIELDS:
        yield from _dicts(pod_spec.get(field))


def config_maps_from_env_vars(
    owner: Owner, pod_spec: Dict[str, Any], output: Optional[OutputManager] = None
) -> Set[str]:
    """Return ConfigMaps referenced by a single env var key of any container."""
    output = output or get_output()
    found = set()
    for container in _containers(pod_spec):
        for env_var in _dicts(container.get("env")):
            config_map = _name_at(env_var, "valueFrom", "configMapKeyRef")
            if config_map:
                output.trace(
                    f"Reference to config map {config_map} found in the env var "
                    f"{env_var.get('name')} of container {container.get('name')} "
                    f"in the pod spec of {owner}."
                )
                found.add(config_map)
    return found


def config_maps_from_env_from(
    owner: Owner, pod_spec: Dict[str, Any], output: Optional[OutputManager] = None
) -> Set[str]:
    """Return ConfigMaps injected wholesale through a container's envFrom."""
    output = output or get_output()
    found = set()
    for container in _containers(pod_spec):
        for source in _dicts(container.get("envFrom")):
            config_map = _name_at(source, "configMapRef")
            if config_map:
                output.trace(
                    f"Reference to config map {config_map} found in the envFrom of "
                    f"container {container.get('name')} in the pod spec of {owner}."
                )
                found.add(config_map)
    return found


def config_maps_from_volumes(
    owner: Owner, pod_spec: Dict[str, Any], output: Optional[OutputManager] = None
) -> Set[str]:
    """Return ConfigMaps mounted directly as volumes."""
    output = output or get_output()
    found = set()
    for volume in _dicts(pod_spec.get("volumes")):
        config_map = _name_at(volume, "configMap")
        if config_map:
            output.trace(
                f"Reference to config map {config_map} found in volume "
                f"{volume.get('name')} in {owner}."
            )
            found.add(config_map)
    return found


def config_maps_from_projected_volumes(
    owner: Owner, pod_spec: Dict[str, Any], output: Optional[OutputManager] = None
) -> Set[str]:
    """Return ConfigMaps used as sources of projected volumes."""
    output = output or get_output()
    found = set()
    for volume in _dicts(pod_spec.get("volumes")):
        for projection in _dicts(_dig(volume, "projected", "sources")):
            config_map = _name_at(projection, "configMap")
            if config_map:
                output.trace(
                    f"Reference to config map {config_map} found in a projected volume "
                    f"{volume.get('name')} in {owner}."
                )
                found.add(config_map)
    return found


EXTRACTORS = (
    config_maps_from_env_vars,
    config_maps_from_env_from,
    config_maps_from_volumes,
    config_maps_from_projected_volumes,
)


def extract_config_map_references(
    owner: Owner, pod_spec: Dict[str, Any], output: Optional[OutputManager] = None
) -> Set[str]:
    """
    Return every ConfigMap a pod spec references, through any of the four passes.

    Args:
        owner: Workload the pod spec belongs to
        pod_spec: The pod spec mapping
        output: Sink for reference traces

    Returns:
        Set of ConfigMap names
    """
    references: Set[str] = set()
    for extractor in EXTRACTORS:
        references |= extractor(owner, pod_spec, output)
    return references


def references_for(
    kind: str, objects: Iterable[Dict[str, Any]], output: Optional[OutputManager] = None
) -> Set[str]:
    """
    Return the ConfigMaps referenced by any object in a workload collection.

    Objects without a pod spec contribute nothing.
    """
    output = output or get_output()
    accessor = get_accessor(kind)
    references: Set[str] = set()
    for obj in objects:
        try:
            pod_spec = accessor.pod_spec(obj)
        except MissingSpec as e:
            output.debug(f"{e}, it contributes no references.")
            continue
        references |= extract_config_map_references(Owner.of(kind, obj), pod_spec, output)
    return references
