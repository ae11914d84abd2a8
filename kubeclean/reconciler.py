"""
Reconciliation of declared ConfigMaps against the ConfigMaps workloads use.

The Reconciler fetches ConfigMaps and every workload kind concurrently, joins
all fetches before looking at any result, and only then computes

    candidates = filter(declared - used - exemptions)

A failed fetch aborts the run before anything is reported or deleted.
"""

import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Pattern, Set, Tuple

from kubeclean.config import Config
from kubeclean.deletion import DeletionExecutor, DeletionReport
from kubeclean.errors import InvalidFilterError
from kubeclean.fetcher import ResourceClient, ResourceFetcher
from kubeclean.output import OutputManager, get_output
from kubeclean.references import references_for
from kubeclean.resource_utils import (
    CONFIG_MAP,
    EXEMPTIONS,
    OWNERLESS_ONLY_KINDS,
    WORKLOAD_KINDS,
    object_name,
)


@dataclass
class ReconcileResult:
    """What a reconciliation found and, unless dry-running, what it deleted."""

    declared: Set[str]
    used: Set[str]
    candidates: Set[str]
    dry_run: bool
    deletion: Optional[DeletionReport] = None

    @property
    def ok(self) -> bool:
        return self.deletion is None or self.deletion.ok


def compile_filter(pattern: Optional[str]) -> Optional[Pattern[str]]:
    """
    Compile the user filter.

    Returns:
        Compiled pattern, or None if no filter was given

    Raises:
        InvalidFilterError: If the pattern is not a valid regular expression
    """
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidFilterError(pattern, str(e)) from e


def compute_candidates(
    declared: Iterable[str],
    used: Iterable[str],
    exemptions: Iterable[str] = EXEMPTIONS,
    output: Optional[OutputManager] = None,
) -> Set[str]:
    """
    Return declared names that are neither used nor exempted.

    EXEMPTIONS always apply, whatever extra names are passed.
    """
    output = output or get_output()
    exempted = EXEMPTIONS | set(exemptions)
    candidates = set()
    for name in set(declared) - set(used):
        if name in exempted:
            output.debug(f"Will not delete {name} because it's exempted.")
            continue
        candidates.add(name)
    return candidates


def apply_filter(
    names: Iterable[str],
    regex: Optional[Pattern[str]],
    inverse_filter: bool = False,
    output: Optional[OutputManager] = None,
) -> Set[str]:
    """
    Keep names matching regex, or not matching it when inverse_filter is set.

    A name matches when the pattern is found anywhere in it (re.search).
    Without a regex every name is kept.
    """
    if regex is None:
        return set(names)

    output = output or get_output()
    kept = set()
    for name in names:
        matching = regex.search(name) is not None
        if matching != inverse_filter:
            kept.add(name)
        else:
            output.info(f"Will not delete config map {name} because it's filtered-out.")
    return kept


class Reconciler:
    """
    Find, report and optionally delete unused ConfigMaps in one namespace.

    Example:
        reconciler = Reconciler(client, namespace="apps", dry_run=True)
        result = reconciler.run()
    """

    def __init__(
        self,
        client: ResourceClient,
        namespace: Optional[str] = None,
        dry_run: bool = False,
        filter_pattern: Optional[str] = None,
        inverse_filter: bool = False,
        exemptions: Optional[Iterable[str]] = None,
        output: Optional[OutputManager] = None,
        workers: Optional[int] = None,
    ):
        """
        Initialize the reconciler.

        Args:
            client: Cluster client used for listing and deleting
            namespace: Namespace to scan, or None for the context's namespace
            dry_run: If True, report candidates without deleting them
            filter_pattern: Optional regular expression restricting candidates
            inverse_filter: If True, the filter excludes matching names instead
            exemptions: Names never deleted in addition to EXEMPTIONS (defaults
                to KUBECLEAN_EXTRA_EXEMPTIONS)
            output: Output sink (defaults to the global one)
            workers: Fetch thread count (defaults to Config.fetch_workers())
        """
        self.client = client
        self.namespace = namespace
        self.dry_run = dry_run
        self.filter_pattern = filter_pattern
        self.inverse_filter = inverse_filter
        if exemptions is None:
            exemptions = Config.extra_exemptions()
        self.exemptions = EXEMPTIONS | frozenset(exemptions)
        self.output = output or get_output()
        self.workers = workers or Config.fetch_workers()
        self.fetcher = ResourceFetcher(client, self.output)

    def _fetch_one(self, kind: str) -> List[Dict[str, Any]]:
        if kind in OWNERLESS_ONLY_KINDS:
            return self.fetcher.fetch_ownerless(kind, self.namespace)
        return self.fetcher.fetch(kind, self.namespace)

    def fetch_all(self) -> Tuple[List[Dict[str, Any]], Dict[str, List[Dict[str, Any]]]]:
        """
        Fetch ConfigMaps and every workload kind concurrently.

        All fetches run to completion before any result is used; the first
        failure (in fetch order) is then re-raised.

        Returns:
            Tuple of (config maps, workloads by kind)
        """
        kinds = [CONFIG_MAP] + WORKLOAD_KINDS
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            futures = {kind: pool.submit(self._fetch_one, kind) for kind in kinds}
        results = {kind: future.result() for kind, future in futures.items()}
        self.output.debug("Done fetching resources from the Kubernetes API server.")
        config_maps = results.pop(CONFIG_MAP)
        return config_maps, results

    def used_config_maps(self, workloads: Dict[str, List[Dict[str, Any]]]) -> Set[str]:
        """Union the ConfigMap references of every fetched workload."""
        used: Set[str] = set()
        for kind, objects in workloads.items():
            used |= references_for(kind, objects, self.output)
        return used

    def run(self) -> ReconcileResult:
        """
        Run the reconciliation.

        Returns:
            ReconcileResult with the declared, used and candidate names

        Raises:
            InvalidFilterError: If the filter pattern is invalid (before any fetch)
            KubecleanError: If any fetch fails (before anything is deleted)
        """
        if self.namespace is None:
            self.output.debug("No namespace specified, will use what's in the current context.")
        regex = compile_filter(self.filter_pattern)

        with self.output.spinner("Fetching resources from the Kubernetes API server"):
            config_map_objects, workloads = self.fetch_all()

        used = self.used_config_maps(workloads)
        declared = {name for name in map(object_name, config_map_objects) if name}
        candidates = compute_candidates(declared, used, self.exemptions, self.output)
        candidates = apply_filter(candidates, regex, self.inverse_filter, self.output)

        self.output.info(
            f"There are {len(declared)} config maps, {len(used)} are used, "
            f"{len(candidates)} will be removed."
        )
        for name in sorted(candidates):
            self.output.result(name)

        result = ReconcileResult(declared, used, candidates, self.dry_run)
        if self.dry_run:
            self.output.info("Not deleting anything")
            return result

        result.deletion = DeletionExecutor(self.client, self.output).delete_all(
            CONFIG_MAP, self.namespace, candidates
        )
        if result.deletion.ok:
            self.output.success("Unused config maps deleted.")
        return result
