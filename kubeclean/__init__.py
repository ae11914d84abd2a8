"""
Kubeclean - Find and remove Kubernetes ConfigMaps that no workload references.
"""

__version__ = "0.2.0"

from kubeclean.client import KubectlClient, create_client
from kubeclean.config import Config, config
from kubeclean.deletion import DeletionExecutor, DeletionReport
from kubeclean.errors import (
    ClientConstructionError,
    InvalidFilterError,
    KubecleanError,
    KubectlError,
    MissingSpec,
)
from kubeclean.executor import CommandExecutor, get_executor
from kubeclean.fetcher import ResourceFetcher
from kubeclean.output import OutputManager, Verbosity, get_output, set_output
from kubeclean.podspec import get_accessor
from kubeclean.reconciler import ReconcileResult, Reconciler
from kubeclean.references import extract_config_map_references

__all__ = [
    "KubectlClient",
    "create_client",
    "Config",
    "config",
    "DeletionExecutor",
    "DeletionReport",
    "ClientConstructionError",
    "InvalidFilterError",
    "KubecleanError",
    "KubectlError",
    "MissingSpec",
    "CommandExecutor",
    "get_executor",
    "ResourceFetcher",
    "OutputManager",
    "Verbosity",
    "get_output",
    "set_output",
    "get_accessor",
    "ReconcileResult",
    "Reconciler",
    "extract_config_map_references",
]
