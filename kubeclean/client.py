"""
Kubernetes resource client backed by kubectl.

kubeclean only needs two capabilities from the cluster: listing every object
of a kind in a namespace and deleting one object by name. Both go through
kubectl so authentication, contexts and transport settings stay exactly what
the operator's kubeconfig says.
"""

from typing import Any, Dict, List, Optional

import yaml

from kubeclean.config import Config
from kubeclean.errors import ClientConstructionError, KubecleanError, KubectlError
from kubeclean.executor import CommandExecutor, get_executor
from kubeclean.resource_utils import resource_name


class KubectlClient:
    """
    List and delete namespaced resources with kubectl.

    A namespace of None means the namespace of the current kubeconfig context.
    """

    def __init__(
        self,
        context: Optional[str] = None,
        executor: Optional[CommandExecutor] = None,
        kubectl: Optional[str] = None,
        request_timeout: Optional[str] = None,
    ):
        """
        Initialize the client.

        Args:
            context: kubeconfig context override
            executor: Command executor (defaults to the shared one)
            kubectl: kubectl binary (defaults to Config.kubectl())
            request_timeout: kubectl --request-timeout value (defaults to Config)
        """
        self.context = context
        self.executor = executor or get_executor()
        self.kubectl = kubectl or Config.kubectl()
        self.request_timeout = request_timeout or Config.request_timeout()

    def _base_command(self, namespace: Optional[str]) -> List[str]:
        cmd = [self.kubectl]
        if self.context:
            cmd.extend(["--context", self.context])
        if namespace:
            cmd.extend(["--namespace", namespace])
        if self.request_timeout:
            cmd.extend(["--request-timeout", self.request_timeout])
        return cmd

    def verify(self) -> None:
        """
        Check that kubectl runs and the requested context exists.

        Raises:
            ClientConstructionError: If kubectl is missing or the context is unknown
        """
        try:
            self.executor.run([self.kubectl, "version", "--client"])
        except FileNotFoundError:
            raise ClientConstructionError(
                f"{self.kubectl} not found. Please install kubectl and ensure it's in your PATH."
            )
        except OSError as e:
            raise ClientConstructionError(f"{self.kubectl} cannot be executed: {e}") from e
        except KubectlError as e:
            raise ClientConstructionError(f"{self.kubectl} is not usable: {e}") from e

        if self.context:
            try:
                self.executor.run([self.kubectl, "config", "get-contexts", self.context])
            except KubectlError as e:
                raise ClientConstructionError(
                    f"Context {self.context} not found in kubeconfig"
                ) from e

    def list(self, kind: str, namespace: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        List every object of a kind in a namespace.

        Args:
            kind: Kubernetes kind (e.g., "ConfigMap")
            namespace: Namespace, or None for the context's namespace

        Returns:
            The objects as plain mappings

        Raises:
            KubectlError: If kubectl fails
            KubecleanError: If kubectl output cannot be parsed
        """
        resource = resource_name(kind)
        cmd = self._base_command(namespace) + ["get", resource, "--output", "yaml"]
        result = self.executor.run(cmd)
        try:
            document = yaml.safe_load(result.stdout)
        except yaml.YAMLError as e:
            raise KubecleanError(f"Could not parse kubectl output for {resource}: {e}") from e

        if not document:
            return []
        if not isinstance(document, dict):
            raise KubecleanError(f"Unexpected kubectl output for {resource}")
        return [item for item in document.get("items") or [] if isinstance(item, dict)]

    def delete(self, kind: str, namespace: Optional[str], name: str) -> None:
        """
        Delete one object by name. Deleting an object that is already gone succeeds.

        Args:
            kind: Kubernetes kind
            namespace: Namespace, or None for the context's namespace
            name: Object name

        Raises:
            KubectlError: If kubectl fails
        """
        cmd = self._base_command(namespace) + [
            "delete",
            resource_name(kind),
            name,
            "--ignore-not-found",
        ]
        self.executor.run(cmd)


def create_client(
    context: Optional[str] = None, executor: Optional[CommandExecutor] = None
) -> KubectlClient:
    """
    Build a verified client for a kubeconfig context.

    Raises:
        ClientConstructionError: If the client cannot talk to the cluster config
    """
    client = KubectlClient(context=context, executor=executor)
    client.verify()
    return client
