"""Resource name enumeration via kubectl jsonpath queries."""

import logging
from typing import List

from ktool.modules.clients import KubectlClient
from ktool.modules.executor import CommandExecutor

logger = logging.getLogger("ktool.enumerator")

NAMES_EXPRESSION = "{.items[*].metadata.name}"
CONTAINERS_EXPRESSION = "{.spec.containers[*].name} {.spec.initContainers[*].name}"


class ResourceEnumerator:
    """Lists resources of a kind in a namespace."""

    def __init__(self, executor: CommandExecutor, kubectl: KubectlClient):
        self.executor = executor
        self.kubectl = kubectl

    def _names(self, command: List[str], what: str) -> List[str]:
        result = self.executor.run(command)
        if not result.success:
            # Absence and failure are treated the same by callers
            logger.debug(f"Enumeration of {what} returned nothing usable: {result.text.strip()}")
            return []
        return result.text.split()

    def list_names(self, kind: str, namespace: str) -> List[str]:
        """
        List instance names of a resource kind.

        Args:
            kind: Resource kind, e.g. "pod" or "deployment"
            namespace: Namespace to search

        Returns:
            Names in the order kubectl reports them; empty if none or on error
        """
        return self._names(self.kubectl.jsonpath(kind, namespace, NAMES_EXPRESSION), f"{kind} in {namespace}")

    def list_containers(self, pod: str, namespace: str) -> List[str]:
        """List regular then init container names of a pod."""
        command = self.kubectl.jsonpath("pod", namespace, CONTAINERS_EXPRESSION, name=pod)
        return self._names(command, f"containers of pod {pod}")
