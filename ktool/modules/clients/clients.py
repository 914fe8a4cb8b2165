"""kubectl and helm argument builders."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional


class OutputFormat(str, Enum):
    """kubectl output formats used by the collectors."""

    WIDE = "wide"
    YAML = "yaml"


@dataclass(frozen=True)
class ConnectionContext:
    """
    How to reach the cluster.

    kubectl takes ``--context`` while helm takes ``--kube-context``, so each
    client derives its own global flags from the same two values.
    """

    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    kubectl_binary: str = "kubectl"
    helm_binary: str = "helm"

    def kubectl_flags(self) -> List[str]:
        flags = []
        if self.kubeconfig:
            flags += ["--kubeconfig", self.kubeconfig]
        if self.context:
            flags += ["--context", self.context]
        return flags

    def helm_flags(self) -> List[str]:
        flags = []
        if self.kubeconfig:
            flags += ["--kubeconfig", self.kubeconfig]
        if self.context:
            flags += ["--kube-context", self.context]
        return flags


class KubectlClient:
    """Builds kubectl commands against a connection context."""

    def __init__(self, connection: ConnectionContext):
        self.connection = connection

    def _base(self) -> List[str]:
        return [self.connection.kubectl_binary] + self.connection.kubectl_flags()

    def cluster_info(self) -> List[str]:
        return self._base() + ["cluster-info"]

    def version(self) -> List[str]:
        return self._base() + ["version"]

    def get(
        self,
        kind: str,
        namespace: Optional[str] = None,
        output: Optional[OutputFormat] = None,
        name: Optional[str] = None,
        selector: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> List[str]:
        """Build a ``kubectl get`` command."""
        cmd = self._base() + ["get", kind]
        if name:
            cmd.append(name)
        if namespace:
            cmd += ["-n", namespace]
        if selector:
            cmd += ["-l", selector]
        if sort_by:
            cmd.append(f"--sort-by={sort_by}")
        if output:
            cmd += ["-o", OutputFormat(output).value]
        return cmd

    def jsonpath(self, kind: str, namespace: str, expression: str, name: Optional[str] = None) -> List[str]:
        """Build a ``kubectl get`` command with a jsonpath template."""
        cmd = self._base() + ["get", kind]
        if name:
            cmd.append(name)
        return cmd + ["-n", namespace, "-o", f"jsonpath={expression}"]

    def describe(self, kind: str, name: str, namespace: str) -> List[str]:
        return self._base() + ["describe", kind, name, "-n", namespace]

    def logs(self, pod: str, container: str, namespace: str, previous: bool = False) -> List[str]:
        cmd = self._base() + ["logs", pod, "-c", container, "-n", namespace]
        if previous:
            cmd.append("--previous")
        return cmd


class HelmClient:
    """Builds helm commands against a connection context."""

    def __init__(self, connection: ConnectionContext):
        self.connection = connection

    def _base(self) -> List[str]:
        return [self.connection.helm_binary] + self.connection.helm_flags()

    def status(self, release: str, namespace: str) -> List[str]:
        return self._base() + ["status", release, "-n", namespace]

    def values(self, release: str, namespace: str, all_values: bool = True) -> List[str]:
        cmd = self._base() + ["get", "values", release, "-n", namespace]
        if all_values:
            cmd.append("-a")
        return cmd


def instance_selector(releases: Iterable[str]) -> str:
    """Label selector matching resources owned by any of the given releases."""
    return f"app.kubernetes.io/instance in ({', '.join(releases)})"
