"""
Support bundle data models.

These models define the collection request and the structured outcome of
a run, so callers can inspect results without parsing log text.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ktool.modules.clients import ConnectionContext
from ktool.modules.executor import Artifact

DEFAULT_NAMESPACE = "panw"
BUNDLE_PREFIX = "konnector-support-bundle"

KONNECTOR_RELEASE = "konnector"
K8S_MANAGER_RELEASE = "k8s-connector-release"
RELEASES = (KONNECTOR_RELEASE, K8S_MANAGER_RELEASE)

WORKLOAD_KINDS = (
    "pod",
    "deployment",
    "statefulset",
    "daemonset",
    "service",
    "configmap",
    "replicaset",
    "ingress",
)


class Target(BaseModel):
    """A validated, immutable collection request."""

    model_config = ConfigDict(frozen=True)

    namespace: str = Field(
        default=DEFAULT_NAMESPACE,
        description="Namespace where the agent is installed",
        min_length=1,
        max_length=63,
        pattern="^[a-z0-9]([-a-z0-9]*[a-z0-9])?$",
    )
    kubeconfig: Optional[str] = Field(None, description="Path to a kubeconfig file", min_length=1)
    context: Optional[str] = Field(None, description="kubeconfig context name", min_length=1)

    def connection(self, kubectl_binary: str = "kubectl", helm_binary: str = "helm") -> ConnectionContext:
        """Derive the connection context shared by the kubectl and helm clients."""
        return ConnectionContext(
            kubeconfig=self.kubeconfig,
            context=self.context,
            kubectl_binary=kubectl_binary,
            helm_binary=helm_binary,
        )


@dataclass
class SectionResult:
    """Artifacts produced by one section, in collection order."""

    name: str
    artifacts: List[Artifact] = field(default_factory=list)

    @property
    def failed(self) -> List[Artifact]:
        return [a for a in self.artifacts if not a.success]


@dataclass
class BundleResult:
    """Outcome of a completed run."""

    archive_path: Path
    sections: List[SectionResult] = field(default_factory=list)

    @property
    def artifacts(self) -> List[Artifact]:
        return [a for s in self.sections for a in s.artifacts]

    @property
    def failed(self) -> List[Artifact]:
        return [a for s in self.sections for a in s.failed]
