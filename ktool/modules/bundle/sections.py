"""
Section collectors.

Each section writes its artifacts under a fixed directory of the staging
root. Sections run one after another and within a section every query runs
in enumeration order.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from ktool.modules.clients import HelmClient, KubectlClient, OutputFormat, instance_selector
from ktool.modules.enumerator import ResourceEnumerator
from ktool.modules.executor import Artifact, CommandExecutor

from .models import RELEASES, WORKLOAD_KINDS, SectionResult

logger = logging.getLogger("ktool.bundle.sections")


@dataclass
class SectionContext:
    """Everything a section needs to run against one namespace."""

    executor: CommandExecutor
    enumerator: ResourceEnumerator
    kubectl: KubectlClient
    helm: HelmClient
    namespace: str
    root: Path


class Section:
    """Base class for a collection section."""

    name = ""
    title = ""
    directory = ""

    def collect(self, ctx: SectionContext) -> SectionResult:
        (ctx.root / self.directory).mkdir(parents=True, exist_ok=True)
        return SectionResult(name=self.name, artifacts=self.artifacts(ctx))

    def artifacts(self, ctx: SectionContext) -> List[Artifact]:
        raise NotImplementedError

    def _collect(
        self,
        ctx: SectionContext,
        title: str,
        command: List[str],
        filename: str,
        expected_failure: bool = False,
    ) -> Artifact:
        return ctx.executor.execute(
            title, command, ctx.root, f"{self.directory}/{filename}", expected_failure=expected_failure
        )


class ClusterInfoSection(Section):
    name = "cluster-info"
    title = "Cluster Information"
    directory = "cluster-info"

    def artifacts(self, ctx: SectionContext) -> List[Artifact]:
        return [
            self._collect(ctx, "Cluster info", ctx.kubectl.cluster_info(), "info.txt"),
            self._collect(ctx, "Kubernetes version", ctx.kubectl.version(), "version.txt"),
            self._collect(ctx, "Node details", ctx.kubectl.get("nodes", output=OutputFormat.WIDE), "nodes.txt"),
        ]


class NamespaceInfoSection(Section):
    name = "namespace-info"
    title = "Namespace Information"
    directory = "namespace-info"

    def artifacts(self, ctx: SectionContext) -> List[Artifact]:
        command = ctx.kubectl.get("events", namespace=ctx.namespace, sort_by=".lastTimestamp")
        return [self._collect(ctx, "Events in namespace", command, "events.txt")]


class ReleaseInfoSection(Section):
    name = "helm"
    title = "Helm Release Information"
    directory = "helm"

    def artifacts(self, ctx: SectionContext) -> List[Artifact]:
        collected = []
        for release in RELEASES:
            collected.append(self._collect(
                ctx,
                f"Helm status for {release}",
                ctx.helm.status(release, ctx.namespace),
                f"status-{release}.txt",
            ))
            collected.append(self._collect(
                ctx,
                f"Helm values for {release}",
                ctx.helm.values(release, ctx.namespace, all_values=True),
                f"values-{release}.yaml",
            ))
        return collected


class WorkloadSection(Section):
    name = "workloads"
    title = "Workload Statuses"
    directory = "workloads"

    def artifacts(self, ctx: SectionContext) -> List[Artifact]:
        collected = [
            self._collect(
                ctx,
                "All workloads (wide)",
                ctx.kubectl.get("all", namespace=ctx.namespace, output=OutputFormat.WIDE),
                "get-all-wide.txt",
            ),
            self._collect(
                ctx,
                "All workloads (yaml)",
                ctx.kubectl.get("all", namespace=ctx.namespace, output=OutputFormat.YAML),
                "get-all.yaml",
            ),
        ]

        logger.info("  -> Describing all workloads...")
        for kind in WORKLOAD_KINDS:
            for name in ctx.enumerator.list_names(kind, ctx.namespace):
                collected.append(self._collect(
                    ctx,
                    f"{kind}/{name}",
                    ctx.kubectl.describe(kind, name, ctx.namespace),
                    f"{kind}/{name}.describe.txt",
                ))
        return collected


class PodLogsSection(Section):
    name = "logs"
    title = "Pod Logs"
    directory = "logs"

    def artifacts(self, ctx: SectionContext) -> List[Artifact]:
        collected = []
        for pod in ctx.enumerator.list_names("pod", ctx.namespace):
            for container in ctx.enumerator.list_containers(pod, ctx.namespace):
                collected.append(self._collect(
                    ctx,
                    f"Logs for {pod}/{container}",
                    ctx.kubectl.logs(pod, container, ctx.namespace),
                    f"{pod}_{container}.log",
                ))
                # Containers that never restarted have no previous logs
                collected.append(self._collect(
                    ctx,
                    f"Previous logs for {pod}/{container}",
                    ctx.kubectl.logs(pod, container, ctx.namespace, previous=True),
                    f"{pod}_{container}.previous.log",
                    expected_failure=True,
                ))
        return collected


class OperatorConfigSection(Section):
    name = "operator"
    title = "Operator Configurations"
    directory = "operator"

    def artifacts(self, ctx: SectionContext) -> List[Artifact]:
        selector = instance_selector(RELEASES)
        return [
            self._collect(
                ctx,
                "Validating Webhooks",
                ctx.kubectl.get("validatingwebhookconfigurations", selector=selector, output=OutputFormat.YAML),
                "validating-webhooks.yaml",
            ),
            self._collect(
                ctx,
                "Mutating Webhooks",
                ctx.kubectl.get("mutatingwebhookconfigurations", selector=selector, output=OutputFormat.YAML),
                "mutating-webhooks.yaml",
            ),
        ]


SECTIONS = (
    ClusterInfoSection(),
    NamespaceInfoSection(),
    ReleaseInfoSection(),
    WorkloadSection(),
    PodLogsSection(),
    OperatorConfigSection(),
)
