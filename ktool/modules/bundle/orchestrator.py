"""
Support bundle orchestration.

Runs the fixed pipeline:

    DependencyCheck -> NamespaceValidate -> StagingCreate
        -> sections 1..6 -> Archive -> Cleanup

Anything fatal before the archive is written ends the run with a
KtoolError. The staging directory is removed on every exit path,
including SIGINT and SIGTERM.
"""

import logging
import shutil
import signal
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

from ktool import RELEASE
from ktool.config import CollectorConfig
from ktool.errors import DependencyMissingError, NamespaceNotFoundError
from ktool.logging_config import set_bundle_name
from ktool.modules.clients import HelmClient, KubectlClient
from ktool.modules.enumerator import ResourceEnumerator
from ktool.modules.executor import CommandExecutor

from .assembler import archive
from .models import BundleResult, Target
from .sections import SECTIONS, Section, SectionContext
from .staging import StagingRoot, bundle_name

logger = logging.getLogger("ktool.bundle")


def _raise_terminated(signum, frame):
    raise SystemExit(128 + signum)


@contextmanager
def terminate_on_sigterm() -> Iterator[None]:
    """Turn SIGTERM into SystemExit so context managers get to clean up."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGTERM, _raise_terminated)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


class SupportBundleCollector:
    """Collects a support bundle for one target namespace."""

    def __init__(
        self,
        target: Target,
        config: CollectorConfig,
        output_dir: Optional[Path] = None,
        release: str = RELEASE,
        clock: Callable[[], datetime] = datetime.now,
        sections: Sequence[Section] = SECTIONS,
    ):
        self.target = target
        self.config = config
        self.output_dir = Path(output_dir) if output_dir else Path.cwd()
        self.release = release
        self.clock = clock
        self.sections = sections

        connection = target.connection(config.kubectl_binary, config.helm_binary)
        self.executor = CommandExecutor(timeout=config.command_timeout)
        self.kubectl = KubectlClient(connection)
        self.helm = HelmClient(connection)
        self.enumerator = ResourceEnumerator(self.executor, self.kubectl)

    def check_dependencies(self) -> None:
        """Fail before any cluster access if kubectl or helm is missing."""
        for tool in (self.config.kubectl_binary, self.config.helm_binary):
            if shutil.which(tool) is None:
                raise DependencyMissingError(tool)

    def validate_namespace(self) -> None:
        namespace = self.target.namespace
        logger.info(f"--> Verifying namespace '{namespace}' exists...")
        result = self.executor.run(self.kubectl.get("namespace", name=namespace))
        if not result.success:
            logger.debug(f"Namespace lookup output: {result.text.strip()}")
            raise NamespaceNotFoundError(namespace)

    def collect(self) -> BundleResult:
        """
        Run a full collection.

        Returns:
            BundleResult with the archive path and every artifact attempted

        Raises:
            KtoolError: on missing tools, missing namespace, staging or
                archive failures
        """
        self.check_dependencies()
        self.validate_namespace()

        namespace = self.target.namespace
        name = bundle_name(namespace, self.release, self.clock())
        staging = StagingRoot(self.output_dir / name)

        logger.info(f"Starting support bundle collection for namespace: {namespace}")
        logger.info(f"Output will be saved to {name}.tar.gz")

        set_bundle_name(name)
        try:
            with terminate_on_sigterm(), staging as root:
                ctx = SectionContext(
                    executor=self.executor,
                    enumerator=self.enumerator,
                    kubectl=self.kubectl,
                    helm=self.helm,
                    namespace=namespace,
                    root=root,
                )
                results = []
                total = len(self.sections)
                for index, section in enumerate(self.sections, start=1):
                    logger.info(f"[{index}/{total}] Collecting {section.title}...")
                    results.append(section.collect(ctx))

                archive_path = archive(root)
        finally:
            set_bundle_name(None)

        result = BundleResult(archive_path=archive_path, sections=results)
        if result.failed:
            logger.info(f"{len(result.failed)} of {len(result.artifacts)} artifacts captured errors")
        logger.info(f"Support bundle created successfully: {archive_path.name}")
        return result
