"""Exceptions raised by ktool for conditions that end a run."""


class KtoolError(Exception):
    """Base class for fatal ktool errors."""

    exit_code = 1


class DependencyMissingError(KtoolError):
    """A required executable could not be found on PATH."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(
            f"'{tool}' command not found. Please ensure it's installed and in your PATH."
        )


class NamespaceNotFoundError(KtoolError):
    """The target namespace does not exist in the cluster."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(
            f"Namespace '{namespace}' not found. "
            "Please verify the namespace name and your cluster context."
        )


class StagingError(KtoolError):
    """The staging directory could not be created."""


class ArchiveError(KtoolError):
    """The support bundle archive could not be written."""


class ConfigError(KtoolError):
    """The configuration file could not be parsed."""


class UpdateRequiredError(KtoolError):
    """A new major release must be installed before the command can run."""

    def __init__(self, latest: str):
        self.latest = latest
        super().__init__(
            f"Mandatory update required. A new major release ({latest}) is available. "
            "Please run 'kubectl ktool upgrade'."
        )


class UpgradeError(KtoolError):
    """The self-upgrade could not be completed."""
