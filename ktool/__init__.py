"""
ktool - Konnector support tooling

A kubectl plugin for collecting diagnostic support bundles from a
cluster running the Konnector agent, and for keeping itself up to date.

Architecture:
- Each module is self-contained with clear interfaces
- Modules talk to the cluster only through argument vectors
- No module knows the internals of another

Modules:
- executor: Runs a single external query and captures its output
- clients: kubectl and helm argument builders for a connection context
- enumerator: Resource name discovery
- bundle: Section collectors, staging, archival and orchestration
- update: Release checks and self-upgrade
"""

__version__ = "1.0.0"

RELEASE = f"ktool-v{__version__}"
