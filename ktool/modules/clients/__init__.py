"""
Clients Module - Black Box Interface

Purpose: Build kubectl and helm invocations for one connection context
Interface: ConnectionContext, KubectlClient, HelmClient, OutputFormat
Hidden: flag spelling differences between kubectl and helm

Clients only produce argument vectors. Running them is the executor's job.
"""

from .clients import ConnectionContext, HelmClient, KubectlClient, OutputFormat, instance_selector

__all__ = ["ConnectionContext", "HelmClient", "KubectlClient", "OutputFormat", "instance_selector"]
