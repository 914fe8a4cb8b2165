"""
Executor Module - Black Box Interface

Purpose: Run a single external query (kubectl, helm) and capture its output
Interface: CommandExecutor.run(), CommandExecutor.execute() -> Artifact
Hidden: subprocess handling, timeouts, output sinks

The executor never raises to its caller. Failures come back as results
with success=False and the captured output (or error text) as content.
"""

from .executor import Artifact, CommandExecutor, QueryResult, QueryStatus

__all__ = ["Artifact", "CommandExecutor", "QueryResult", "QueryStatus"]
