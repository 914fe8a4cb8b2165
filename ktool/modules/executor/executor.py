"""
Command executor for ktool.

Runs argument vectors directly (never through a shell), merges stdout and
stderr into one stream, and turns every failure mode into a typed result.
"""

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List

logger = logging.getLogger("ktool.executor")

DEFAULT_TIMEOUT = 60


class QueryStatus(str, Enum):
    """Outcome of a single external query."""

    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass(frozen=True)
class QueryResult:
    """Captured result of running one command."""

    command: List[str]
    status: QueryStatus
    output: bytes
    return_code: int

    @property
    def success(self) -> bool:
        return self.status == QueryStatus.SUCCESS

    @property
    def text(self) -> str:
        return self.output.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Artifact:
    """
    One captured unit of diagnostic output.

    ``path`` is relative to the staging root. For failed queries the content
    holds whatever the command printed (or the error text) instead of data.
    """

    path: str
    title: str
    status: QueryStatus
    content: bytes
    return_code: int

    @property
    def success(self) -> bool:
        return self.status == QueryStatus.SUCCESS


class CommandExecutor:
    """Runs external queries with a bounded timeout."""

    def __init__(self, timeout: int = DEFAULT_TIMEOUT):
        self.timeout = timeout

    def run(self, command: List[str]) -> QueryResult:
        """
        Execute a command and capture combined stdout and stderr.

        Args:
            command: Full argument vector, executable first

        Returns:
            QueryResult; never raises for command failures
        """
        logger.debug(f"Running: {' '.join(command)}")
        try:
            process = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            output = e.output or b""
            message = f"Command timed out after {self.timeout} seconds\n".encode()
            return QueryResult(command, QueryStatus.TIMEOUT, output + message, -1)
        except OSError as e:
            return QueryResult(command, QueryStatus.ERROR, f"{e}\n".encode(), -1)

        output = process.stdout or b""
        if process.returncode == 0:
            return QueryResult(command, QueryStatus.SUCCESS, output, 0)
        return QueryResult(command, QueryStatus.FAILED, output, process.returncode)

    def execute(
        self,
        title: str,
        command: List[str],
        root: Path,
        path: str,
        expected_failure: bool = False,
    ) -> Artifact:
        """
        Run a query and write its output to ``root / path``.

        The output file is written once, whether the query succeeded or not.
        A failure is logged as a warning and returned in the artifact, unless
        ``expected_failure`` is set, in which case it is only logged at DEBUG.
        """
        logger.info(f"  -> Collecting {title}...")
        result = self.run(command)
        status = result.status
        content = result.output

        destination = root / path
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with open(destination, "xb") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            status = QueryStatus.ERROR
            content = content + f"\n{e}\n".encode()

        if status != QueryStatus.SUCCESS:
            message = f"Collection for '{title}' failed. See {path} for details."
            if expected_failure:
                logger.debug(message)
            else:
                logger.warning(message)

        return Artifact(
            path=path,
            title=title,
            status=status,
            content=content,
            return_code=result.return_code,
        )

