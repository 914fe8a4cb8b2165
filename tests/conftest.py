"""
Shared pytest fixtures for ktool tests.

This module provides common fixtures including:
- CommandMocker: Mock kubectl/helm subprocess calls with canned responses
- tools_on_path: Pretend kubectl and helm are installed
- Logger reset between tests
"""

import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Pattern, Union
from unittest.mock import MagicMock, patch

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ktool.config import CollectorConfig

INTERCEPTED_BINARIES = ("kubectl", "helm")


# =============================================================================
# Command Mocking Infrastructure
# =============================================================================

@dataclass
class CommandResponse:
    """A mocked kubectl or helm response (stdout and stderr already merged)."""
    output: str = ""
    returncode: int = 0
    raises: Optional[BaseException] = None

    def to_completed_process(self) -> MagicMock:
        """Convert to a subprocess.CompletedProcess-like mock."""
        if self.raises is not None:
            raise self.raises
        result = MagicMock()
        result.stdout = self.output.encode()
        result.stderr = None
        result.returncode = self.returncode
        return result


@dataclass
class CommandCall:
    """Record of a kubectl or helm call made during testing."""
    command: List[str]
    full_command_str: str
    matched_pattern: Optional[str] = None
    response: Optional[CommandResponse] = None


class CommandMocker:
    """
    Mock kubectl and helm subprocess calls with pattern-matched responses.

    Patterns are matched against the full command string, binary included.

    Usage:
        def test_events(command_mocker):
            command_mocker.register("kubectl get events", CommandResponse(
                output="LAST SEEN   TYPE   REASON"
            ))

            result = CommandExecutor().run(["kubectl", "get", "events"])

            assert command_mocker.was_called_with("get events")
    """

    def __init__(self):
        self._responses: List[tuple] = []
        self._call_history: List[CommandCall] = []
        self._default_response = CommandResponse(
            output="Error: mock not configured for this command",
            returncode=1
        )

    def register(
        self,
        pattern: Union[str, Pattern],
        response: CommandResponse,
        priority: int = 0
    ) -> "CommandMocker":
        """
        Register a response for commands matching the pattern.

        Args:
            pattern: String (substring match) or regex pattern
            response: CommandResponse to return when matched
            priority: Higher priority patterns are checked first

        Returns:
            self for chaining
        """
        self._responses.append((pattern, response, priority))
        # Stable sort keeps registration order within a priority
        self._responses.sort(key=lambda x: x[2], reverse=True)
        return self

    def register_scenario(self, scenario_name: str) -> "CommandMocker":
        """Register all responses for a named cluster scenario."""
        from fixtures.cluster_scenarios import SCENARIOS

        if scenario_name not in SCENARIOS:
            raise ValueError(
                f"Unknown scenario: {scenario_name}. "
                f"Available: {list(SCENARIOS.keys())}"
            )

        for pattern, response in SCENARIOS[scenario_name].items():
            self.register(pattern, response)

        return self

    def set_default_response(self, response: CommandResponse) -> "CommandMocker":
        """Set the default response for unmatched commands."""
        self._default_response = response
        return self

    def mock_run(self, cmd: List[str], **kwargs) -> MagicMock:
        """
        Mock implementation of subprocess.run.

        This method is used as a side_effect for patching subprocess.run.
        """
        cmd_str = " ".join(cmd)

        if cmd[0] not in INTERCEPTED_BINARIES:
            raise RuntimeError(f"Unexpected command in test: {cmd_str}")

        matched_pattern = None
        response = self._default_response

        for pattern, resp, _ in self._responses:
            if isinstance(pattern, str):
                if pattern in cmd_str:
                    matched_pattern = pattern
                    response = resp
                    break
            elif pattern.search(cmd_str):
                matched_pattern = pattern.pattern
                response = resp
                break

        self._call_history.append(CommandCall(
            command=list(cmd),
            full_command_str=cmd_str,
            matched_pattern=matched_pattern,
            response=response
        ))

        return response.to_completed_process()

    @property
    def calls(self) -> List[CommandCall]:
        """Get all calls made during the test."""
        return self._call_history

    @property
    def call_count(self) -> int:
        """Get the number of calls made."""
        return len(self._call_history)

    def was_called_with(self, pattern: str) -> bool:
        """Check if any call contained the given pattern."""
        return any(pattern in call.full_command_str for call in self._call_history)

    def get_calls_matching(self, pattern: str) -> List[CommandCall]:
        """Get all calls containing the given pattern."""
        return [c for c in self._call_history if pattern in c.full_command_str]

    def reset(self):
        """Clear call history (but keep registered responses)."""
        self._call_history = []


@pytest.fixture
def command_mocker():
    """
    Fixture that provides a CommandMocker with subprocess.run patched.

    Usage:
        def test_something(command_mocker):
            command_mocker.register("get pods", CommandResponse(output="..."))
            # Code under test that calls kubectl
            assert command_mocker.was_called_with("get pods")
    """
    mocker = CommandMocker()
    with patch("subprocess.run", side_effect=mocker.mock_run):
        yield mocker


@pytest.fixture
def tools_on_path():
    """Pretend kubectl and helm resolve on PATH. Yields the set of missing tools."""
    missing = set()

    def which(name, *args, **kwargs):
        if name in missing:
            return None
        return f"/usr/local/bin/{name}"

    with patch("shutil.which", side_effect=which):
        yield missing


@pytest.fixture
def collector_config():
    """Collector configuration with short timeouts."""
    return CollectorConfig(command_timeout=5, kubectl_binary="kubectl", helm_binary="helm")


@pytest.fixture
def fixed_clock():
    """A clock that advances one second per call, starting at a fixed time."""
    state = {"now": datetime(2026, 10, 19, 10, 30, 0)}

    def clock() -> datetime:
        current = state["now"]
        state["now"] = current + timedelta(seconds=1)
        return current

    return clock


@pytest.fixture(autouse=True)
def reset_ktool_logger():
    """Undo CLI logging configuration so caplog sees ktool records."""
    yield
    ktool_logger = logging.getLogger("ktool")
    ktool_logger.handlers = []
    ktool_logger.propagate = True
    ktool_logger.setLevel(logging.NOTSET)


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "command_mock: Tests using mocked kubectl/helm subprocess calls"
    )
    config.addinivalue_line(
        "markers", "cli: Tests driving the click command line"
    )
