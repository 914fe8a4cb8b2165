"""Release checks and self-upgrade against the GitHub releases API."""

import logging
import re
import subprocess
from typing import Optional

import requests

from ktool import RELEASE
from ktool.config import UpdateConfig
from ktool.errors import UpdateRequiredError, UpgradeError

logger = logging.getLogger("ktool.update")

# Commands that only warn about a new major release instead of blocking
NON_CRITICAL_COMMANDS = {"version", "", "-h", "--help"}

_MAJOR_PATTERN = re.compile(r"(?:^|v)(\d+)")


def parse_major_version(release: str) -> Optional[int]:
    """
    Extract the major version from a release string.

    >>> parse_major_version("ktool-v1.2.3")
    1
    """
    match = _MAJOR_PATTERN.search(release or "")
    if not match:
        return None
    return int(match.group(1))


class UpdateChecker:
    """Compares the running release with the latest published one."""

    def __init__(self, config: UpdateConfig, current: str = RELEASE):
        self.config = config
        self.current = current

    def get_latest_release(self, timeout: Optional[float] = None) -> Optional[str]:
        """Latest release tag, or None if it cannot be determined."""
        try:
            response = requests.get(
                self.config.releases_url,
                headers={"Accept": "application/vnd.github+json"},
                timeout=timeout,
            )
            response.raise_for_status()
            tag = response.json().get("tag_name")
        except (requests.exceptions.RequestException, ValueError, AttributeError) as e:
            logger.debug(f"Release lookup failed: {e}")
            return None
        return tag or None

    def check_for_updates(self, command: str) -> None:
        """
        Warn about, or block on, a newer release.

        Raises:
            UpdateRequiredError: a new major release exists and ``command``
                is not one of the non-critical commands
        """
        if command == "upgrade" or not self.config.enabled:
            return

        latest = self.get_latest_release(timeout=self.config.check_timeout)
        if not latest or latest == self.current:
            return

        current_major = parse_major_version(self.current)
        if current_major is None:
            logger.warning(f"Could not parse current release version: {self.current}")
            return
        latest_major = parse_major_version(latest)
        if latest_major is None:
            logger.warning(f"Could not parse latest release version: {latest}")
            return

        if latest_major > current_major:
            if command in NON_CRITICAL_COMMANDS:
                logger.warning(
                    f"MANDATORY UPDATE RECOMMENDED. A new major release ({latest}) "
                    "is available. Please run 'kubectl ktool upgrade'."
                )
                return
            raise UpdateRequiredError(latest)

        logger.warning(
            f"A new release ({latest}) is available. "
            "Please run 'kubectl ktool upgrade' to update."
        )

    def upgrade(self) -> str:
        """
        Replace the installed tool with the latest release.

        Returns:
            The release now installed

        Raises:
            UpgradeError: release lookup, download or install failed
        """
        logger.info(f"Current release: {self.current}")
        logger.info("Fetching latest release information from GitHub...")
        latest = self.get_latest_release(timeout=30)
        if not latest:
            raise UpgradeError(
                "Could not fetch release information from GitHub. "
                "Check network connection or API response."
            )

        logger.info(f"Latest release available: {latest}")
        if latest == self.current:
            logger.info("You are already using the latest release.")
            return self.current

        logger.info(f"Upgrading to {latest}...")
        try:
            response = requests.get(self.config.install_script_url, timeout=30)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise UpgradeError(f"Failed to download install script: {e}") from e

        try:
            process = subprocess.run(["bash"], input=response.content, timeout=300)
        except (OSError, subprocess.TimeoutExpired) as e:
            raise UpgradeError(f"The upgrade process failed: {e}") from e
        if process.returncode != 0:
            raise UpgradeError("The upgrade process failed.")

        logger.info(f"Upgrade complete to release {latest}.")
        return latest
