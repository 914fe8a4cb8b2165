"""Staging directory lifecycle for a single collection run."""

import logging
import shutil
from datetime import datetime
from pathlib import Path

from ktool.errors import StagingError

from .models import BUNDLE_PREFIX

logger = logging.getLogger("ktool.bundle.staging")

TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


def bundle_name(namespace: str, release: str, when: datetime) -> str:
    """Name shared by the staging directory and the archive (minus suffix)."""
    return f"{BUNDLE_PREFIX}-{namespace}-{release}-{when.strftime(TIMESTAMP_FORMAT)}"


class StagingRoot:
    """
    Exclusively owned staging directory.

    Used as a context manager: the directory is created on entry and
    removed on exit, whatever the exit path. Entry fails if the path is
    already taken.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def name(self) -> str:
        return self.path.name

    def __enter__(self) -> Path:
        try:
            self.path.mkdir(parents=False, exist_ok=False)
        except FileExistsError as e:
            raise StagingError(f"Staging directory {self.path} already exists") from e
        except OSError as e:
            raise StagingError(f"Failed to create temporary bundle directory: {self.path}: {e}") from e
        logger.debug(f"Created staging directory {self.path}")
        return self.path

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        if not self.path.exists():
            return
        try:
            shutil.rmtree(self.path)
            logger.debug(f"Removed staging directory {self.path}")
        except OSError as e:
            logger.error(f"Failed to remove staging directory {self.path}: {e}")
