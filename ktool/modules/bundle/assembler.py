"""Archive a staging directory into a gzip-compressed tarball."""

import logging
import tarfile
from pathlib import Path

from ktool.errors import ArchiveError

logger = logging.getLogger("ktool.bundle.assembler")


def archive(root: Path) -> Path:
    """
    Create ``<root>.tar.gz`` next to the staging root.

    The staging directory is the single top-level entry of the archive.
    A partially written archive is removed before ArchiveError is raised.
    """
    root = Path(root)
    tarball_path = root.with_name(f"{root.name}.tar.gz")
    logger.info("Packaging support bundle...")
    try:
        with tarfile.open(tarball_path, "x:gz") as tar:
            tar.add(root, arcname=root.name)
    except FileExistsError as e:
        raise ArchiveError(f"Archive {tarball_path} already exists") from e
    except (OSError, tarfile.TarError) as e:
        tarball_path.unlink(missing_ok=True)
        raise ArchiveError(f"Failed to create tarball for support bundle: {e}") from e
    logger.debug(f"Archive written to {tarball_path}")
    return tarball_path
