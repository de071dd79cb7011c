"""Per-operation staging directories.

Every load and save works inside its own freshly created directory,
which is removed on every exit path before the operation returns.
"""

from __future__ import annotations

import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from core.config import PackagingConfig
from core.errors import StagingError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class StagingArea:
    """Exclusive scratch directory owned by one load or save call."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._released = False

    @classmethod
    def acquire(cls, prefix: str, parent: Path | None = None) -> "StagingArea":
        """Create a new uniquely named, empty staging directory.

        Args:
            prefix: Directory name prefix; a random suffix is appended.
            parent: Parent directory; platform temp root when None.

        Returns:
            Handle for the created directory.

        Raises:
            StagingError: If the directory cannot be created.
        """
        try:
            root = Path(tempfile.mkdtemp(prefix=prefix, dir=parent)).resolve()
        except OSError as error:
            raise StagingError(
                f"Failed to create staging directory under {parent or tempfile.gettempdir()}: "
                f"{error}. Check that the directory exists and is writable."
            ) from error
        _LOGGER.debug("staging_acquired", staging_dir=str(root))
        return cls(root)

    @property
    def root(self) -> Path:
        """Absolute path of the staging directory."""
        return self._root

    def join(self, relative_path: str) -> Path:
        """Return the absolute path of a name inside the staging directory."""
        return self._root / relative_path

    def release(self) -> None:
        """Recursively delete the staging directory.

        Raises:
            StagingError: If deletion is blocked.
        """
        if self._released:
            return
        try:
            shutil.rmtree(self._root)
        except FileNotFoundError:
            pass
        except OSError as error:
            raise StagingError(
                f"Failed to remove staging directory {self._root}: {error}. "
                "Check permissions and remove it manually."
            ) from error
        self._released = True
        _LOGGER.debug("staging_released", staging_dir=str(self._root))


@contextmanager
def staging_area(config: PackagingConfig) -> Iterator[StagingArea]:
    """Acquire a staging area and release it on every exit path.

    A release failure while another error is propagating is logged and the
    original error is re-raised unchanged.
    """
    area = StagingArea.acquire(config.staging_prefix, config.staging_root)
    try:
        yield area
    except BaseException:
        try:
            area.release()
        except StagingError as release_error:
            _LOGGER.warning(
                "staging_release_failed",
                staging_dir=str(area.root),
                error=str(release_error),
            )
        raise
    area.release()
