"""Scoped scratch directories that are always removed on exit."""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from errors import CleanupFailure

logger = logging.getLogger(__name__)


@contextmanager
def temp_workspace(prefix: str = "voxorder-", root: Optional[Path] = None) -> Iterator[Path]:
    """Yield a fresh, exclusively owned directory under the temp root.

    The directory and everything inside it is removed when the block exits.
    A removal error after a successful block is only logged. A removal error
    while the block is already failing is raised as ``CleanupFailure`` with
    the block's exception kept as its context.
    """
    directory = Path(tempfile.mkdtemp(prefix=prefix, dir=root))
    logger.debug("Created workspace %s", directory)
    failed = True
    try:
        yield directory
        failed = False
    finally:
        try:
            shutil.rmtree(directory)
            logger.debug("Removed workspace %s", directory)
        except OSError as exc:
            logger.error("Error during cleanup of %s: %s", directory, exc)
            if failed:
                raise CleanupFailure(f"could not remove {directory}: {exc}") from exc
