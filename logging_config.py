"""Root logger setup: console at the configured level, file at DEBUG."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Union

LOG_FORMAT = "%(asctime)s - %(levelname)s : [%(name)s] %(message)s - (%(filename)s : %(lineno)s)"


def resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(log_path: Union[str, Path] = "./voxorder.log", level: Union[int, str] = logging.INFO) -> None:
    """Attach console and file handlers to the root logger once.

    Does nothing if the root logger already has handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT)

    # stderr, so log lines do not mix with the key legend on stdout
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    console.setLevel(resolve_level(level))
    root.addHandler(console)

    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.DEBUG)
    root.addHandler(file_handler)
