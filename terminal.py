"""Raw input mode for the controlling terminal."""

from __future__ import annotations

import logging
import sys
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

try:
    import termios
    import tty
except ImportError:  # pragma: no cover - not available on Windows
    termios = None  # type: ignore
    tty = None  # type: ignore

logger = logging.getLogger(__name__)


class RawTerminalMode:
    """Owns the terminal's raw-mode state; only one holder at a time.

    Entering ``raw()`` switches stdin to no-echo single-keypress mode. Leaving
    it restores the saved attributes and drops any keys typed meanwhile so they
    do not reach the next program that reads stdin.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._held = threading.Lock()

    def _fileno(self) -> Optional[int]:
        if termios is None:
            return None
        try:
            if not self._stream.isatty():
                return None
            return self._stream.fileno()
        except (AttributeError, OSError, ValueError):
            return None

    @contextmanager
    def raw(self) -> Iterator[None]:
        if not self._held.acquire(blocking=False):
            raise RuntimeError("terminal raw mode is already held")
        try:
            fd = self._fileno()
            if fd is None:
                logger.debug("stdin is not a terminal; raw mode skipped")
                yield
                return
            saved = termios.tcgetattr(fd)
            tty.setcbreak(fd)
            attrs = termios.tcgetattr(fd)
            attrs[3] &= ~termios.ECHO
            termios.tcsetattr(fd, termios.TCSANOW, attrs)
            logger.debug("Terminal switched to raw mode")
            try:
                yield
            finally:
                termios.tcsetattr(fd, termios.TCSAFLUSH, saved)
                logger.debug("Terminal mode restored")
        finally:
            self._held.release()
