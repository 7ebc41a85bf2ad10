"""Single-keypress listeners: the controlling terminal, or pynput as fallback."""

from __future__ import annotations

import logging
import os
import select
import sys
import threading
from typing import Callable, Optional, TextIO

from errors import DeviceFailure

_BACKEND_ERROR = ""
try:
    from pynput import keyboard
except Exception as exc:  # pragma: no cover
    keyboard = None  # type: ignore
    _BACKEND_ERROR = str(exc) or type(exc).__name__

logger = logging.getLogger(__name__)

_ALIASES = {
    " ": "space",
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x1b": "esc",
    "\x7f": "backspace",
}


def char_name(char: str) -> str:
    return _ALIASES.get(char, char.lower())


def key_name(key: object) -> str:
    """Map a pynput key to a logical name such as ``'e'`` or ``'space'``."""
    char = getattr(key, "char", None)
    if isinstance(char, str) and char:
        return char_name(char)
    name = getattr(key, "name", None)
    if isinstance(name, str) and name:
        return name
    return str(key)


class TerminalKeyReader:
    """Reads keypresses from stdin while the terminal is in raw mode.

    Only keys typed into this terminal count. Escape sequences (arrow keys,
    function keys) are dropped as a whole.
    """

    def __init__(self, stream: Optional[TextIO] = None, poll_s: float = 0.1) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._poll_s = poll_s
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._lock = threading.Lock()

    def start(self, on_key: Callable[[str], None]) -> None:
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return
            try:
                fd = self._stream.fileno()
            except (AttributeError, OSError, ValueError) as exc:
                raise DeviceFailure(f"stdin cannot be read: {exc}") from exc
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._worker, args=(fd, on_key), daemon=True)
            self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        with self._lock:
            thread = self._thread
            self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=max(0.5, self._poll_s * 5))

    def _worker(self, fd: int, on_key: Callable[[str], None]) -> None:
        while not self._stop_event.is_set():
            try:
                ready, _, _ = select.select([fd], [], [], self._poll_s)
                if not ready:
                    continue
                chunk = os.read(fd, 32)
            except (OSError, ValueError) as exc:
                logger.error("Reading keys from stdin failed: %s", exc)
                return
            if not chunk:
                logger.debug("stdin closed; key reader exiting")
                return
            text = chunk.decode("utf-8", errors="ignore")
            if text.startswith("\x1b") and len(text) > 1:
                logger.debug("Ignoring escape sequence %r", text)
                continue
            for char in text:
                if self._stop_event.is_set():
                    return
                name = char_name(char)
                logger.debug("Key pressed: %s", name)
                on_key(name)


class KeyboardListener:
    """Global key hook; used when stdin is not a terminal."""

    def __init__(self) -> None:
        self._listener: Optional[object] = None
        self._lock = threading.Lock()

    def start(self, on_key: Callable[[str], None]) -> None:
        if keyboard is None:
            reason = _BACKEND_ERROR or "pynput could not be loaded"
            raise DeviceFailure(f"no keyboard backend available: {reason}")

        def _on_press(key: object) -> None:
            name = key_name(key)
            logger.debug("Key pressed: %s", name)
            on_key(name)

        with self._lock:
            if self._listener is not None:
                return
            try:
                listener = keyboard.Listener(on_press=_on_press)
                listener.start()
            except Exception as exc:
                raise DeviceFailure(f"keyboard listener failed: {exc}") from exc
            self._listener = listener

    def stop(self) -> None:
        with self._lock:
            listener = self._listener
            self._listener = None
        if listener is not None:
            listener.stop()


def default_key_listener(stream: Optional[TextIO] = None) -> TerminalKeyReader | KeyboardListener:
    stream = stream if stream is not None else sys.stdin
    try:
        interactive = stream.isatty()
    except (AttributeError, ValueError):
        interactive = False
    if interactive:
        return TerminalKeyReader(stream)
    logger.info("stdin is not a terminal; listening with the global keyboard hook")
    return KeyboardListener()
