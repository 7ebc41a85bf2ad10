"""Capture session: record audio until a bound key selects an order."""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path
from typing import Optional, TextIO

from errors import DeviceFailure
from interfaces import KeyListener, Recorder, TerminalMode
from menu import Menu
from models import Order

logger = logging.getLogger(__name__)


class _Outcome:
    """Single-assignment result slot; the first of resolve/fail wins."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._order: Optional[Order] = None
        self._error: Optional[Exception] = None

    def resolve(self, order: Order) -> bool:
        with self._lock:
            if self._done.is_set():
                return False
            self._order = order
            self._done.set()
            return True

    def fail(self, error: Exception) -> bool:
        with self._lock:
            if self._done.is_set():
                return False
            self._error = error
            self._done.set()
            return True

    def wait(self) -> None:
        self._done.wait()

    def result(self) -> Order:
        if self._error is not None:
            raise self._error
        assert self._order is not None
        return self._order


class CaptureSession:
    def __init__(
        self,
        recorder: Recorder,
        key_listener: KeyListener,
        terminal: TerminalMode,
        out: Optional[TextIO] = None,
    ) -> None:
        self._recorder = recorder
        self._keys = key_listener
        self._terminal = terminal
        self._out = out if out is not None else sys.stdout

    def capture(self, output_path: Path, menu: Menu) -> Order:
        """Record into ``output_path`` and return the order picked by keypress.

        Keys without a binding are ignored. An audio stream error ends the
        session with ``DeviceFailure``. Whichever way the session ends, the
        listener is stopped, the terminal restored and the file closed once.
        """
        lookup = menu.lookup()
        outcome = _Outcome()

        def on_key(name: str) -> None:
            order = lookup.get(name)
            if order is None:
                logger.debug("Ignoring unbound key %r", name)
                return
            if outcome.resolve(order):
                logger.info("Got order %r", order.description)

        def on_stream_error(exc: Exception) -> None:
            failure = DeviceFailure(f"audio stream error: {exc}")
            failure.__cause__ = exc
            outcome.fail(failure)

        self._recorder.start(output_path, on_stream_error)
        try:
            with self._terminal.raw():
                self._print_legend(menu)
                self._keys.start(on_key)
                try:
                    outcome.wait()
                finally:
                    self._keys.stop()
        finally:
            self._recorder.stop()
            self._out.write("\n")
            self._out.flush()

        return outcome.result()

    def _print_legend(self, menu: Menu) -> None:
        self._out.write("Recording...\n")
        for keybinding, name, description in menu.describe():
            self._out.write(f"Press '{keybinding}' to {name} ({description})\n")
        self._out.flush()
