"""State-machine based driver loop: capture, transcribe, execute, repeat."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from capture import CaptureSession
from executor import execute_order
from interfaces import Transcriber
from menu import Menu
from models import ChainResult, ErrorPolicy, SessionState

logger = logging.getLogger(__name__)

StateCallback = Callable[[SessionState, SessionState], None]
ErrorCallback = Callable[[str, str], None]

UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class SessionController:
    def __init__(
        self,
        capture: CaptureSession,
        transcriber: Transcriber,
        menu: Menu,
        recordings_dir: Path,
        error_policy: ErrorPolicy = ErrorPolicy.ABORT,
        max_retries: int = 3,
        on_state_change: Optional[StateCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self._capture = capture
        self._transcriber = transcriber
        self._menu = menu
        self._recordings_dir = recordings_dir
        self._error_policy = error_policy
        self._max_retries = max_retries
        self._on_state_change = on_state_change
        self._on_error = on_error

        self._state = SessionState.IDLE
        self._iteration = 0

    @property
    def state(self) -> SessionState:
        return self._state

    def run(self) -> int:
        """Loop until an order stops asking for a rerun.

        Returns the number of iterations that completed. A failing iteration
        is logged; under ``ErrorPolicy.ABORT`` it ends the loop, under
        ``ErrorPolicy.RETRY`` it is restarted up to ``max_retries`` times in a
        row before the loop gives up.
        """
        completed = 0
        failures = 0
        while True:
            try:
                result = self.run_once()
            except Exception as exc:
                self._fail(exc)
                if self._error_policy is ErrorPolicy.RETRY and failures < self._max_retries:
                    failures += 1
                    logger.info("Restarting iteration (%d/%d)", failures, self._max_retries)
                    continue
                return completed
            completed += 1
            failures = 0
            if not result.rerun:
                logger.info("Done after %d iteration(s)", completed)
                return completed
            logger.info("Rerun requested, recording again")

    def run_once(self) -> ChainResult:
        self._iteration += 1
        self._recordings_dir.mkdir(parents=True, exist_ok=True)
        audio_path = self._recordings_dir / f"recording-{now_ms()}.wav"

        self._transition(SessionState.RECORDING)
        try:
            order = self._capture.capture(audio_path, self._menu)
        except BaseException:
            self._discard(audio_path)
            raise

        self._transition(SessionState.TRANSCRIBING)
        transcript = self._transcriber.transcribe(audio_path)

        self._transition(SessionState.EXECUTING)
        result = execute_order(order, transcript)

        self._transition(SessionState.IDLE)
        return result

    def _discard(self, audio_path: Path) -> None:
        try:
            audio_path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove %s: %s", audio_path, exc)

    def _fail(self, exc: Exception) -> None:
        code = getattr(exc, "code", UNEXPECTED_ERROR)
        logger.error("Failed to process audio (iteration %d): %s", self._iteration, exc, exc_info=exc)
        self._transition(SessionState.ERROR)
        if self._on_error:
            self._on_error(code, str(exc))
        self._transition(SessionState.IDLE)

    def _transition(self, to_state: SessionState) -> None:
        from_state = self._state
        if from_state == to_state:
            return
        self._state = to_state
        logger.debug("State %s -> %s", from_state.value, to_state.value)
        if self._on_state_change:
            self._on_state_change(from_state, to_state)


def now_ms() -> int:
    return int(time.time() * 1000)
