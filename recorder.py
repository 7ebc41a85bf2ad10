"""Microphone recorder that streams straight into a WAV file."""

from __future__ import annotations

import logging
import threading
import wave
from pathlib import Path
from typing import Any, Callable, Optional

from errors import DeviceFailure

try:
    import numpy as np
except Exception:  # pragma: no cover
    np = None  # type: ignore

try:
    import sounddevice as sd
except Exception:  # pragma: no cover
    sd = None  # type: ignore

logger = logging.getLogger(__name__)


class SoundDeviceRecorder:
    def __init__(
        self,
        sample_rate: int = 16000,
        channels: int = 1,
        chunk_ms: int = 100,
    ) -> None:
        self.sample_rate = sample_rate
        self.channels = channels
        self.chunk_ms = chunk_ms
        self._stream: Any = None
        self._wav: Optional[wave.Wave_write] = None
        self._running = False
        self._lock = threading.Lock()
        self._on_error: Optional[Callable[[Exception], None]] = None
        self._error_reported = False
        self.frames_written = 0

    def start(self, output_path: Path, on_error: Callable[[Exception], None]) -> None:
        with self._lock:
            if self._running:
                return
            if sd is None or np is None:
                raise DeviceFailure("sounddevice is not installed")
            self._on_error = on_error
            self._error_reported = False
            self.frames_written = 0
            try:
                self._wav = wave.open(str(output_path), "wb")
                self._wav.setnchannels(self.channels)
                self._wav.setsampwidth(2)  # int16
                self._wav.setframerate(self.sample_rate)
                blocksize = int(self.sample_rate * (self.chunk_ms / 1000.0))
                self._stream = sd.InputStream(
                    samplerate=self.sample_rate,
                    channels=self.channels,
                    dtype="int16",
                    blocksize=blocksize,
                    callback=self._on_audio,
                    finished_callback=self._on_finished,
                )
                self._stream.start()
            except Exception as exc:
                self._close_resources()
                raise DeviceFailure(f"could not start recording: {exc}") from exc
            self._running = True
            logger.info("Recording to %s", output_path)

    def stop(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._running = False
        # The audio callback takes the lock, so the stream is stopped outside it.
        self._close_resources()
        logger.info("Recording stopped after %d frames", self.frames_written)

    def _close_resources(self) -> None:
        if self._stream is not None:
            try:
                self._stream.stop()
                self._stream.close()
            finally:
                self._stream = None
        if self._wav is not None:
            try:
                self._wav.close()
            finally:
                self._wav = None

    def _on_audio(self, indata: Any, frames: int, time_info: Any, status: Any) -> None:
        if status:
            logger.warning("Audio input status: %s", status)
        with self._lock:
            if not self._running or self._wav is None:
                return
            try:
                self._wav.writeframes(np.asarray(indata, dtype=np.int16).tobytes())
                self.frames_written += frames
                return
            except Exception as exc:
                error = exc
        self._report_error(error)

    def _on_finished(self) -> None:
        # Also fires after stop(); only an end while still running is a failure.
        with self._lock:
            if not self._running:
                return
        self._report_error(DeviceFailure("audio stream ended unexpectedly"))

    def _report_error(self, exc: Exception) -> None:
        if self._error_reported or self._on_error is None:
            return
        self._error_reported = True
        logger.error("An error has occurred while recording audio: %s", exc)
        self._on_error(exc)
