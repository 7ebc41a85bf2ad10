"""Protocol interfaces used by the capture session, actions and controller."""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Callable, Protocol, Sequence

from models import ClipboardResult


class Action(Protocol):
    def keep(self) -> bool: ...

    def run(self, transcript: str) -> str: ...

    def should_rerun(self, transcript: str) -> bool: ...


class Recorder(Protocol):
    def start(self, output_path: Path, on_error: Callable[[Exception], None]) -> None: ...

    def stop(self) -> None: ...


class KeyListener(Protocol):
    def start(self, on_key: Callable[[str], None]) -> None: ...

    def stop(self) -> None: ...


class TerminalMode(Protocol):
    def raw(self) -> AbstractContextManager[None]: ...


class ProcessRunner(Protocol):
    def run(self, program: str, args: Sequence[str]) -> None: ...


class Transcriber(Protocol):
    def transcribe(self, audio_path: Path) -> str: ...


class ClipboardWriter(Protocol):
    def write(self, text: str) -> ClipboardResult: ...
