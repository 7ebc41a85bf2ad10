"""The actions an order can chain together."""

from __future__ import annotations

import logging
import shlex
from typing import Optional

from editor import EditorSession
from errors import ClipboardFailure, EmptyTranscript
from interfaces import ClipboardWriter, ProcessRunner

logger = logging.getLogger(__name__)


def _require_text(transcript: str) -> None:
    if not transcript:
        raise EmptyTranscript("No transcription returned")


class EditAction:
    """Let the user rewrite the transcript in the external editor."""

    def __init__(self, editor: EditorSession) -> None:
        self._editor = editor

    def keep(self) -> bool:
        return True

    def run(self, transcript: str) -> str:
        _require_text(transcript)
        return self._editor.edit_with_seed(transcript)

    def should_rerun(self, transcript: str) -> bool:
        return False


class CopyAction:
    def __init__(self, clipboard: ClipboardWriter) -> None:
        self._clipboard = clipboard

    def keep(self) -> bool:
        return True

    def run(self, transcript: str) -> str:
        _require_text(transcript)
        result = self._clipboard.write(transcript)
        if not result.success:
            raise ClipboardFailure(result.reason)
        return transcript

    def should_rerun(self, transcript: str) -> bool:
        return False


class ChatAction:
    """Hand the transcript to an interactive chat CLI as its first prompt.

    The prompt is the template text as-is, a blank line, then the transcript.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        command: str,
        prompt_template: Optional[str] = None,
    ) -> None:
        parts = shlex.split(command)
        if not parts:
            raise ValueError("chat command must not be empty")
        self._program = parts[0]
        self._extra_args = parts[1:]
        self._runner = runner
        self._prompt_template = prompt_template

    def build_prompt(self, transcript: str) -> str:
        if not self._prompt_template:
            return transcript
        return f"{self._prompt_template}\n\n{transcript}"

    def keep(self) -> bool:
        return True

    def run(self, transcript: str) -> str:
        _require_text(transcript)
        self._runner.run(self._program, [*self._extra_args, self.build_prompt(transcript)])
        return transcript

    def should_rerun(self, transcript: str) -> bool:
        return False


class RetryAction:
    """Throw the transcript away and start a new recording."""

    def keep(self) -> bool:
        return False

    def run(self, transcript: str) -> str:
        return ""

    def should_rerun(self, transcript: str) -> bool:
        return True


class QuitAction:
    def keep(self) -> bool:
        return False

    def run(self, transcript: str) -> str:
        return transcript

    def should_rerun(self, transcript: str) -> bool:
        return False
