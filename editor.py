"""Round-trip text through an external editor."""

from __future__ import annotations

import logging
import shlex
import uuid
from typing import Optional

from errors import EmptyResult
from interfaces import ProcessRunner
from workspace import temp_workspace

logger = logging.getLogger(__name__)


class EditorSession:
    def __init__(
        self,
        runner: ProcessRunner,
        editor_command: str = "nvim",
        encoding: str = "utf-8",
        suffix: str = ".md",
    ) -> None:
        parts = shlex.split(editor_command)
        if not parts:
            raise ValueError("editor command must not be empty")
        self._program = parts[0]
        self._extra_args = parts[1:]
        self._runner = runner
        self._encoding = encoding
        self._suffix = suffix

    def edit_with_seed(self, seed: Optional[str] = None) -> str:
        """Open the editor on a scratch file and return what the user saved.

        Raises ``EmptyResult`` when the file ends up empty or missing, which
        almost always means the edit was aborted.
        """
        result = ""
        with temp_workspace(prefix="voxorder-edit-") as directory:
            path = directory / f"{uuid.uuid4()}{self._suffix}"
            if seed:
                path.write_text(seed, encoding=self._encoding)
            self._runner.run(self._program, [*self._extra_args, str(path)])
            if path.exists():
                result = path.read_text(encoding=self._encoding)

        if not result:
            logger.warning("Editor returned no content")
            raise EmptyResult("No result returned")
        return result
