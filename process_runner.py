"""Run external programs that take over the terminal."""

from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from errors import NonZeroExit, SpawnFailure

logger = logging.getLogger(__name__)


class TerminalProcessRunner:
    """Spawns a program with inherited stdin/stdout/stderr and waits for it.

    Output is never captured; the child owns the terminal until it exits.
    """

    def run(self, program: str, args: Sequence[str]) -> None:
        command = [program, *args]
        # Arguments can carry the transcript; only their count is logged.
        logger.info("Spawning %s with %d argument(s)", program, len(args))
        try:
            completed = subprocess.run(command, check=False)
        except OSError as exc:
            logger.error("An error has occurred while running %s: %s", program, exc)
            raise SpawnFailure(f"could not start {program}: {exc}") from exc

        logger.info("%s exited with status code %s", program, completed.returncode)
        if completed.returncode != 0:
            raise NonZeroExit(program, completed.returncode)
