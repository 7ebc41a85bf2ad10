"""Core data models for the app."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from interfaces import Action


class SessionState(str, Enum):
    IDLE = "IDLE"
    RECORDING = "RECORDING"
    TRANSCRIBING = "TRANSCRIBING"
    EXECUTING = "EXECUTING"
    ERROR = "ERROR"


class ErrorPolicy(str, Enum):
    ABORT = "abort"
    RETRY = "retry"


@dataclass(frozen=True)
class Order:
    keybinding: str
    description: str
    steps: tuple[Action, ...]

    def __post_init__(self) -> None:
        if not self.keybinding:
            raise ValueError("order keybinding must not be empty")
        # Accept any sequence but store an immutable tuple.
        object.__setattr__(self, "steps", tuple(self.steps))
        if not self.steps:
            raise ValueError(f"order {self.keybinding!r} has no steps")


@dataclass(frozen=True)
class ChainResult:
    transcript: str
    rerun: bool


@dataclass
class ClipboardResult:
    success: bool
    reason: str
