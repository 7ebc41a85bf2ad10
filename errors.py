"""Shared error codes, user-facing messages and exception types."""

from __future__ import annotations

SPAWN_FAILED = "SPAWN_FAILED"
NON_ZERO_EXIT = "NON_ZERO_EXIT"
EMPTY_RESULT = "EMPTY_RESULT"
EMPTY_TRANSCRIPT = "EMPTY_TRANSCRIPT"
TRANSCRIPTION_FAILED = "TRANSCRIPTION_FAILED"
AUTH_FAILED = "AUTH_FAILED"
NETWORK_ERROR = "NETWORK_ERROR"
DEVICE_FAILED = "DEVICE_FAILED"
CLEANUP_FAILED = "CLEANUP_FAILED"
CLIPBOARD_FAILED = "CLIPBOARD_FAILED"
KEYBINDING_COLLISION = "KEYBINDING_COLLISION"

ERROR_MESSAGES = {
    SPAWN_FAILED: "External program could not be started.",
    NON_ZERO_EXIT: "External program exited with an error.",
    EMPTY_RESULT: "Edit produced no content.",
    EMPTY_TRANSCRIPT: "No transcription returned.",
    TRANSCRIPTION_FAILED: "Transcription failed.",
    AUTH_FAILED: "API key is invalid.",
    NETWORK_ERROR: "Network failed, please retry.",
    DEVICE_FAILED: "Audio or keyboard device is unavailable.",
    CLEANUP_FAILED: "Temporary files could not be removed.",
    CLIPBOARD_FAILED: "Could not write to the clipboard.",
    KEYBINDING_COLLISION: "Two orders share the same keybinding.",
}


class VoxorderError(Exception):
    code = TRANSCRIPTION_FAILED

    def __init__(self, message: str = "", code: str | None = None) -> None:
        if code is not None:
            self.code = code
        self.message = message or ERROR_MESSAGES.get(self.code, self.code)
        super().__init__(self.message)


class SpawnFailure(VoxorderError):
    code = SPAWN_FAILED


class NonZeroExit(VoxorderError):
    code = NON_ZERO_EXIT

    def __init__(self, program: str, exit_code: int) -> None:
        self.program = program
        self.exit_code = exit_code
        super().__init__(f"{program} exited with status code {exit_code}")


class EmptyResult(VoxorderError):
    code = EMPTY_RESULT


class EmptyTranscript(VoxorderError):
    code = EMPTY_TRANSCRIPT


class TranscriptionFailure(VoxorderError):
    code = TRANSCRIPTION_FAILED

    def __init__(self, message: str = "", code: str | None = None, retryable: bool = False) -> None:
        self.retryable = retryable
        super().__init__(message, code)


class DeviceFailure(VoxorderError):
    code = DEVICE_FAILED


class CleanupFailure(VoxorderError):
    code = CLEANUP_FAILED


class ClipboardFailure(VoxorderError):
    code = CLIPBOARD_FAILED


class KeybindingCollision(VoxorderError):
    code = KEYBINDING_COLLISION

    def __init__(self, keybinding: str, first: str, second: str) -> None:
        self.keybinding = keybinding
        super().__init__(f"keybinding {keybinding!r} is bound to both {first!r} and {second!r}")
