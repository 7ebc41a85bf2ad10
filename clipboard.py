"""Clipboard writer."""

from __future__ import annotations

import logging

from errors import CLIPBOARD_FAILED
from models import ClipboardResult

try:
    import pyperclip
except Exception:  # pragma: no cover
    pyperclip = None  # type: ignore

logger = logging.getLogger(__name__)


class PyperclipWriter:
    def write(self, text: str) -> ClipboardResult:
        if not text.strip():
            return ClipboardResult(success=False, reason="empty text")
        if pyperclip is None:
            return ClipboardResult(success=False, reason="clipboard dependency missing")
        try:
            pyperclip.copy(text)
        except Exception as exc:
            logger.error("Clipboard write failed: %s", exc)
            return ClipboardResult(success=False, reason=f"{CLIPBOARD_FAILED}: {exc}")
        logger.info("Copied %d characters to the clipboard", len(text))
        return ClipboardResult(success=True, reason="ok")
