"""Speech-to-text via DashScope qwen3-asr-flash.

The model accepts a complete audio file referenced by a ``file://`` URL and
returns the recognised text in a chat-style message. The audio file handed to
``transcribe`` is always deleted afterwards, whether or not the call worked.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from errors import AUTH_FAILED, NETWORK_ERROR, TRANSCRIPTION_FAILED, TranscriptionFailure

try:
    import dashscope
except Exception:  # pragma: no cover
    dashscope = None  # type: ignore

logger = logging.getLogger(__name__)


class DashscopeTranscriber:
    def __init__(
        self,
        api_key: str,
        model: str = "qwen3-asr-flash",
        language: str = "en",
        request_timeout_s: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._language = language
        self._request_timeout_s = request_timeout_s

    def transcribe(self, audio_path: Path) -> str:
        try:
            return self._recognize(Path(audio_path))
        finally:
            try:
                Path(audio_path).unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not remove %s: %s", audio_path, exc)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _recognize(self, audio_path: Path) -> str:
        if dashscope is None:
            raise TranscriptionFailure("dashscope is not installed")

        api_key = self._api_key or os.getenv("DASHSCOPE_API_KEY", "")
        if not api_key:
            raise TranscriptionFailure("No API key configured", code=AUTH_FAILED)

        logger.info("Transcribing %s", audio_path)
        try:
            response = dashscope.MultiModalConversation.call(
                api_key=api_key,
                model=self._model,
                messages=[
                    {"role": "system", "content": [{"text": ""}]},
                    {"role": "user", "content": [{"audio": f"file://{audio_path.resolve()}"}]},
                ],
                result_format="message",
                asr_options={"language": self._language, "enable_itn": False},
                timeout=self._request_timeout_s,
            )
        except Exception as exc:
            raise self._to_failure(exc) from exc

        status = getattr(response, "status_code", 200)
        if status != 200:
            message = f"{status} {getattr(response, 'code', '')}: {getattr(response, 'message', '')}"
            raise self._to_failure(RuntimeError(message))

        text = self._extract_text(response).strip()
        logger.info("Transcription returned %d characters", len(text))
        return text

    def _extract_text(self, response: object) -> str:
        """Pull text from a dashscope response dict."""
        if isinstance(response, dict):
            output = response.get("output") or {}
            choices = output.get("choices") or []
            if not choices:
                return ""
            message = choices[0].get("message") or {}
            content = message.get("content") or []
            if not content:
                return ""
            value = content[0]
            if isinstance(value, dict):
                return str(value.get("text", ""))
        return ""

    def _to_failure(self, exc: Exception) -> TranscriptionFailure:
        """Map an SDK/network exception to a transcription failure."""
        message = str(exc)
        low = message.lower()
        if "401" in low or "auth" in low or "api key" in low:
            code = AUTH_FAILED
            retryable = False
        elif "timeout" in low or "network" in low or "connection" in low:
            code = NETWORK_ERROR
            retryable = True
        else:
            code = TRANSCRIPTION_FAILED
            retryable = True
        logger.error("Error during transcription: %s", message)
        return TranscriptionFailure(message, code=code, retryable=retryable)
