"""Tests for DashscopeTranscriber."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from errors import TranscriptionFailure
from transcriber import DashscopeTranscriber


def _audio(tmp_path: Path) -> Path:
    path = tmp_path / "recording-1.wav"
    path.write_bytes(b"RIFF....WAVE")
    return path


def _response(text: str) -> dict:
    return {"output": {"choices": [{"message": {"content": [{"text": text}]}}]}}


class _ErrorResponse(dict):
    status_code = 400
    code = "InvalidParameter"
    message = "bad audio"


@patch("transcriber.dashscope")
def test_successful_call_returns_text_and_deletes_file(mock_ds: MagicMock, tmp_path: Path) -> None:
    mock_ds.MultiModalConversation.call.return_value = _response("  hello world ")
    audio = _audio(tmp_path)

    text = DashscopeTranscriber(api_key="test-key").transcribe(audio)

    assert text == "hello world"
    assert not audio.exists()
    kwargs = mock_ds.MultiModalConversation.call.call_args.kwargs
    assert kwargs["api_key"] == "test-key"
    assert kwargs["model"] == "qwen3-asr-flash"
    user_content = kwargs["messages"][1]["content"][0]
    assert user_content["audio"] == f"file://{audio.resolve()}"


@patch("transcriber.dashscope")
def test_empty_response_yields_empty_text(mock_ds: MagicMock, tmp_path: Path) -> None:
    mock_ds.MultiModalConversation.call.return_value = {"output": {"choices": []}}

    assert DashscopeTranscriber(api_key="k").transcribe(_audio(tmp_path)) == ""


@patch("transcriber.dashscope", MagicMock())
@patch.dict("os.environ", {"DASHSCOPE_API_KEY": ""}, clear=False)
def test_missing_api_key_fails_and_deletes_file(tmp_path: Path) -> None:
    audio = _audio(tmp_path)

    with pytest.raises(TranscriptionFailure) as exc_info:
        DashscopeTranscriber(api_key="").transcribe(audio)

    assert exc_info.value.code == "AUTH_FAILED"
    assert not audio.exists()


@patch("transcriber.dashscope")
@patch.dict("os.environ", {"DASHSCOPE_API_KEY": "from-env"}, clear=False)
def test_api_key_falls_back_to_environment(mock_ds: MagicMock, tmp_path: Path) -> None:
    mock_ds.MultiModalConversation.call.return_value = _response("hi")

    DashscopeTranscriber(api_key="").transcribe(_audio(tmp_path))

    assert mock_ds.MultiModalConversation.call.call_args.kwargs["api_key"] == "from-env"


@patch("transcriber.dashscope")
def test_network_exception_is_retryable(mock_ds: MagicMock, tmp_path: Path) -> None:
    mock_ds.MultiModalConversation.call.side_effect = ConnectionError("connection reset")
    audio = _audio(tmp_path)

    with pytest.raises(TranscriptionFailure) as exc_info:
        DashscopeTranscriber(api_key="k").transcribe(audio)

    assert exc_info.value.code == "NETWORK_ERROR"
    assert exc_info.value.retryable is True
    assert not audio.exists()


@patch("transcriber.dashscope")
def test_auth_exception_is_not_retryable(mock_ds: MagicMock, tmp_path: Path) -> None:
    mock_ds.MultiModalConversation.call.side_effect = RuntimeError("401 Unauthorized")

    with pytest.raises(TranscriptionFailure) as exc_info:
        DashscopeTranscriber(api_key="k").transcribe(_audio(tmp_path))

    assert exc_info.value.code == "AUTH_FAILED"
    assert exc_info.value.retryable is False


@patch("transcriber.dashscope")
def test_error_status_is_failure(mock_ds: MagicMock, tmp_path: Path) -> None:
    mock_ds.MultiModalConversation.call.return_value = _ErrorResponse()

    with pytest.raises(TranscriptionFailure, match="bad audio") as exc_info:
        DashscopeTranscriber(api_key="k").transcribe(_audio(tmp_path))

    assert exc_info.value.code == "TRANSCRIPTION_FAILED"


def test_missing_dashscope_fails(monkeypatch, tmp_path: Path) -> None:  # noqa: ANN001
    import transcriber
    monkeypatch.setattr(transcriber, "dashscope", None)

    with pytest.raises(TranscriptionFailure, match="dashscope is not installed"):
        DashscopeTranscriber(api_key="k").transcribe(_audio(tmp_path))
