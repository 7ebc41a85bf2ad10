"""Environment loading and a simple JSON-based config store."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from models import ErrorPolicy

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "voxorder"


def load_environment(dotenv_path: Optional[Path] = None) -> None:
    """Load variables from a .env file if present; existing env wins."""
    target = dotenv_path or Path.cwd() / ".env"
    if load_dotenv(dotenv_path=target, override=False):
        logger.debug("Loaded environment variables from %s", target)
    else:
        logger.debug("No .env file found at %s (skipping)", target)

    if not os.getenv("DASHSCOPE_API_KEY"):
        logger.warning("DASHSCOPE_API_KEY is not set; transcription needs a key in config or env.")


class JsonConfigStore:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or DEFAULT_CONFIG_DIR / "config.json"
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def get_api_key(self) -> str:
        data = self._read_all()
        return str(data.get("api_key", ""))

    def set_api_key(self, key: str) -> None:
        data = self._read_all()
        data["api_key"] = key
        self._write_all(data)

    def get_editor(self) -> str:
        data = self._read_all()
        return str(data.get("editor") or os.getenv("EDITOR") or "nvim")

    def get_chat_command(self) -> str:
        data = self._read_all()
        return str(data.get("chat_command", "llm chat"))

    def get_prompt_template(self) -> Optional[str]:
        """Return the chat prompt template text, or None when absent."""
        data = self._read_all()
        path = Path(data.get("prompt_template", self._path.parent / "prompt.txt")).expanduser()
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No prompt template at %s", path)
            return None
        except OSError as exc:
            logger.warning("Could not read prompt template %s: %s", path, exc)
            return None

    def get_recordings_dir(self) -> Path:
        data = self._read_all()
        return Path(data.get("recordings_dir", Path.cwd())).expanduser()

    def get_error_policy(self) -> ErrorPolicy:
        data = self._read_all()
        try:
            return ErrorPolicy(str(data.get("on_error", ErrorPolicy.ABORT.value)).lower())
        except ValueError:
            logger.warning("Unknown on_error value %r, using abort", data.get("on_error"))
            return ErrorPolicy.ABORT

    def get_max_retries(self) -> int:
        data = self._read_all()
        try:
            return max(0, int(data.get("max_retries", 3)))
        except (TypeError, ValueError):
            return 3

    def get_log_level(self) -> str:
        data = self._read_all()
        return str(os.getenv("VOXORDER_LOG_LEVEL") or data.get("log_level", "INFO")).upper()

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict) -> None:
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
