"""Application entrypoint."""

from __future__ import annotations

import logging

from actions import ChatAction, CopyAction, EditAction, QuitAction, RetryAction
from capture import CaptureSession
from clipboard import PyperclipWriter
from config import JsonConfigStore, load_environment
from editor import EditorSession
from keyboard_listener import default_key_listener
from logging_config import setup_logging
from menu import default_menu
from process_runner import TerminalProcessRunner
from recorder import SoundDeviceRecorder
from session_controller import SessionController
from terminal import RawTerminalMode
from transcriber import DashscopeTranscriber

logger = logging.getLogger(__name__)


class App:
    def __init__(self) -> None:
        self.config_store = JsonConfigStore()
        setup_logging(level=self.config_store.get_log_level())
        load_environment()

        runner = TerminalProcessRunner()
        editor = EditorSession(runner, editor_command=self.config_store.get_editor())
        self.menu = default_menu(
            edit=EditAction(editor),
            copy=CopyAction(PyperclipWriter()),
            chat=ChatAction(
                runner,
                command=self.config_store.get_chat_command(),
                prompt_template=self.config_store.get_prompt_template(),
            ),
            retry=RetryAction(),
            quit=QuitAction(),
        )
        self.controller = SessionController(
            capture=CaptureSession(
                recorder=SoundDeviceRecorder(),
                key_listener=default_key_listener(),
                terminal=RawTerminalMode(),
            ),
            transcriber=DashscopeTranscriber(api_key=self.config_store.get_api_key()),
            menu=self.menu,
            recordings_dir=self.config_store.get_recordings_dir(),
            error_policy=self.config_store.get_error_policy(),
            max_retries=self.config_store.get_max_retries(),
        )

    def run(self) -> int:
        try:
            self.controller.run()
        except KeyboardInterrupt:
            logger.info("Interrupted")
        return 0


def main() -> int:
    app = App()
    return app.run()


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
