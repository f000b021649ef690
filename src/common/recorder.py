from __future__ import annotations

import logging
from typing import Sequence

from state.file_store import FileStateStore
from state.models import Script

from .errors import RecordingError


logger = logging.getLogger(__name__)


class CommandRecorder:
    """
    Captures invoked commands into the script of the active recording session.

    `record_command` runs before every top-level command; it writes nothing
    unless a session is active, and commands are appended in invocation order.
    """

    def __init__(self, store: FileStateStore) -> None:
        self._store = store

    def is_recording(self) -> bool:
        return self._store.get("recording") == 1

    def record_command(self, command: Sequence[str]) -> bool:
        """Append `command` (joined with spaces) to the active script.

        Returns True when something was recorded.
        """
        state = self._store.get_all()
        if state.recording != 1:
            return False

        script = state.scripts.get(state.recording_script_name)
        if script is None:
            raise RecordingError(
                f"Recording script not found: {state.recording_script_name!r}; run `record stop`"
            )
        script.commands.append(" ".join(command))
        self._store.save_state(state)
        return True

    def start_recording(self, name: str) -> None:
        name = (name or "").strip()
        if not name:
            raise RecordingError("Script name must not be empty")

        state = self._store.get_all()
        if state.recording == 1:
            raise RecordingError(f"Already recording script {state.recording_script_name!r}")

        if name not in state.scripts:
            state.scripts[name] = Script()
        state.recording = 1
        state.recording_script_name = name
        self._store.save_state(state)
        logger.info("recording started for script %s", name)

    def stop_recording(self) -> str:
        """End the active session; returns the script name that was recorded."""
        state = self._store.get_all()
        if state.recording != 1:
            raise RecordingError("No recording session is active")

        name = state.recording_script_name
        state.recording = 0
        state.recording_script_name = ""
        self._store.save_state(state)
        logger.info("recording stopped for script %s", name)
        return name


__all__ = ["CommandRecorder"]
