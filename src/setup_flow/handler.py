from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from common.credentials import CredentialManager
from common.env_config import OperatorCredentials, load_operator_credentials
from state.file_store import FileStateStore
from state.models import State


logger = logging.getLogger(__name__)

INIT = "init"
RESET = "reset"


@dataclass
class SetupResult:
    action: str
    network: str
    cleared: List[str] = field(default_factory=list)
    recording_interrupted: bool = False


class SetupOrchestrator:
    """
    `setup init` / `setup reset` over the state store.

    Both actions validate the operator pairs before anything is written, so a
    rejected .env leaves the document untouched.

    - init: write `State.default()`, then apply credentials.
    - reset with no skip flags: same as init.
    - reset with any skip flag: apply credentials on the existing document,
      then clear each of accounts/tokens/scripts that is not skipped.

    A full rewrite ends an active recording session (the defaults carry
    `recording = 0`); so does clearing scripts, which would otherwise leave the
    session pointing at a script that no longer exists. Either case is
    reported through `SetupResult.recording_interrupted`.
    """

    def __init__(self, store: FileStateStore, credentials: Optional[CredentialManager] = None) -> None:
        self._store = store
        self._credentials = credentials or CredentialManager(store)

    def init(self, creds: OperatorCredentials) -> SetupResult:
        self._credentials.validate_credentials(creds)

        was_recording = self._store.get("recording") == 1
        self._store.save_state(State.default())
        state = self._credentials.apply_credentials(creds)

        if was_recording:
            logger.warning("state rewritten during an active recording session; recording stopped")
        return SetupResult(
            action=INIT,
            network=state.network,
            cleared=["accounts", "tokens", "scripts"],
            recording_interrupted=was_recording,
        )

    def reset(
        self,
        creds: OperatorCredentials,
        *,
        skip_accounts: bool = False,
        skip_tokens: bool = False,
        skip_scripts: bool = False,
    ) -> SetupResult:
        if not skip_accounts and not skip_tokens and not skip_scripts:
            logger.info("resetting CLI to default settings")
            result = self.init(creds)
            result.action = RESET
            return result

        self._credentials.validate_credentials(creds)
        state = self._credentials.apply_credentials(creds)

        cleared: List[str] = []
        if not skip_accounts:
            self._store.save_key("accounts", {})
            cleared.append("accounts")
        if not skip_tokens:
            self._store.save_key("tokens", {})
            cleared.append("tokens")

        interrupted = False
        if not skip_scripts:
            interrupted = state.recording == 1
            state = self._store.get_all()
            state.scripts = {}
            if interrupted:
                state.recording = 0
                state.recording_script_name = ""
                logger.warning("scripts cleared during an active recording session; recording stopped")
            self._store.save_state(state)
            cleared.append("scripts")

        return SetupResult(
            action=RESET,
            network=state.network,
            cleared=cleared,
            recording_interrupted=interrupted,
        )


def run_setup(
    store: FileStateStore,
    action: str,
    *,
    env_path: Optional[str] = None,
    skip_accounts: bool = False,
    skip_tokens: bool = False,
    skip_scripts: bool = False,
) -> SetupResult:
    """Load the .env credentials and run `action` ("init" or "reset")."""
    creds = load_operator_credentials(env_path)
    orchestrator = SetupOrchestrator(store)
    if action == INIT:
        return orchestrator.init(creds)
    if action == RESET:
        return orchestrator.reset(
            creds,
            skip_accounts=skip_accounts,
            skip_tokens=skip_tokens,
            skip_scripts=skip_scripts,
        )
    raise ValueError(f"Unknown setup action: {action}")


__all__ = [
    "SetupOrchestrator",
    "SetupResult",
    "run_setup",
]
