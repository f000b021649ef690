from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional
from uuid import uuid4

from cryptography.fernet import Fernet, InvalidToken
from pydantic import ValidationError

from .models import State, StateKey


# Environment variable names for convenience configuration
ENV_STATE_PATH = "HCLI_STATE_PATH"
ENV_FERNET_KEY = "HCLI_FERNET_KEY"

DEFAULT_STATE_DIR = Path.home() / ".hedera"
DEFAULT_STATE_FILE = "state.json"


class StateUnavailableError(RuntimeError):
    """Raised when the state document cannot be read, decoded or written."""


def _to_fernet(key: str | bytes) -> Fernet:
    """Construct a Fernet instance from a user-provided key.

    The key must be a URL-safe base64-encoded 32-byte key (str or bytes),
    as returned by `cryptography.fernet.Fernet.generate_key()`.
    """
    if isinstance(key, str):
        key_bytes = key.encode("utf-8")
    else:
        key_bytes = key
    return Fernet(key_bytes)


def _dump_state_json(state: State) -> bytes:
    # Deterministic JSON: stable key order so diffs of the file stay readable
    return json.dumps(state.to_document(), indent=2, sort_keys=True).encode("utf-8")


def _load_state_json(data: bytes) -> State:
    raw = json.loads(data.decode("utf-8"))
    return State.model_validate(raw)


def _getenv(name: str) -> Optional[str]:
    val = os.environ.get(name)
    return val if val not in (None, "") else None


class FileStateStore:
    """
    Local file persistence for `State`, optionally encrypted at rest with Fernet.

    Usage
    - `get_all()` returns the whole document. A missing file yields
      `State.default()`; an unreadable or corrupt one raises
      `StateUnavailableError`.
    - `get(key)` returns one top-level field.
    - `save_key(key, value)` replaces one top-level field and keeps the rest.
    - `save_state(state)` replaces the whole document.

    Every save writes a temp file next to the target and renames it over the
    target, so readers see either the previous or the new document, never a
    partial one. The store holds no cache: each read goes to disk.

    Environment variables (optional)
    - `HCLI_STATE_PATH`: path of the state file (default `~/.hedera/state.json`)
    - `HCLI_FERNET_KEY`: urlsafe base64-encoded key for Fernet
    """

    def __init__(self, path: os.PathLike[str] | str, *, fernet_key: str | bytes | None = None) -> None:
        self._path = Path(path)
        self._fernet = None
        if fernet_key:
            try:
                self._fernet = _to_fernet(fernet_key)
            except ValueError as ex:
                raise StateUnavailableError(f"Invalid Fernet key for state file {self._path}: {ex}") from ex

    # -------- Construction helpers --------
    @classmethod
    def from_env(cls, path: os.PathLike[str] | str | None = None) -> "FileStateStore":
        resolved = path or _getenv(ENV_STATE_PATH) or DEFAULT_STATE_DIR / DEFAULT_STATE_FILE
        return cls(resolved, fernet_key=_getenv(ENV_FERNET_KEY))

    @property
    def path(self) -> Path:
        return self._path

    @property
    def encrypted(self) -> bool:
        return self._fernet is not None

    # -------- Reads --------
    def get_all(self) -> State:
        try:
            body = self._path.read_bytes()
        except FileNotFoundError:
            return State.default()
        except OSError as ex:
            raise StateUnavailableError(f"Failed to read state file {self._path}: {ex}") from ex

        if self._fernet is not None:
            try:
                body = self._fernet.decrypt(body)
            except InvalidToken as ex:
                raise StateUnavailableError("Failed to decrypt state: invalid Fernet token") from ex

        try:
            return _load_state_json(body)
        except (ValueError, ValidationError) as ex:
            raise StateUnavailableError(f"Failed to parse state file {self._path}") from ex

    def get(self, key: StateKey) -> Any:
        _check_key(key)
        return getattr(self.get_all(), key)

    # -------- Writes --------
    def save_key(self, key: StateKey, value: Any) -> State:
        """Persist a single top-level field; returns the saved document."""
        _check_key(key)
        data = self.get_all().model_dump()
        data[key] = value
        state = State.model_validate(data)
        self.save_state(state)
        return state

    def save_state(self, state: State) -> None:
        payload = _dump_state_json(state)
        if self._fernet is not None:
            payload = self._fernet.encrypt(payload)
        self._atomic_write(payload)

    def _atomic_write(self, payload: bytes) -> None:
        temp_path = self._path.with_name(f"{self._path.name}.tmp-{uuid4().hex}")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # Owner-only: the document carries operator private keys
            fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self._path)
        except OSError as ex:
            raise StateUnavailableError(f"Failed to write state file {self._path}: {ex}") from ex
        finally:
            temp_path.unlink(missing_ok=True)


def _check_key(key: str) -> None:
    if key not in State.model_fields:
        raise KeyError(f"Unknown state key: {key}")


__all__ = [
    "FileStateStore",
    "StateUnavailableError",
    "ENV_STATE_PATH",
    "ENV_FERNET_KEY",
]
