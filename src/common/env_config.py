from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

from .errors import CredentialSourceError


ENV_ENV_FILE = "HCLI_ENV_FILE"
ENV_FILE_RELATIVE = Path(".hedera") / ".env"

TESTNET_OPERATOR_KEY = "TESTNET_OPERATOR_KEY"
TESTNET_OPERATOR_ID = "TESTNET_OPERATOR_ID"
MAINNET_OPERATOR_KEY = "MAINNET_OPERATOR_KEY"
MAINNET_OPERATOR_ID = "MAINNET_OPERATOR_ID"


@dataclass(frozen=True)
class OperatorCredentials:
    """Operator id/key pairs for both networks; empty string means unset."""

    testnet_operator_id: str = ""
    testnet_operator_key: str = ""
    mainnet_operator_id: str = ""
    mainnet_operator_key: str = ""

    def __repr__(self) -> str:
        # Keys stay out of reprs, logs and tracebacks
        return (
            "OperatorCredentials("
            f"testnet_operator_id={self.testnet_operator_id!r}, "
            f"testnet_operator_key={_mask(self.testnet_operator_key)!r}, "
            f"mainnet_operator_id={self.mainnet_operator_id!r}, "
            f"mainnet_operator_key={_mask(self.mainnet_operator_key)!r})"
        )


def _mask(secret: str) -> str:
    return "***" if secret else ""


def _getenv(name: str) -> Optional[str]:
    v = os.environ.get(name)
    return v if v not in (None, "") else None


def default_env_path() -> Path:
    """Resolve the credential file: `HCLI_ENV_FILE`, else `$HOME/.hedera/.env`."""
    explicit = _getenv(ENV_ENV_FILE)
    if explicit:
        return Path(explicit)
    home = _getenv("HOME")
    if home is None:
        raise CredentialSourceError("HOME environment variable is not defined")
    return Path(home) / ENV_FILE_RELATIVE


def load_operator_credentials(path: os.PathLike[str] | str | None = None) -> OperatorCredentials:
    """Read the four operator fields from a .env file.

    The file is parsed with python-dotenv without touching `os.environ`.
    Missing keys become empty strings; a missing or unreadable file raises
    `CredentialSourceError`.
    """
    env_path = Path(path) if path else default_env_path()
    if not env_path.is_file():
        raise CredentialSourceError(f"Error loading .env file: {env_path} not found")
    try:
        values = dotenv_values(env_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise CredentialSourceError(f"Error loading .env file: {exc}") from exc

    def _field(name: str) -> str:
        return values.get(name) or ""

    return OperatorCredentials(
        testnet_operator_id=_field(TESTNET_OPERATOR_ID),
        testnet_operator_key=_field(TESTNET_OPERATOR_KEY),
        mainnet_operator_id=_field(MAINNET_OPERATOR_ID),
        mainnet_operator_key=_field(MAINNET_OPERATOR_KEY),
    )


__all__ = [
    "OperatorCredentials",
    "default_env_path",
    "load_operator_credentials",
]
