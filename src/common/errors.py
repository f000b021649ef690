"""Error types raised by the state-management commands."""

from __future__ import annotations

from state.file_store import StateUnavailableError


class StateCLIError(RuntimeError):
    """Base error for user-facing validation and lookup failures."""


class CredentialSourceError(StateCLIError):
    """The .env credential source is missing or unreadable."""


class IncompletePairError(StateCLIError):
    """Only one of an operator id/key pair is set."""

    def __init__(self, network: str) -> None:
        upper = network.upper()
        super().__init__(
            f"Both {upper}_OPERATOR_KEY and {upper}_OPERATOR_ID must be defined together"
        )
        self.network = network


class InvalidNetworkError(StateCLIError):
    """Network name is not one of the known networks."""


class UnsupportedNetworkError(InvalidNetworkError):
    """The persisted active network is not one of the known networks."""


class MissingOperatorError(StateCLIError):
    """Operator id or key is required for the network but not set."""

    def __init__(self, network: str) -> None:
        super().__init__(f"operator key and ID not set for {network}")
        self.network = network


class AccountNotFoundError(StateCLIError):
    """No account matches the given identifier or alias."""

    def __init__(self, id_or_alias: str) -> None:
        super().__init__(f"Account not found: {id_or_alias}")
        self.id_or_alias = id_or_alias


class TokenNotFoundError(StateCLIError):
    """No token with the given id is stored."""


class RecordingError(StateCLIError):
    """Recording session cannot be started, stopped, or appended to."""


class NetworkClientError(StateCLIError):
    """Transport or HTTP failure of the network client handle."""


__all__ = [
    "StateCLIError",
    "StateUnavailableError",
    "CredentialSourceError",
    "IncompletePairError",
    "InvalidNetworkError",
    "UnsupportedNetworkError",
    "MissingOperatorError",
    "AccountNotFoundError",
    "TokenNotFoundError",
    "RecordingError",
    "NetworkClientError",
]
