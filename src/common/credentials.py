from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from state.file_store import FileStateStore
from state.models import Network, State

from .env_config import OperatorCredentials
from .errors import (
    IncompletePairError,
    InvalidNetworkError,
    MissingOperatorError,
    UnsupportedNetworkError,
)
from .network import OperatorIdentity, default_client_factory


logger = logging.getLogger(__name__)

ClientFactory = Callable[[Network, OperatorIdentity, str], Any]


def validate_pair(key: Optional[str], operator_id: Optional[str], *, network: str) -> None:
    """Raise IncompletePairError when exactly one of key/id is set.

    Both empty (network unconfigured) and both set are valid.
    """
    if bool(key) != bool(operator_id):
        raise IncompletePairError(network)


def operator_for(state: State, network: Network) -> OperatorIdentity:
    if network is Network.MAINNET:
        return OperatorIdentity(state.mainnet_operator_id, state.mainnet_operator_key)
    return OperatorIdentity(state.testnet_operator_id, state.testnet_operator_key)


def _parse_network(name: str) -> Optional[Network]:
    try:
        return Network(name)
    except ValueError:
        return None


class CredentialManager:
    """
    Installs operator credentials and selects the active network.

    - `apply_credentials` writes both pairs in a single save.
    - `switch_network` refuses a network without a complete operator pair.
    - `resolve_client` hands the active network's operator to the client
      factory; the factory is injected so no network code runs in tests.
    """

    def __init__(self, store: FileStateStore, *, client_factory: ClientFactory = default_client_factory) -> None:
        self._store = store
        self._client_factory = client_factory

    def validate_pair(self, key: Optional[str], operator_id: Optional[str], *, network: str) -> None:
        validate_pair(key, operator_id, network=network)

    def validate_credentials(self, creds: OperatorCredentials) -> None:
        validate_pair(creds.testnet_operator_key, creds.testnet_operator_id, network=Network.TESTNET.value)
        validate_pair(creds.mainnet_operator_key, creds.mainnet_operator_id, network=Network.MAINNET.value)

    def apply_credentials(self, creds: OperatorCredentials) -> State:
        """Write all four operator fields; returns the saved state.

        When testnet is entirely unconfigured the active network becomes
        mainnet; otherwise the current network choice is kept.
        """
        state = self._store.get_all()
        state.testnet_operator_id = creds.testnet_operator_id
        state.testnet_operator_key = creds.testnet_operator_key
        state.mainnet_operator_id = creds.mainnet_operator_id
        state.mainnet_operator_key = creds.mainnet_operator_key

        if creds.testnet_operator_key == "" and creds.testnet_operator_id == "":
            state.network = Network.MAINNET.value

        self._store.save_state(state)
        logger.debug("operator credentials applied; active network %s", state.network)
        return state

    def switch_network(self, name: str) -> Network:
        network = _parse_network(name)
        if network is None:
            raise InvalidNetworkError(
                f"Invalid network name: {name}. Available networks: {', '.join(Network.names())}"
            )

        state = self._store.get_all()
        operator = operator_for(state, network)
        if not operator.account_id or not operator.private_key:
            raise MissingOperatorError(network.value)

        self._store.save_key("network", network.value)
        logger.debug("switched active network to %s", network.value)
        return network

    def active_network(self, state: Optional[State] = None) -> Network:
        state = state if state is not None else self._store.get_all()
        network = _parse_network(state.network)
        if network is None:
            raise UnsupportedNetworkError(f"Unsupported network: {state.network}")
        return network

    def mirror_node_url(self) -> str:
        state = self._store.get_all()
        if state.network == Network.TESTNET.value:
            return state.mirror_node_testnet
        return state.mirror_node_mainnet

    def resolve_client(self) -> Any:
        state = self._store.get_all()
        network = self.active_network(state)
        operator = operator_for(state, network)
        if operator.account_id == "" or operator.private_key == "":
            raise MissingOperatorError(network.value)

        mirror = state.mirror_node_testnet if network is Network.TESTNET else state.mirror_node_mainnet
        return self._client_factory(network, operator, mirror)


__all__ = [
    "ClientFactory",
    "CredentialManager",
    "operator_for",
    "validate_pair",
]
