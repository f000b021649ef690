from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from state.models import Network

from .errors import NetworkClientError


@dataclass(frozen=True)
class OperatorIdentity:
    """Account id + private key that sign and pay for network requests."""

    account_id: str
    private_key: str = field(repr=False)


class NetworkClient:
    """
    Opaque client handle bound to one network and one operator identity.

    Notes
    - Owns an `httpx.Client` whose base URL is the network's mirror node;
      callers that pass their own client keep ownership of it.
    - `get_json` is the transport seam for the network-facing commands built
      on this handle (account, token and transaction commands). Query
      semantics live with those commands.
    """

    def __init__(
        self,
        network: Network,
        operator: OperatorIdentity,
        mirror_node_url: str,
        *,
        timeout: float = 15.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        if not mirror_node_url:
            raise ValueError("mirror_node_url is required")
        self.network = network
        self.operator = operator
        self.mirror_node_url = mirror_node_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=self.mirror_node_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "NetworkClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET `path` relative to the mirror node and decode the JSON body.

        Raises NetworkClientError on transport errors, non-2xx statuses and
        undecodable bodies.
        """
        try:
            resp = self._client.get(path, params=params)
        except (httpx.TimeoutException, httpx.TransportError) as exc:
            raise NetworkClientError(f"{self.network.value} request failed: {exc}") from exc
        if not resp.is_success:
            raise NetworkClientError(
                f"HTTP {resp.status_code} from {self.network.value} mirror node: {resp.text[:200]}"
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise NetworkClientError("Failed to parse JSON from mirror node") from exc


def default_client_factory(network: Network, operator: OperatorIdentity, mirror_node_url: str) -> NetworkClient:
    return NetworkClient(network, operator, mirror_node_url)


__all__ = [
    "NetworkClient",
    "OperatorIdentity",
    "default_client_factory",
]
