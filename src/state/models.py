from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_MIRROR_NODE_TESTNET = "https://testnet.mirrornode.hedera.com/api/v1"
DEFAULT_MIRROR_NODE_MAINNET = "https://mainnet.mirrornode.hedera.com/api/v1"


class Network(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"

    @classmethod
    def names(cls) -> List[str]:
        return [n.value for n in cls]


class _Record(BaseModel):
    # camelCase on disk, snake_case in Python; unknown keys survive a round-trip
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Account(_Record):
    account_id: str = Field(alias="accountId")
    alias: str
    type: str = ""
    public_key: str = Field(default="", alias="publicKey")
    private_key: str = Field(default="", alias="privateKey")
    evm_address: str = Field(default="", alias="evmAddress")
    solidity_address: str = Field(default="", alias="solidityAddress")
    solidity_address_full: str = Field(default="", alias="solidityAddressFull")


class TokenAssociation(_Record):
    alias: str
    account_id: str = Field(alias="accountId")


class Token(_Record):
    token_id: str = Field(alias="tokenId")
    associations: List[TokenAssociation] = Field(default_factory=list)
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = None
    supply: Optional[int] = None
    treasury_id: Optional[str] = Field(default=None, alias="treasuryId")


class Script(_Record):
    commands: List[str] = Field(default_factory=list)


StateKey = Literal[
    "network",
    "testnet_operator_id",
    "testnet_operator_key",
    "mainnet_operator_id",
    "mainnet_operator_key",
    "mirror_node_testnet",
    "mirror_node_mainnet",
    "accounts",
    "tokens",
    "scripts",
    "recording",
    "recording_script_name",
]


class State(BaseModel):
    """
    The single persisted document of an installation.

    Fields
    - network: active network name. Kept as a plain string so a hand-edited
      document with an unknown value still loads; see `Network` for the
      accepted values.
    - {testnet,mainnet}_operator_{id,key}: operator identity per network. For
      each network both are empty or both are set.
    - mirror_node_{testnet,mainnet}: mirror node base URLs.
    - accounts: alias -> Account. Aliases are unique by construction; account
      ids are not, lookups by id take the first match.
    - tokens: token id -> Token.
    - scripts: script name -> Script.
    - recording / recording_script_name: active recording session. While
      recording == 1 the name references an entry in `scripts`.

    Notes
    - Serialized with `by_alias=True`, which yields the camelCase field names
      of the on-disk format (`testnetOperatorId`, `recordingScriptName`, ...).
    """

    model_config = ConfigDict(populate_by_name=True)

    network: str = Network.TESTNET.value
    testnet_operator_id: str = Field(default="", alias="testnetOperatorId")
    testnet_operator_key: str = Field(default="", alias="testnetOperatorKey")
    mainnet_operator_id: str = Field(default="", alias="mainnetOperatorId")
    mainnet_operator_key: str = Field(default="", alias="mainnetOperatorKey")
    mirror_node_testnet: str = Field(default=DEFAULT_MIRROR_NODE_TESTNET, alias="mirrorNodeTestnet")
    mirror_node_mainnet: str = Field(default=DEFAULT_MIRROR_NODE_MAINNET, alias="mirrorNodeMainnet")
    accounts: Dict[str, Account] = Field(default_factory=dict)
    tokens: Dict[str, Token] = Field(default_factory=dict)
    scripts: Dict[str, Script] = Field(default_factory=dict)
    recording: Literal[0, 1] = 0
    recording_script_name: str = Field(default="", alias="recordingScriptName")

    @classmethod
    def default(cls) -> "State":
        """Fresh document as written by `setup init`."""
        return cls()

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
