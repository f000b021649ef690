"""
State models and the local file store.

This package defines the schema of the single persisted document and the
store that reads and atomically replaces it on disk.
"""

from .models import Account, Network, Script, State, Token, TokenAssociation
from .file_store import FileStateStore, StateUnavailableError

__all__ = [
    "Account",
    "FileStateStore",
    "Network",
    "Script",
    "State",
    "StateUnavailableError",
    "Token",
    "TokenAssociation",
]
