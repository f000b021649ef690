from __future__ import annotations

from state.file_store import FileStateStore
from state.models import Token, TokenAssociation

from .errors import TokenNotFoundError


def add_token_association(store: FileStateStore, token_id: str, account_id: str, alias: str) -> Token:
    """Append an {alias, accountId} association to a stored token.

    Associations keep insertion order; duplicates are not filtered.
    """
    tokens = store.get("tokens")
    token = tokens.get(token_id)
    if token is None:
        raise TokenNotFoundError(f"Token not found: {token_id}")
    token.associations.append(TokenAssociation(alias=alias, account_id=account_id))
    tokens[token_id] = token
    store.save_key("tokens", tokens)
    return token
