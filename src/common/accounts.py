from __future__ import annotations

import re
from typing import Optional

from state.file_store import FileStateStore
from state.models import Account

from .errors import AccountNotFoundError


# shard.realm.num, e.g. 0.0.1234
ACCOUNT_ID_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


def is_account_id(value: str) -> bool:
    return ACCOUNT_ID_PATTERN.fullmatch(value or "") is not None


class AccountResolver:
    """Look up stored accounts by network identifier or by local alias."""

    def __init__(self, store: FileStateStore) -> None:
        self._store = store

    def resolve_by_id(self, account_id: str) -> Optional[Account]:
        # ids are not unique across aliases; first match wins
        accounts = self._store.get("accounts")
        return next((a for a in accounts.values() if a.account_id == account_id), None)

    def resolve_by_alias(self, alias: str) -> Optional[Account]:
        return self._store.get("accounts").get(alias)

    def resolve_by_id_or_alias(self, id_or_alias: str) -> Account:
        """Resolve `id_or_alias` by the shape of the value.

        Anything shaped like an account id is looked up by id only, even when
        an alias with the same text exists. Everything else is an alias.
        Raises AccountNotFoundError when nothing matches.
        """
        if is_account_id(id_or_alias):
            account = self.resolve_by_id(id_or_alias)
        else:
            account = self.resolve_by_alias(id_or_alias)

        if account is None:
            raise AccountNotFoundError(id_or_alias)
        return account


__all__ = [
    "ACCOUNT_ID_PATTERN",
    "AccountResolver",
    "is_account_id",
]
