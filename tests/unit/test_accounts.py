from __future__ import annotations

import pytest

from common.accounts import AccountResolver, is_account_id
from common.errors import AccountNotFoundError, TokenNotFoundError
from common.tokens import add_token_association
from state.file_store import FileStateStore
from state.models import Account, State, Token


@pytest.fixture()
def store(tmp_path) -> FileStateStore:
    s = FileStateStore(tmp_path / "state.json")
    s.save_state(
        State(
            accounts={
                "alice": Account(account_id="0.0.1001", alias="alice"),
                "alice-copy": Account(account_id="0.0.1001", alias="alice-copy"),
                "bob": Account(account_id="0.0.1002", alias="bob"),
                # an alias that looks like an id
                "0.0.1234": Account(account_id="0.0.9999", alias="0.0.1234"),
            },
            tokens={"0.0.5005": Token(token_id="0.0.5005")},
        )
    )
    return s


@pytest.mark.parametrize("value", ["0.0.1234", "1.2.3", "0.0.0"])
def test_is_account_id_accepts_shard_realm_num(value):
    assert is_account_id(value)


@pytest.mark.parametrize("value", ["alice", "0.0", "0.0.12a", "0.0.1234.5", "", "0.0.1234 "])
def test_is_account_id_rejects_other_shapes(value):
    assert not is_account_id(value)


def test_resolve_by_id_first_match(store):
    account = AccountResolver(store).resolve_by_id("0.0.1001")
    assert account is not None
    assert account.alias == "alice"


def test_resolve_by_alias(store):
    resolver = AccountResolver(store)
    assert resolver.resolve_by_alias("bob").account_id == "0.0.1002"
    assert resolver.resolve_by_alias("carol") is None
    assert resolver.resolve_by_id("0.0.4242") is None


def test_resolve_by_id_or_alias_dispatches_on_shape(store):
    resolver = AccountResolver(store)
    assert resolver.resolve_by_id_or_alias("0.0.1002").alias == "bob"
    assert resolver.resolve_by_id_or_alias("alice").account_id == "0.0.1001"


def test_id_shaped_input_never_falls_back_to_alias(store):
    with pytest.raises(AccountNotFoundError) as ei:
        AccountResolver(store).resolve_by_id_or_alias("0.0.1234")
    assert str(ei.value) == "Account not found: 0.0.1234"


def test_unknown_alias_raises(store):
    with pytest.raises(AccountNotFoundError):
        AccountResolver(store).resolve_by_id_or_alias("carol")


def test_add_token_association_appends_in_order(store):
    add_token_association(store, "0.0.5005", "0.0.1001", "alice")
    add_token_association(store, "0.0.5005", "0.0.1002", "bob")

    token = store.get("tokens")["0.0.5005"]
    assert [(a.alias, a.account_id) for a in token.associations] == [
        ("alice", "0.0.1001"),
        ("bob", "0.0.1002"),
    ]


def test_add_token_association_unknown_token(store):
    with pytest.raises(TokenNotFoundError):
        add_token_association(store, "0.0.7777", "0.0.1001", "alice")
