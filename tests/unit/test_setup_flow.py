from __future__ import annotations

import pytest

from common.env_config import OperatorCredentials
from common.errors import CredentialSourceError, IncompletePairError
from setup_flow.handler import SetupOrchestrator, run_setup
from state.file_store import FileStateStore
from state.models import Account, Script, State, Token


MAINNET_ONLY = OperatorCredentials(mainnet_operator_id="0.0.2", mainnet_operator_key="mk")
BOTH = OperatorCredentials(
    testnet_operator_id="0.0.3",
    testnet_operator_key="tk",
    mainnet_operator_id="0.0.2",
    mainnet_operator_key="mk",
)


def _populated(**overrides) -> State:
    fields = dict(
        network="testnet",
        testnet_operator_id="0.0.30",
        testnet_operator_key="old-tk",
        mirror_node_testnet="https://custom-mirror",
        accounts={"alice": Account(account_id="0.0.1001", alias="alice")},
        tokens={"0.0.5005": Token(token_id="0.0.5005")},
        scripts={"demo": Script(commands=["network use testnet"])},
    )
    fields.update(overrides)
    return State(**fields)


@pytest.fixture()
def store(tmp_path) -> FileStateStore:
    s = FileStateStore(tmp_path / "state.json")
    s.save_state(_populated())
    return s


def test_init_writes_defaults_then_credentials(store):
    result = SetupOrchestrator(store).init(BOTH)

    state = store.get_all()
    expected = State(
        testnet_operator_id="0.0.3",
        testnet_operator_key="tk",
        mainnet_operator_id="0.0.2",
        mainnet_operator_key="mk",
    )
    assert state == expected
    assert result.network == "testnet"
    assert result.recording_interrupted is False


def test_init_without_testnet_selects_mainnet(store):
    SetupOrchestrator(store).init(MAINNET_ONLY)

    state = store.get_all()
    assert state.network == "mainnet"
    assert state.accounts == {}


def test_init_rejects_incomplete_pair_without_writing(store):
    before = store.path.read_bytes()

    with pytest.raises(IncompletePairError):
        SetupOrchestrator(store).init(OperatorCredentials(testnet_operator_key="tk"))

    assert store.path.read_bytes() == before


def test_reset_without_flags_equals_init(tmp_path, store):
    SetupOrchestrator(store).reset(BOTH)

    other = FileStateStore(tmp_path / "other.json")
    other.save_state(_populated(accounts={}, network="mainnet"))
    SetupOrchestrator(other).init(BOTH)

    assert store.get_all() == other.get_all()


def test_reset_skip_accounts_clears_tokens_and_scripts(store):
    result = SetupOrchestrator(store).reset(MAINNET_ONLY, skip_accounts=True)

    state = store.get_all()
    assert state.accounts["alice"].account_id == "0.0.1001"
    assert state.tokens == {}
    assert state.scripts == {}
    # credentials re-applied on the existing document
    assert state.mainnet_operator_id == "0.0.2"
    assert state.testnet_operator_id == ""
    assert state.network == "mainnet"
    assert state.mirror_node_testnet == "https://custom-mirror"
    assert result.cleared == ["tokens", "scripts"]


def test_reset_skip_tokens_and_scripts(store):
    SetupOrchestrator(store).reset(BOTH, skip_tokens=True, skip_scripts=True)

    state = store.get_all()
    assert state.accounts == {}
    assert list(state.tokens) == ["0.0.5005"]
    assert state.scripts["demo"].commands == ["network use testnet"]


def test_reset_with_all_skip_flags_only_reapplies_credentials(store):
    result = SetupOrchestrator(store).reset(BOTH, skip_accounts=True, skip_tokens=True, skip_scripts=True)

    state = store.get_all()
    assert state == _populated(
        testnet_operator_id="0.0.3",
        testnet_operator_key="tk",
        mainnet_operator_id="0.0.2",
        mainnet_operator_key="mk",
    )
    assert result.cleared == []


def test_partial_reset_rejects_incomplete_pair_without_writing(store):
    before = store.path.read_bytes()

    with pytest.raises(IncompletePairError):
        SetupOrchestrator(store).reset(OperatorCredentials(mainnet_operator_id="0.0.2"), skip_accounts=True)

    assert store.path.read_bytes() == before


def test_init_during_recording_reports_interruption(tmp_path):
    store = FileStateStore(tmp_path / "state.json")
    store.save_state(_populated(recording=1, recording_script_name="demo"))

    result = SetupOrchestrator(store).init(BOTH)

    assert result.recording_interrupted is True
    assert store.get("recording") == 0
    assert store.get("recording_script_name") == ""


def test_partial_reset_clearing_scripts_stops_recording(tmp_path):
    store = FileStateStore(tmp_path / "state.json")
    store.save_state(_populated(recording=1, recording_script_name="demo"))

    result = SetupOrchestrator(store).reset(BOTH, skip_accounts=True)

    assert result.recording_interrupted is True
    state = store.get_all()
    assert state.scripts == {}
    assert state.recording == 0


def test_partial_reset_keeping_scripts_keeps_recording(tmp_path):
    store = FileStateStore(tmp_path / "state.json")
    store.save_state(_populated(recording=1, recording_script_name="demo"))

    result = SetupOrchestrator(store).reset(BOTH, skip_scripts=True)

    assert result.recording_interrupted is False
    assert store.get("recording_script_name") == "demo"


def test_run_setup_reads_env_file(tmp_path):
    env = tmp_path / ".env"
    env.write_text("MAINNET_OPERATOR_ID=0.0.2\nMAINNET_OPERATOR_KEY=mk\n", encoding="utf-8")
    store = FileStateStore(tmp_path / "state.json")

    result = run_setup(store, "init", env_path=str(env))

    assert result.network == "mainnet"
    assert store.get("mainnet_operator_key") == "mk"


def test_run_setup_missing_env_file_writes_nothing(tmp_path):
    store = FileStateStore(tmp_path / "state.json")

    with pytest.raises(CredentialSourceError):
        run_setup(store, "init", env_path=str(tmp_path / "missing.env"))
    assert not store.path.exists()
