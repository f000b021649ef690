"""Command-line interface for hcli."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Sequence

from common.accounts import AccountResolver
from common.credentials import CredentialManager
from common.errors import StateCLIError, StateUnavailableError
from common.recorder import CommandRecorder
from setup_flow.handler import INIT, RESET, SetupResult, run_setup
from state.file_store import FileStateStore
from state.models import Network

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_STATE_ERROR = 2

# Commands that manage the recording session are never recorded themselves
_UNRECORDED_COMMANDS = {"record"}

# Options accepted before the subcommand
_GLOBAL_OPTIONS_WITH_VALUE = ("--state-file", "--env-file")
_GLOBAL_FLAGS = ("-v", "--verbose")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hcli", allow_abbrev=False)
    parser.add_argument(
        "--state-file",
        default=None,
        help="Path to the state document (default: $HCLI_STATE_PATH or ~/.hedera/state.json)",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to the operator .env file (default: $HCLI_ENV_FILE or ~/.hedera/.env)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    setup = sub.add_parser("setup", help="Setup the CLI")
    setup_sub = setup.add_subparsers(dest="setup_command", required=True)
    setup_sub.add_parser("init", help="Setup the CLI with operator key and ID")
    reset = setup_sub.add_parser("reset", help="Reset the CLI to default settings")
    reset.add_argument("-a", "--skip-accounts", action="store_true", help="Skip resetting accounts")
    reset.add_argument("-t", "--skip-tokens", action="store_true", help="Skip resetting tokens")
    reset.add_argument("-s", "--skip-scripts", action="store_true", help="Skip resetting scripts")

    network = sub.add_parser("network", help="Inspect or switch the active network")
    network_sub = network.add_subparsers(dest="network_command", required=True)
    network_use = network_sub.add_parser("use", help="Switch the active network")
    network_use.add_argument("name", help=f"One of: {', '.join(Network.names())}")
    network_sub.add_parser("show", help="Show the active network and mirror node")

    account = sub.add_parser("account", help="Inspect stored accounts")
    account_sub = account.add_subparsers(dest="account_command", required=True)
    account_show = account_sub.add_parser("show", help="Show an account by id or alias")
    account_show.add_argument("id_or_alias")

    record = sub.add_parser("record", help="Record commands into a script")
    record_sub = record.add_subparsers(dest="record_command", required=True)
    record_start = record_sub.add_parser("start", help="Start recording into a script")
    record_start.add_argument("name")
    record_sub.add_parser("stop", help="Stop the active recording")

    return parser


def _print_error(stderr, prefix: str, message: str, *, code: int) -> int:
    print(f"{prefix}: {message}", file=stderr)
    return code


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _command_tokens(argv: Sequence[str]) -> List[str]:
    # Drop global options so the recorded line replays against any state file.
    tokens = list(argv)
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if tok in _GLOBAL_OPTIONS_WITH_VALUE:
            i += 2
        elif tok.startswith(tuple(f"{opt}=" for opt in _GLOBAL_OPTIONS_WITH_VALUE)) or tok in _GLOBAL_FLAGS:
            i += 1
        else:
            break
    return tokens[i:]


def _print_setup_result(result: SetupResult, *, stdout, stderr) -> None:
    if result.recording_interrupted:
        print("warning: an active recording session was stopped by this command", file=stderr)
    if result.action == RESET and result.cleared:
        print(f"Reset complete; cleared: {', '.join(result.cleared)}", file=stdout)
    elif result.action == RESET:
        print("Reset complete; operator credentials re-applied", file=stdout)
    else:
        print("Setup complete", file=stdout)
    print(f"Active network: {result.network}", file=stdout)


def _run_setup(*, args, store: FileStateStore, stdout, stderr) -> int:
    if args.setup_command == INIT:
        result = run_setup(store, INIT, env_path=args.env_file)
    else:
        result = run_setup(
            store,
            RESET,
            env_path=args.env_file,
            skip_accounts=args.skip_accounts,
            skip_tokens=args.skip_tokens,
            skip_scripts=args.skip_scripts,
        )
    _print_setup_result(result, stdout=stdout, stderr=stderr)
    return EXIT_SUCCESS


def _run_network(*, args, store: FileStateStore, stdout) -> int:
    manager = CredentialManager(store)
    if args.network_command == "use":
        network = manager.switch_network(args.name)
        print(f"Switched to {network.value}", file=stdout)
        return EXIT_SUCCESS

    network = manager.active_network()
    print(f"network: {network.value}", file=stdout)
    print(f"mirror node: {manager.mirror_node_url()}", file=stdout)
    return EXIT_SUCCESS


def _run_account_show(*, args, store: FileStateStore, stdout) -> int:
    account = AccountResolver(store).resolve_by_id_or_alias(args.id_or_alias)
    payload = account.model_dump(mode="json", by_alias=True, exclude={"private_key"})
    print(json.dumps(payload, indent=2, sort_keys=True), file=stdout)
    return EXIT_SUCCESS


def _run_record(*, args, recorder: CommandRecorder, stdout) -> int:
    if args.record_command == "start":
        recorder.start_recording(args.name)
        print(f"Recording into script {args.name!r}", file=stdout)
        return EXIT_SUCCESS

    name = recorder.stop_recording()
    print(f"Stopped recording script {name!r}", file=stdout)
    return EXIT_SUCCESS


def _dispatch(*, args, argv: Sequence[str], store: FileStateStore, stdout, stderr) -> int:
    recorder = CommandRecorder(store)
    if args.command not in _UNRECORDED_COMMANDS:
        recorder.record_command(_command_tokens(argv))

    if args.command == "setup":
        return _run_setup(args=args, store=store, stdout=stdout, stderr=stderr)
    if args.command == "network":
        return _run_network(args=args, store=store, stdout=stdout)
    if args.command == "account":
        return _run_account_show(args=args, store=store, stdout=stdout)
    if args.command == "record":
        return _run_record(args=args, recorder=recorder, stdout=stdout)
    return _print_error(stderr, "usage error", f"unknown command {args.command}", code=EXIT_VALIDATION_ERROR)


def main(argv: Sequence[str] | None = None, *, stdout=sys.stdout, stderr=sys.stderr) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        store = FileStateStore.from_env(args.state_file)
        return _dispatch(args=args, argv=argv, store=store, stdout=stdout, stderr=stderr)
    except StateUnavailableError as exc:
        return _print_error(stderr, "state error", str(exc), code=EXIT_STATE_ERROR)
    except StateCLIError as exc:
        return _print_error(stderr, f"{args.command} error", str(exc), code=EXIT_VALIDATION_ERROR)


if __name__ == "__main__":
    raise SystemExit(main())
