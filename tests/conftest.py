import os
import sys

import pytest


def pytest_configure():
    # `src/` holds the top-level packages (`state`, `common`, `setup_flow`, `cli`)
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    src_path = os.path.join(root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


@pytest.fixture(autouse=True)
def _isolate_cli_env(monkeypatch):
    # A developer's own state file, key or .env must never leak into tests
    for name in ("HCLI_STATE_PATH", "HCLI_FERNET_KEY", "HCLI_ENV_FILE"):
        monkeypatch.delenv(name, raising=False)
