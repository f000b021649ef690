"""
Common services over the state document.

Modules:
- credentials: operator credential validation and network selection
- accounts: account lookup by id or alias
- recorder: command recording into scripts
- env_config: .env credential source
- network: client handle for the active network
"""

__all__ = [
    "accounts",
    "credentials",
    "env_config",
    "errors",
    "network",
    "recorder",
    "tokens",
]
