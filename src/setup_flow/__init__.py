from .handler import SetupOrchestrator, SetupResult, run_setup

__all__ = ["SetupOrchestrator", "SetupResult", "run_setup"]
