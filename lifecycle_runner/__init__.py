"""Lifecycle runner - nested suites, lifecycle hooks and a deterministic runner."""

from .declaration import Case, Hook, HookKind, Suite, SuiteBuilder
from .errors import DeclarationError, LifecycleError, MalformedTreeError
from .runner import Outcome, OutcomeStatus, Report, Runner, run

__version__ = "0.1.0"

__all__ = [
    "Case",
    "Hook",
    "HookKind",
    "Suite",
    "SuiteBuilder",
    "DeclarationError",
    "LifecycleError",
    "MalformedTreeError",
    "Outcome",
    "OutcomeStatus",
    "Report",
    "Runner",
    "run",
]
