"""Runner module - lifecycle execution and run reports."""

from .completion import CompletionError, CompletionTimeout, DoneCallback
from .executor import Runner, format_reason, run
from .listener import RunListener
from .report import CaseRecord, HookDiagnostic, Outcome, OutcomeStatus, Report

__all__ = [
    "CompletionError",
    "CompletionTimeout",
    "DoneCallback",
    "Runner",
    "RunListener",
    "format_reason",
    "run",
    "CaseRecord",
    "HookDiagnostic",
    "Outcome",
    "OutcomeStatus",
    "Report",
]
