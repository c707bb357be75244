"""Exception types raised outside of a run.

Failures inside case bodies and hooks never surface as exceptions; they are
recorded in the report. Only declaration problems are raised.
"""

from typing import Optional


class LifecycleError(Exception):
    """Base class for lifecycle-runner errors."""


class DeclarationError(LifecycleError):
    """A suite, case or hook was declared incorrectly."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{message} ({source})"
        super().__init__(message)


class MalformedTreeError(LifecycleError):
    """The suite tree handed to the runner failed validation."""

    def __init__(self, issues: list):
        self.issues = issues
        details = "; ".join(f"{i.path}: {i.message}" for i in issues)
        super().__init__(f"Malformed suite tree: {details}")
