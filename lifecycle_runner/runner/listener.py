"""Run listeners - observers notified while the runner walks the tree."""

from typing import Sequence

from ..declaration.schema import Suite
from .report import CaseRecord, HookDiagnostic, Report


class RunListener:
    """Base listener. Every callback is a no-op; override what you need."""

    def on_run_start(self, roots: Sequence[Suite]) -> None:
        pass

    def on_suite_start(self, suite: Suite, depth: int) -> None:
        pass

    def on_case_end(self, record: CaseRecord) -> None:
        pass

    def on_hook_failure(self, diagnostic: HookDiagnostic) -> None:
        pass

    def on_suite_end(self, suite: Suite, depth: int) -> None:
        pass

    def on_run_end(self, report: Report) -> None:
        pass
