"""Lifecycle executor - runs a declared suite tree.

Walks suites depth-first in declaration order:
1. Run the suite's beforeAll hooks
2. For each case: beforeEach hooks (outermost suite first), body,
   afterEach hooks (outermost suite first, not reversed)
3. Recurse into nested suites
4. Run the suite's afterAll hooks

Failures in bodies and hooks are recorded in the report and never stop the
run. Only a malformed tree is raised, before anything executes.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Iterable, Optional, Sequence

from ..config import RunConfig
from ..declaration.schema import Case, HookKind, Suite
from ..declaration.validator import validate_tree
from ..errors import MalformedTreeError
from .completion import CompletionError, CompletionWaiter
from .listener import RunListener
from .report import CaseRecord, HookDiagnostic, Outcome, Report

_logger = logging.getLogger(__name__)


class Runner:
    """Executes suites, hooks and cases with a fixed ordering contract."""

    def __init__(
        self,
        config: Optional[RunConfig] = None,
        listeners: Optional[Iterable[RunListener]] = None,
    ):
        """Initialize the runner.

        Args:
            config: Run configuration (timeouts). Defaults to RunConfig().
            listeners: Observers notified as the run progresses.
        """
        self.config = config or RunConfig()
        self.listeners = list(listeners or [])
        self._waiter: Optional[CompletionWaiter] = None

    def run(self, roots: Sequence[Suite]) -> Report:
        """Run every root suite and return the report.

        Raises:
            MalformedTreeError: If the tree fails validation. Nothing is run.
        """
        validation = validate_tree(roots)
        if not validation.valid:
            raise MalformedTreeError(validation.errors)

        report = Report()
        start_time = time.monotonic()
        loop = asyncio.new_event_loop()
        self._waiter = CompletionWaiter(loop)
        self._emit("on_run_start", roots)

        try:
            for suite in roots:
                self._run_suite(suite, (), [], report)
        finally:
            self._waiter = None
            try:
                loop.run_until_complete(loop.shutdown_asyncgens())
            finally:
                loop.close()
            report.duration_ms = int((time.monotonic() - start_time) * 1000)

        _logger.debug(
            "Run finished: %d passed, %d failed, %d pending, %d diagnostics",
            report.passed_count,
            report.failed_count,
            report.pending_count,
            len(report.diagnostics),
        )
        self._emit("on_run_end", report)
        return report

    def _run_suite(
        self,
        suite: Suite,
        prefix: tuple[str, ...],
        ancestors: list[Suite],
        report: Report,
    ) -> None:
        path = prefix + (suite.name,)
        chain = ancestors + [suite]
        depth = len(prefix)
        self._emit("on_suite_start", suite, depth)

        failure = self._run_hooks(suite, HookKind.BEFORE_ALL, path)
        if failure is not None:
            reason = f"{HookKind.BEFORE_ALL.label} hook error: {failure}"
            _logger.debug("beforeAll failed in %s; failing %d cases", path, suite.total_cases)
            self._fail_children(suite, path, reason, report)
            if suite.total_cases == 0:
                self._diagnose(report, path, HookKind.BEFORE_ALL, failure)
        else:
            for child in suite.children:
                if isinstance(child, Suite):
                    self._run_suite(child, path, chain, report)
                elif child.is_pending:
                    self._record(report, CaseRecord(path + (child.name,), Outcome.pending()))
                else:
                    self._run_case(child, path, chain, report)

        for hook in suite.hooks_of(HookKind.AFTER_ALL):
            failure = self._call(hook.fn, self.config.timeout_ms, hook.display_name)
            if failure is not None:
                self._diagnose(report, path, HookKind.AFTER_ALL, failure)

        self._emit("on_suite_end", suite, depth)

    def _run_case(
        self,
        case: Case,
        prefix: tuple[str, ...],
        chain: list[Suite],
        report: Report,
    ) -> None:
        path = prefix + (case.name,)
        timeout_ms = case.timeout_ms if case.timeout_ms is not None else self.config.timeout_ms

        for suite in chain:
            for hook in suite.hooks_of(HookKind.BEFORE_EACH):
                failure = self._call(hook.fn, self.config.timeout_ms, hook.display_name)
                if failure is not None:
                    reason = f"{HookKind.BEFORE_EACH.label} hook error: {failure}"
                    self._record(report, CaseRecord(path, Outcome.failed(reason)))
                    return

        start_time = time.monotonic()
        failure = self._call(case.body, timeout_ms, " ".join(path))
        duration_ms = int((time.monotonic() - start_time) * 1000)
        outcome = Outcome.passed() if failure is None else Outcome.failed(failure)
        self._record(report, CaseRecord(path, outcome, duration_ms))

        for suite in chain:
            for hook in suite.hooks_of(HookKind.AFTER_EACH):
                failure = self._call(hook.fn, self.config.timeout_ms, hook.display_name)
                if failure is not None:
                    self._diagnose(report, path, HookKind.AFTER_EACH, failure)

    def _run_hooks(
        self, suite: Suite, kind: HookKind, path: tuple[str, ...]
    ) -> Optional[str]:
        """Run hooks of one kind in order, stopping at the first failure."""
        for hook in suite.hooks_of(kind):
            failure = self._call(hook.fn, self.config.timeout_ms, hook.display_name)
            if failure is not None:
                return failure
        return None

    def _fail_children(
        self, suite: Suite, path: tuple[str, ...], reason: str, report: Report
    ) -> None:
        """Record every case under ``suite`` as failed without running anything."""
        for child in suite.children:
            if isinstance(child, Suite):
                depth = len(path)
                self._emit("on_suite_start", child, depth)
                self._fail_children(child, path + (child.name,), reason, report)
                self._emit("on_suite_end", child, depth)
            else:
                self._record(report, CaseRecord(path + (child.name,), Outcome.failed(reason)))

    def _call(
        self, fn: Callable[..., Any], timeout_ms: int, name: str
    ) -> Optional[str]:
        """Invoke a body or hook. Returns a failure reason, or None on success."""
        _logger.debug("Running %s", name)
        try:
            self._waiter.invoke(fn, timeout_ms, name)
        except Exception as e:
            _logger.debug("%s failed: %s", name, e)
            return format_reason(e)
        return None

    def _record(self, report: Report, record: CaseRecord) -> None:
        report.add_record(record)
        self._emit("on_case_end", record)

    def _diagnose(
        self, report: Report, path: tuple[str, ...], kind: HookKind, reason: str
    ) -> None:
        diagnostic = HookDiagnostic(path=path, hook_kind=kind, reason=reason)
        report.add_diagnostic(diagnostic)
        self._emit("on_hook_failure", diagnostic)

    def _emit(self, event: str, *args: Any) -> None:
        for listener in self.listeners:
            getattr(listener, event)(*args)


def format_reason(error: BaseException) -> str:
    """Failure reason for an exception raised by a body or hook."""
    message = str(error)
    if isinstance(error, (AssertionError, CompletionError)) and message:
        return message
    if message:
        return f"{type(error).__name__}: {message}"
    return type(error).__name__


def run(
    roots: Sequence[Suite],
    config: Optional[RunConfig] = None,
    listeners: Optional[Iterable[RunListener]] = None,
) -> Report:
    """Run root suites with a fresh Runner."""
    return Runner(config=config, listeners=listeners).run(roots)
