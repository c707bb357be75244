"""Console reporter - prints a nested, indented view of a run as it happens."""

from typing import IO, Optional, Sequence

import click

from ..declaration.schema import Suite
from ..runner.listener import RunListener
from ..runner.report import CaseRecord, HookDiagnostic, OutcomeStatus, Report

INDENT = "  "
PASS_MARK = "✔"


class ConsoleReporter(RunListener):
    """Streams suite titles and case results, then a failure summary."""

    def __init__(self, file: Optional[IO[str]] = None, color: bool = True):
        self.file = file
        self.color = color
        self._failures: list[CaseRecord] = []
        self._hook_failures: list[HookDiagnostic] = []

    def on_run_start(self, roots: Sequence[Suite]) -> None:
        self._failures = []
        self._hook_failures = []
        self._echo("")

    def on_suite_start(self, suite: Suite, depth: int) -> None:
        self._echo(f"{INDENT * (depth + 1)}{suite.name}")

    def on_case_end(self, record: CaseRecord) -> None:
        indent = INDENT * len(record.path)
        status = record.outcome.status

        if status == OutcomeStatus.PASSED:
            mark = self._style(PASS_MARK, fg="green")
            timing = f" ({record.duration_ms}ms)" if record.duration_ms >= 75 else ""
            self._echo(f"{indent}{mark} {self._style(record.name, dim=True)}{timing}")
        elif status == OutcomeStatus.PENDING:
            self._echo(f"{indent}{self._style('- ' + record.name, fg='cyan')}")
        else:
            self._failures.append(record)
            self._echo(f"{indent}{self._style(f'{len(self._failures)}) {record.name}', fg='red')}")

    def on_hook_failure(self, diagnostic: HookDiagnostic) -> None:
        self._hook_failures.append(diagnostic)
        label = f'"{diagnostic.hook_kind.label}" hook failed'
        self._echo(f"{INDENT * len(diagnostic.path)}{self._style(label, fg='red')}")

    def on_run_end(self, report: Report) -> None:
        self._echo("")
        self._echo(
            INDENT + self._style(f"{report.passed_count} passing", fg="green")
            + self._style(f" ({report.duration_ms}ms)", dim=True)
        )
        if report.failed_count:
            self._echo(INDENT + self._style(f"{report.failed_count} failing", fg="red"))
        if report.pending_count:
            self._echo(INDENT + self._style(f"{report.pending_count} pending", fg="cyan"))
        if self._hook_failures:
            self._echo(INDENT + self._style(f"{len(self._hook_failures)} hook failure(s)", fg="red"))

        for i, record in enumerate(self._failures, start=1):
            self._echo("")
            self._print_title(f"{i}) ", record.path)
            self._print_reason(record.outcome.reason or "")

        for diagnostic in self._hook_failures:
            self._echo("")
            self._print_title(f'"{diagnostic.hook_kind.label}" hook for ', diagnostic.path)
            self._print_reason(diagnostic.reason)

        self._echo("")

    def _print_title(self, lead: str, path: Sequence[str]) -> None:
        for depth, part in enumerate(path):
            prefix = lead if depth == 0 else " " * len(lead) + INDENT * depth
            suffix = ":" if depth == len(path) - 1 else ""
            self._echo(f"{INDENT}{prefix}{part}{suffix}")

    def _print_reason(self, reason: str) -> None:
        for line in reason.splitlines() or [""]:
            self._echo(f"{INDENT * 3}{self._style(line, fg='red')}")

    def _style(self, text: str, **styles) -> str:
        return click.style(text, **styles) if self.color else text

    def _echo(self, message: str) -> None:
        click.echo(message, file=self.file, color=self.color)
