"""Run report types.

Outcomes are created once per case and never modified; the report collects
them in execution order together with hook diagnostics.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from ..declaration.schema import HookKind


class OutcomeStatus(str, Enum):
    """Final status of a case."""
    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"


@dataclass(frozen=True)
class Outcome:
    """Result of running (or skipping) a single case."""
    status: OutcomeStatus
    reason: Optional[str] = None

    @classmethod
    def passed(cls) -> "Outcome":
        return cls(OutcomeStatus.PASSED)

    @classmethod
    def failed(cls, reason: str) -> "Outcome":
        return cls(OutcomeStatus.FAILED, reason)

    @classmethod
    def pending(cls) -> "Outcome":
        return cls(OutcomeStatus.PENDING)


@dataclass(frozen=True)
class CaseRecord:
    """A case's full path and its outcome."""
    path: tuple[str, ...]
    outcome: Outcome
    duration_ms: int = 0

    @property
    def name(self) -> str:
        return self.path[-1]

    @property
    def title(self) -> str:
        return " ".join(self.path)


@dataclass(frozen=True)
class HookDiagnostic:
    """A hook failure that is reported apart from case outcomes."""
    path: tuple[str, ...]
    hook_kind: HookKind
    reason: str


@dataclass
class Report:
    """All case outcomes and hook diagnostics of one run."""
    records: list[CaseRecord] = field(default_factory=list)
    diagnostics: list[HookDiagnostic] = field(default_factory=list)
    started_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    duration_ms: int = 0

    def add_record(self, record: CaseRecord) -> None:
        self.records.append(record)

    def add_diagnostic(self, diagnostic: HookDiagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def outcome_of(self, *path: str) -> Optional[Outcome]:
        """Look up a case outcome by its path."""
        for record in self.records:
            if record.path == path:
                return record.outcome
        return None

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for r in self.records if r.outcome.status == status)

    @property
    def passed_count(self) -> int:
        return self._count(OutcomeStatus.PASSED)

    @property
    def failed_count(self) -> int:
        return self._count(OutcomeStatus.FAILED)

    @property
    def pending_count(self) -> int:
        return self._count(OutcomeStatus.PENDING)

    @property
    def total_count(self) -> int:
        return len(self.records)

    @property
    def has_diagnostics(self) -> bool:
        return len(self.diagnostics) > 0

    @property
    def all_passed(self) -> bool:
        """True when no case failed and no hook reported a diagnostic."""
        return self.failed_count == 0 and not self.has_diagnostics
