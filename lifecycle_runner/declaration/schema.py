"""Suite tree data models.

Defines the dataclasses a declared test tree is made of: suites, cases and
the lifecycle hooks attached to suites.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Optional, Union


class HookKind(str, Enum):
    """Supported lifecycle hook kinds."""
    BEFORE_ALL = "before_all"
    AFTER_ALL = "after_all"
    BEFORE_EACH = "before_each"
    AFTER_EACH = "after_each"

    @property
    def label(self) -> str:
        """Camel-case name used in failure reasons (e.g. ``beforeAll``)."""
        head, tail = self.value.split("_")
        return head + tail.capitalize()


VALID_HOOK_KINDS = {e.value for e in HookKind}

# None marks a pending case.
CaseBody = Optional[Callable[..., Any]]


@dataclass
class Hook:
    """A setup or teardown callback owned by one suite."""
    kind: HookKind
    fn: Callable[..., Any]
    title: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.kind, str) and self.kind in VALID_HOOK_KINDS:
            self.kind = HookKind(self.kind)

    @property
    def display_name(self) -> str:
        name = self.title or getattr(self.fn, "__name__", "")
        if name and name != "<lambda>":
            return f'"{self.kind.label}" hook: {name}'
        return f'"{self.kind.label}" hook'


@dataclass
class Case:
    """A single named test with an optional body."""
    name: str
    body: CaseBody = None
    timeout_ms: Optional[int] = None

    @property
    def is_pending(self) -> bool:
        return self.body is None


@dataclass
class Suite:
    """A named, ordered group of cases and nested suites."""
    name: str
    children: list[Union["Suite", Case]] = field(default_factory=list)
    hooks: list[Hook] = field(default_factory=list)

    def hooks_of(self, kind: HookKind) -> list[Hook]:
        """Hooks of one kind, in registration order."""
        return [h for h in self.hooks if h.kind == kind]

    def walk_cases(
        self, prefix: tuple[str, ...] = ()
    ) -> Iterator[tuple[tuple[str, ...], Case]]:
        """Yield ``(path, case)`` for every case under this suite, depth-first.

        Children that are neither suites nor cases, and suites that would
        re-enter one of their ancestors, are skipped; validate_tree reports
        both.
        """
        yield from self._walk(prefix, frozenset())

    def _walk(
        self, prefix: tuple[str, ...], ancestors: frozenset[int]
    ) -> Iterator[tuple[tuple[str, ...], Case]]:
        ancestors = ancestors | {id(self)}
        path = prefix + (self.name,)
        for child in self.children:
            if isinstance(child, Suite):
                if id(child) not in ancestors:
                    yield from child._walk(path, ancestors)
            elif isinstance(child, Case):
                yield path + (child.name,), child

    @property
    def total_cases(self) -> int:
        return sum(1 for _ in self.walk_cases())


@dataclass
class TreeIssue:
    """A single problem found in a suite tree."""
    path: str
    message: str
    severity: str = "error"  # "error" or "warning"


@dataclass
class TreeValidationResult:
    """Result of suite tree validation."""
    valid: bool
    errors: list[TreeIssue] = field(default_factory=list)
    warnings: list[TreeIssue] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def __str__(self) -> str:
        if self.valid:
            msg = "Valid"
            if self.warnings:
                msg += f" ({self.warning_count} warnings)"
            return msg
        return f"Invalid: {self.error_count} errors, {self.warning_count} warnings"
