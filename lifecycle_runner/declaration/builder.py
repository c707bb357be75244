"""Explicit builder for declaring suite trees.

The builder tracks the currently open suite so hooks and cases attach to it,
in the way ``describe``/``it`` blocks work in other runners, but the state
lives on the builder instance rather than in module globals:

    builder = SuiteBuilder()
    with builder.describe("math"):
        builder.before_each(reset)
        builder.it("adds", test_add)
        builder.pending("divides")
    roots = builder.build()
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from ..errors import DeclarationError
from .schema import Case, Hook, HookKind, Suite


class SuiteBuilder:
    """Builds a list of root suites from nested declarations."""

    def __init__(self, source: Optional[str] = None):
        """Initialize the builder.

        Args:
            source: Where the declarations come from, used in error messages.
        """
        self.source = source
        self._roots: list[Suite] = []
        self._stack: list[Suite] = []

    @property
    def current(self) -> Optional[Suite]:
        """The innermost open suite, or None at top level."""
        return self._stack[-1] if self._stack else None

    @contextmanager
    def describe(self, name: str) -> Iterator[Suite]:
        """Open a suite; everything declared inside the block belongs to it."""
        suite = Suite(name=name)
        if self.current is None:
            self._roots.append(suite)
        else:
            self.current.children.append(suite)

        self._stack.append(suite)
        try:
            yield suite
        finally:
            self._stack.pop()

    context = describe

    def it(self, name: str, body: Callable[..., Any], timeout_ms: Optional[int] = None) -> Case:
        """Declare a case with a body in the open suite."""
        if not callable(body):
            raise DeclarationError(
                f"Case '{name}' needs a callable body; use pending() for pending cases",
                self.source,
            )
        return self._add_case(Case(name=name, body=body, timeout_ms=timeout_ms))

    def pending(self, name: str) -> Case:
        """Declare a case with no body. It is reported as pending."""
        return self._add_case(Case(name=name))

    def skip(self, name: str, body: Optional[Callable[..., Any]] = None) -> Case:
        """Declare a case that is kept but not run. The body is discarded."""
        return self.pending(name)

    def before_all(self, fn: Callable[..., Any], title: Optional[str] = None) -> Hook:
        return self._add_hook(HookKind.BEFORE_ALL, fn, title)

    def after_all(self, fn: Callable[..., Any], title: Optional[str] = None) -> Hook:
        return self._add_hook(HookKind.AFTER_ALL, fn, title)

    def before_each(self, fn: Callable[..., Any], title: Optional[str] = None) -> Hook:
        return self._add_hook(HookKind.BEFORE_EACH, fn, title)

    def after_each(self, fn: Callable[..., Any], title: Optional[str] = None) -> Hook:
        return self._add_hook(HookKind.AFTER_EACH, fn, title)

    def build(self) -> list[Suite]:
        """Return the declared root suites.

        Raises:
            DeclarationError: If a describe block is still open.
        """
        if self._stack:
            raise DeclarationError(
                f"Suite '{self.current.name}' is still open; call build() outside describe blocks",
                self.source,
            )
        return list(self._roots)

    def _add_case(self, case: Case) -> Case:
        if self.current is None:
            raise DeclarationError(
                f"Case '{case.name}' declared outside of any suite", self.source
            )
        self.current.children.append(case)
        return case

    def _add_hook(
        self, kind: HookKind, fn: Callable[..., Any], title: Optional[str]
    ) -> Hook:
        if self.current is None:
            raise DeclarationError(
                f"'{kind.label}' hook declared outside of any suite", self.source
            )
        if not callable(fn):
            raise DeclarationError(
                f"'{kind.label}' hook in suite '{self.current.name}' is not callable",
                self.source,
            )
        hook = Hook(kind=kind, fn=fn, title=title)
        self.current.hooks.append(hook)
        return hook
