"""Completion handling for case bodies and hooks.

A body completes in one of three ways:

- it returns a plain value (synchronous completion);
- it returns an awaitable, which is awaited on the runner's event loop;
- it accepts a ``done`` parameter and calls ``done()`` or ``done(error)``.

Exactly one completion is waited for per call, bounded by a timeout for the
two asynchronous styles.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional

_logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """A body signalled completion incorrectly or reported a failure via done()."""


class CompletionTimeout(CompletionError):
    """An asynchronous body did not complete in time."""

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Timeout of {timeout_ms}ms exceeded. "
            "Ensure done() is called or the returned awaitable completes."
        )


class DoneCallback:
    """The ``done`` handle passed to callback-style bodies.

    Safe to call from other threads. Only the first call settles the
    completion; later calls are logged and ignored.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, name: str = ""):
        self._loop = loop
        self._name = name
        self.future: asyncio.Future = loop.create_future()

    def __call__(self, error: Any = None) -> None:
        try:
            self._loop.call_soon_threadsafe(self._settle, error)
        except RuntimeError:
            _logger.warning("done() called for %s after the run finished", self._name or "body")

    def _settle(self, error: Any) -> None:
        if self.future.done():
            _logger.warning("done() called multiple times for %s", self._name or "body")
            return

        if error is None:
            self.future.set_result(None)
        elif isinstance(error, BaseException):
            self.future.set_exception(error)
        else:
            self.future.set_exception(CompletionError(f"done() invoked with non-Error: {error!r}"))


def expects_done(fn: Callable[..., Any]) -> bool:
    """Whether ``fn`` takes a required positional parameter (the done handle)."""
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return False

    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
        for p in params
    )


class CompletionWaiter:
    """Invokes bodies and waits for their single completion signal."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self._loop = loop

    def invoke(
        self,
        fn: Callable[..., Any],
        timeout_ms: int,
        name: str = "",
    ) -> None:
        """Call ``fn`` and block until it completes.

        Args:
            fn: Case body or hook callable.
            timeout_ms: Limit for asynchronous completion. 0 disables it.
            name: Label used in log messages.

        Raises:
            CompletionTimeout: If an asynchronous completion takes too long.
            CompletionError: If completion was signalled incorrectly.
            Exception: Whatever the body itself raised.
        """
        if expects_done(fn):
            done = DoneCallback(self._loop, name)
            result = fn(done)
            if inspect.isawaitable(result):
                _discard(result)
                raise CompletionError(
                    "Resolution method is overspecified. "
                    "Call done() or return an awaitable, not both."
                )
            self._wait(done.future, timeout_ms)
            return

        result = fn()
        if inspect.isawaitable(result):
            self._wait(result, timeout_ms)

    def _wait(self, awaitable: Awaitable[Any], timeout_ms: int) -> None:
        if timeout_ms and timeout_ms > 0:
            self._loop.run_until_complete(_bounded(awaitable, timeout_ms))
        else:
            self._loop.run_until_complete(awaitable)


async def _bounded(awaitable: Awaitable[Any], timeout_ms: int) -> Any:
    """Await ``awaitable``, failing with CompletionTimeout once the limit expires.

    A TimeoutError raised by the body itself is passed through unchanged.
    """
    scope = asyncio.timeout(timeout_ms / 1000)
    try:
        async with scope:
            return await awaitable
    except TimeoutError as e:
        if scope.expired():
            raise CompletionTimeout(timeout_ms) from e
        raise


def _discard(awaitable: Any) -> None:
    """Close an awaitable that will never be awaited."""
    close: Optional[Callable[[], None]] = getattr(awaitable, "close", None)
    if close is not None:
        close()
