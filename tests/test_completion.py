"""Tests for sync, awaitable and done-callback completion."""

import asyncio
import logging
import threading

from lifecycle_runner import OutcomeStatus, run
from lifecycle_runner.assertions import assert_strict_equal
from lifecycle_runner.config import RunConfig
from lifecycle_runner.runner.completion import expects_done


def run_single(builder, body, timeout_ms=None, config=None):
    with builder.describe("S"):
        builder.it("case", body, timeout_ms=timeout_ms)
    report = run(builder.build(), config=config)
    return report.outcome_of("S", "case")


class TestExpectsDone:
    def test_no_parameters(self):
        assert not expects_done(lambda: None)

    def test_one_required_parameter(self):
        def body(done):
            done()

        assert expects_done(body)

    def test_optional_parameter_is_not_done(self):
        def body(done=None):
            pass

        assert not expects_done(body)

    def test_bound_method(self):
        class Holder:
            def plain(self):
                pass

            def callback(self, done):
                pass

        assert not expects_done(Holder().plain)
        assert expects_done(Holder().callback)


class TestAwaitableBodies:
    def test_coroutine_body_is_awaited(self, builder, calls):
        async def body():
            await asyncio.sleep(0)
            calls.append("awaited")

        outcome = run_single(builder, body)

        assert outcome.status == OutcomeStatus.PASSED
        assert calls == ["awaited"]

    def test_coroutine_failure(self, builder):
        async def body():
            await asyncio.sleep(0)
            assert_strict_equal("a", "b")

        outcome = run_single(builder, body)

        assert outcome.status == OutcomeStatus.FAILED
        assert "'a' !== 'b'" in outcome.reason

    def test_slow_coroutine_times_out(self, builder):
        async def body():
            await asyncio.sleep(1)

        outcome = run_single(builder, body, timeout_ms=20)

        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.reason.startswith("Timeout of 20ms exceeded")

    def test_own_timeout_error_keeps_its_reason(self, builder):
        async def body():
            await asyncio.sleep(0)
            raise TimeoutError("socket read timed out")

        outcome = run_single(builder, body, timeout_ms=2000)

        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.reason == "TimeoutError: socket read timed out"

    def test_own_timeout_error_via_done(self, builder):
        def body(done):
            done(TimeoutError("socket read timed out"))

        outcome = run_single(builder, body, timeout_ms=2000)

        assert outcome.reason == "TimeoutError: socket read timed out"

    def test_zero_timeout_disables_limit(self, builder):
        async def body():
            await asyncio.sleep(0.05)

        outcome = run_single(builder, body, config=RunConfig(timeout_ms=0))

        assert outcome.status == OutcomeStatus.PASSED

    def test_async_hooks_are_awaited(self, builder, calls):
        async def setup():
            await asyncio.sleep(0)
            calls.append("setup")

        with builder.describe("S"):
            builder.before_each(setup)
            builder.it("case", lambda: calls.append("body"))

        run(builder.build())

        assert calls == ["setup", "body"]


class TestDoneCallbacks:
    def test_done_called_synchronously(self, builder):
        outcome = run_single(builder, lambda done: done())

        assert outcome.status == OutcomeStatus.PASSED

    def test_done_with_error_fails_case(self, builder):
        outcome = run_single(builder, lambda done: done(RuntimeError("bad")))

        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.reason == "RuntimeError: bad"

    def test_done_with_non_exception(self, builder):
        outcome = run_single(builder, lambda done: done("oops"))

        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.reason == "done() invoked with non-Error: 'oops'"

    def test_done_from_another_thread(self, builder):
        def body(done):
            threading.Timer(0.01, done).start()

        outcome = run_single(builder, body, timeout_ms=2000)

        assert outcome.status == OutcomeStatus.PASSED

    def test_done_never_called_times_out(self, builder):
        outcome = run_single(builder, lambda done: None, timeout_ms=20)

        assert outcome.status == OutcomeStatus.FAILED
        assert "Timeout of 20ms exceeded" in outcome.reason

    def test_second_done_is_ignored(self, builder, caplog):
        def body(done):
            done()
            done(RuntimeError("late"))

        with caplog.at_level(logging.WARNING, logger="lifecycle_runner.runner.completion"):
            outcome = run_single(builder, body)

        assert outcome.status == OutcomeStatus.PASSED
        assert "done() called multiple times" in caplog.text

    def test_done_and_awaitable_is_overspecified(self, builder):
        async def body(done):
            done()

        outcome = run_single(builder, body)

        assert outcome.status == OutcomeStatus.FAILED
        assert "overspecified" in outcome.reason

    def test_done_style_hook(self, builder, calls):
        def setup(done):
            calls.append("setup")
            done()

        with builder.describe("S"):
            builder.before_all(setup)
            builder.it("case", lambda: calls.append("body"))

        report = run(builder.build())

        assert calls == ["setup", "body"]
        assert report.all_passed
