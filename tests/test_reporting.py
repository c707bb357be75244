"""Tests for the JSON and console reporters."""

import io
import json

import pytest

from lifecycle_runner import HookKind, run
from lifecycle_runner.assertions import assert_strict_equal
from lifecycle_runner.reporting import ConsoleReporter, JsonReporter
from lifecycle_runner.runner import CaseRecord, HookDiagnostic, Outcome, Report


@pytest.fixture
def report():
    report = Report(duration_ms=12)
    report.add_record(CaseRecord(("S", "a"), Outcome.passed(), 3))
    report.add_record(CaseRecord(("S", "b"), Outcome.failed("1 !== 2")))
    report.add_record(CaseRecord(("S", "c"), Outcome.pending()))
    return report


class TestJsonReporter:
    def test_generate(self, report):
        data = JsonReporter().generate(report)

        assert data["status"] == "failed"
        assert data["summary"] == {
            "total": 3,
            "passed": 1,
            "failed": 1,
            "pending": 1,
            "hook_failures": 0,
            "duration_ms": 12,
        }
        assert data["records"][1] == {
            "path": ["S", "b"],
            "status": "failed",
            "reason": "1 !== 2",
            "duration_ms": 0,
        }
        assert data["error"] is None

    def test_diagnostics_fail_the_run(self):
        report = Report()
        report.add_record(CaseRecord(("S", "a"), Outcome.passed()))
        report.add_diagnostic(HookDiagnostic(("S", "a"), HookKind.AFTER_EACH, "leak"))
        reporter = JsonReporter()

        data = reporter.generate(report)
        summary = reporter.generate_summary(data)

        assert data["status"] == "failed"
        assert data["diagnostics"] == [{"path": ["S", "a"], "hook": "after_each", "reason": "leak"}]
        assert summary["success"] is False
        assert summary["message"] == "1 hook(s) failed"

    def test_summary_messages(self, report):
        reporter = JsonReporter()
        data = reporter.generate(report)

        summary = reporter.generate_summary(data, report_path="out/report.json")

        assert summary["success"] is False
        assert summary["command"] == "run"
        assert summary["message"] == "1 of 3 tests failed"
        assert summary["data"]["report_path"] == "out/report.json"
        assert "report" not in summary["data"]

    def test_summary_can_include_report(self, report):
        reporter = JsonReporter()
        data = reporter.generate(report)

        summary = reporter.generate_summary(data, include_report=True)

        assert summary["data"]["report"] is data

    def test_all_passed(self):
        report = Report()
        report.add_record(CaseRecord(("S", "a"), Outcome.passed()))
        reporter = JsonReporter()

        summary = reporter.generate_summary(reporter.generate(report))

        assert summary["success"] is True
        assert summary["message"] == "All tests passed"

    def test_error_overrides_status(self):
        reporter = JsonReporter()

        data = reporter.generate(Report(), error="interrupted")

        assert data["status"] == "failed"
        assert reporter.generate_summary(data)["message"] == "Run failed: interrupted"

    def test_save_and_serialize(self, report, tmp_path):
        reporter = JsonReporter()
        data = reporter.generate(report)

        saved = reporter.save(data, tmp_path / "nested" / "report.json")

        assert json.loads(saved.read_text(encoding="utf-8")) == data
        assert "\n" not in reporter.to_json_string(data, pretty=False)
        assert json.loads(reporter.to_json_string(data)) == data


class TestConsoleReporter:
    def test_streams_tree_and_failures(self, builder):
        with builder.describe("file to be tested"):
            with builder.context("function to be tested"):
                builder.after_each(lambda: None)
                builder.it("should do something", lambda: assert_strict_equal(1, 2))
                builder.it("should do something else", lambda: None)
                builder.pending("this is a pending test")
        out = io.StringIO()

        run(builder.build(), listeners=[ConsoleReporter(file=out, color=False)])

        lines = out.getvalue().splitlines()
        assert "  file to be tested" in lines
        assert "    function to be tested" in lines
        assert "      1) should do something" in lines
        assert "      ✔ should do something else" in lines
        assert "      - this is a pending test" in lines
        assert "  1 failing" in lines
        assert "  1 pending" in lines
        assert any(line.startswith("  1 passing (") for line in lines)
        assert "  1) file to be tested" in lines
        assert " " * 9 + "should do something:" in lines
        assert "      1 !== 2" in lines

    def test_hook_failures_are_listed(self, builder):
        def close():
            raise RuntimeError("busy")

        with builder.describe("S"):
            builder.after_all(close)
            builder.it("a", lambda: None)
        out = io.StringIO()

        run(builder.build(), listeners=[ConsoleReporter(file=out, color=False)])

        text = out.getvalue()
        assert '"afterAll" hook failed' in text
        assert "1 hook failure(s)" in text
        assert "RuntimeError: busy" in text
