"""JSON report generator for run results.

Generates structured JSON reports from a run Report.
"""

import json
from pathlib import Path
from typing import Any, Optional

from ..runner.report import Report


class JsonReporter:
    """Generates JSON reports from run results."""

    def generate(self, report: Report, error: Optional[str] = None) -> dict[str, Any]:
        """Generate a JSON-ready report dictionary.

        Args:
            report: Report returned by the runner.
            error: Overall error message if the run could not complete.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        all_passed = report.all_passed and error is None

        return {
            "timestamp": report.started_at,
            "status": "passed" if all_passed else "failed",
            "summary": {
                "total": report.total_count,
                "passed": report.passed_count,
                "failed": report.failed_count,
                "pending": report.pending_count,
                "hook_failures": len(report.diagnostics),
                "duration_ms": report.duration_ms,
            },
            "records": [
                {
                    "path": list(r.path),
                    "status": r.outcome.status.value,
                    "reason": r.outcome.reason,
                    "duration_ms": r.duration_ms,
                }
                for r in report.records
            ],
            "diagnostics": [
                {
                    "path": list(d.path),
                    "hook": d.hook_kind.value,
                    "reason": d.reason,
                }
                for d in report.diagnostics
            ],
            "error": error,
        }

    def save(self, data: dict[str, Any], path: Path) -> Path:
        """Write a report dictionary as indented JSON, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json_string(data) + "\n", encoding="utf-8")
        return path

    def to_json_string(self, data: dict[str, Any], pretty: bool = True) -> str:
        """Serialize a report or summary; ``pretty=False`` gives a single line."""
        return json.dumps(data, indent=2 if pretty else None, ensure_ascii=False)

    def generate_summary(
        self,
        data: dict[str, Any],
        report_path: Optional[str] = None,
        include_report: bool = False,
    ) -> dict[str, Any]:
        """Generate a compact command-result envelope.

        With ``include_report`` the full report dictionary is nested under
        ``data.report``.

        {
            "success": bool,
            "command": "run",
            "data": { ... },
            "message": str
        }
        """
        summary = data["summary"]
        all_passed = data["status"] == "passed"

        payload: dict[str, Any] = {
            "total_tests": summary["total"],
            "passed": summary["passed"],
            "failed": summary["failed"],
            "pending": summary["pending"],
            "duration_ms": summary["duration_ms"],
        }

        if report_path:
            payload["report_path"] = report_path

        if include_report:
            payload["report"] = data

        if data.get("error"):
            message = f"Run failed: {data['error']}"
        elif summary["failed"]:
            message = f"{summary['failed']} of {summary['total']} tests failed"
        elif summary["hook_failures"]:
            message = f"{summary['hook_failures']} hook(s) failed"
        else:
            message = "All tests passed"

        return {
            "success": all_passed,
            "command": "run",
            "data": payload,
            "message": message,
        }
