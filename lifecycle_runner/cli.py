"""CLI entry point for lifecycle-runner.

    lifecycle-runner run suites/ [options]
    lifecycle-runner validate suites/
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

import click
import requests

from . import __version__
from .config import RunConfig, load_config
from .declaration.filter import filter_tree
from .declaration.loader import load_suites
from .declaration.validator import validate_tree
from .errors import LifecycleError
from .reporting.console_reporter import ConsoleReporter
from .reporting.json_reporter import JsonReporter
from .runner.executor import Runner
from .transport.http_publisher import ReportPublisher

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

LOAD_ERRORS = (LifecycleError, FileNotFoundError, ValueError, re.error)


@click.group()
@click.version_option(__version__, prog_name="lifecycle-runner")
@click.option("-v", "--verbose", is_flag=True, help="Log hook and case execution.")
def main(verbose: bool) -> None:
    """Run nested test suites with lifecycle hooks."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("run")
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="YAML rc file.")
@click.option("--timeout", "timeout_ms", type=click.IntRange(min=0), help="Async timeout in ms (0 disables).")
@click.option("--grep", help="Only run cases whose title matches this regex.")
@click.option("--invert", is_flag=True, help="Invert --grep.")
@click.option("--reporter", type=click.Choice(["tree", "json"]), help="Output format.")
@click.option("--save-report", is_flag=True, help="Save the JSON report to a file.")
@click.option("--report-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory for saved reports.")
@click.option("--report-url", help="POST the JSON report to this URL.")
@click.option("--no-color", is_flag=True, help="Disable colors in tree output.")
@click.pass_context
def run_command(
    ctx: click.Context,
    paths: tuple[str, ...],
    config_path: Optional[str],
    invert: bool,
    save_report: bool,
    no_color: bool,
    **overrides: Any,
) -> None:
    """Run the suites found in PATHS (files or directories)."""
    # Flags only ever switch an rc file setting on (or color off)
    overrides["invert"] = True if invert else None
    overrides["save_report"] = True if save_report else None
    overrides["color"] = False if no_color else None
    reporter = overrides.get("reporter")
    try:
        config = load_config(config_path).with_overrides(**overrides)
        reporter = config.reporter
        suite_paths = list(paths) or config.suite_paths
        if not suite_paths:
            raise ValueError("No suite paths given (pass PATHS or set 'paths' in the rc file)")

        roots = load_suites(suite_paths)
        if config.grep:
            roots = filter_tree(roots, config.grep, config.invert)

        listeners = [ConsoleReporter(color=config.color)] if config.reporter == "tree" else []
        report = Runner(config, listeners).run(roots)

    except LOAD_ERRORS as e:
        _output_error(str(e), reporter)
        ctx.exit(EXIT_USAGE)

    except KeyboardInterrupt:
        _output_error("Run interrupted by user", reporter)
        ctx.exit(EXIT_INTERRUPTED)

    json_reporter = JsonReporter()
    data = json_reporter.generate(report)

    report_path = None
    if config.save_report:
        report_path = _save_report(json_reporter, data, config)

    if config.report_url:
        _publish_report(data, config.report_url)

    if config.reporter == "json":
        summary = json_reporter.generate_summary(data, report_path, include_report=True)
        click.echo(json_reporter.to_json_string(summary, pretty=False))

    ctx.exit(EXIT_OK if report.all_passed else EXIT_FAILURES)


@main.command("validate")
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.pass_context
def validate_command(ctx: click.Context, paths: tuple[str, ...]) -> None:
    """Load the suites in PATHS and check the tree without running it."""
    try:
        roots = load_suites(paths)
    except LOAD_ERRORS as e:
        _output_error(str(e), "tree")
        ctx.exit(EXIT_USAGE)

    result = validate_tree(roots)
    cases = [case for root in roots for _, case in root.walk_cases()]
    pending = sum(1 for case in cases if case.is_pending)
    click.echo(f"{len(roots)} root suite(s), {len(cases)} case(s), {pending} pending")

    for issue in result.errors + result.warnings:
        click.echo(f"  [{issue.severity.upper()}] {issue.path}: {issue.message}")

    click.echo(str(result))
    ctx.exit(EXIT_OK if result.valid else EXIT_FAILURES)


def _save_report(reporter: JsonReporter, data: dict, config: RunConfig) -> Optional[str]:
    """Save the report; a failure is a warning, not an error."""
    report_dir = config.report_dir or Path(".")
    try:
        saved = reporter.save(data, report_dir / "lifecycle_report.json")
    except OSError as e:
        click.echo(f"Warning: Failed to save report: {e}", err=True)
        return None

    if config.reporter == "tree":
        click.echo(f"Report saved: {saved}")
    return str(saved)


def _publish_report(data: dict, url: str) -> None:
    """Publish the report; a failure is a warning, not an error."""
    try:
        with ReportPublisher(url) as publisher:
            publisher.publish(data)
    except (requests.RequestException, RuntimeError) as e:
        click.echo(f"Warning: Failed to publish report to {url}: {e}", err=True)


def _output_error(message: str, reporter: Optional[str]) -> None:
    if reporter == "json":
        output = {
            "success": False,
            "command": "run",
            "data": None,
            "message": message,
        }
        click.echo(json.dumps(output, ensure_ascii=False))
    else:
        click.echo(f"Error: {message}", err=True)


if __name__ == "__main__":
    main()
