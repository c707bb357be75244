"""Declaration module - building, loading and checking suite trees."""

from .builder import SuiteBuilder
from .filter import filter_tree
from .loader import discover_suite_files, load_python_suites, load_suites
from .parser import parse_suite_data, parse_suite_file, resolve_reference
from .schema import (
    Case,
    CaseBody,
    Hook,
    HookKind,
    Suite,
    TreeIssue,
    TreeValidationResult,
)
from .validator import validate_tree

__all__ = [
    "Case",
    "CaseBody",
    "Hook",
    "HookKind",
    "Suite",
    "SuiteBuilder",
    "TreeIssue",
    "TreeValidationResult",
    "discover_suite_files",
    "filter_tree",
    "load_python_suites",
    "load_suites",
    "parse_suite_data",
    "parse_suite_file",
    "resolve_reference",
    "validate_tree",
]
