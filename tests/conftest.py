"""Shared pytest fixtures for lifecycle-runner tests."""

from pathlib import Path

import pytest

from lifecycle_runner.declaration import SuiteBuilder

SUITES_DIR = Path(__file__).resolve().parents[1] / "suites"


@pytest.fixture
def suites_dir() -> Path:
    """Directory holding the example suites."""
    return SUITES_DIR


@pytest.fixture
def builder() -> SuiteBuilder:
    return SuiteBuilder(source="test")


@pytest.fixture
def calls() -> list[str]:
    """Ordered log of hook and body invocations."""
    return []


@pytest.fixture
def track(calls):
    """Factory for callables that log a label and optionally raise."""

    def make(label: str, error: Exception = None):
        def _tracked():
            calls.append(label)
            if error is not None:
                raise error
        _tracked.__name__ = label.replace(":", "_")
        return _tracked

    return make
