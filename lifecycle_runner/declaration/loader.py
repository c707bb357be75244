"""Suite file discovery and loading.

Python suite modules define ``declare(builder)``; YAML suite files are handed
to the parser. Directories are searched (non-recursively) for both.
"""

import importlib.util
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Union

from ..errors import DeclarationError
from .builder import SuiteBuilder
from .parser import parse_suite_file
from .schema import Suite

_logger = logging.getLogger(__name__)

SUITE_SUFFIXES = (".py", ".yaml", ".yml")


def discover_suite_files(paths: Iterable[Union[str, Path]]) -> list[Path]:
    """Expand files and directories into an ordered list of suite files."""
    found: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            found.extend(
                p for p in sorted(path.iterdir())
                if p.is_file() and p.suffix in SUITE_SUFFIXES and not p.name.startswith("_")
            )
        elif path.exists():
            found.append(path)
        else:
            raise FileNotFoundError(f"Suite path not found: {path}")
    return found


def load_suites(paths: Iterable[Union[str, Path]]) -> list[Suite]:
    """Load root suites from every suite file under ``paths``, in order."""
    roots: list[Suite] = []
    for file_path in discover_suite_files(paths):
        _logger.debug("Loading suite file %s", file_path)
        if file_path.suffix == ".py":
            roots.extend(load_python_suites(file_path))
        else:
            with _importable(file_path.parent):
                roots.extend(parse_suite_file(file_path))
    return roots


def load_python_suites(file_path: Union[str, Path]) -> list[Suite]:
    """Import a Python suite module and run its ``declare(builder)``.

    Raises:
        DeclarationError: If importing the module or running ``declare`` fails,
            or the module has no ``declare``.
    """
    file_path = Path(file_path)
    module_name = f"_lifecycle_suite_{file_path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec is None or spec.loader is None:
        raise DeclarationError("Cannot load Python suite module", str(file_path))

    module = importlib.util.module_from_spec(spec)
    with _importable(file_path.parent):
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise DeclarationError(
                f"Cannot load suite module: {_describe(e)}", str(file_path)
            ) from e

    declare = getattr(module, "declare", None)
    if not callable(declare):
        raise DeclarationError(
            "Suite module must define declare(builder)", str(file_path)
        )

    builder = SuiteBuilder(source=str(file_path))
    try:
        declare(builder)
    except DeclarationError:
        raise
    except Exception as e:
        raise DeclarationError(
            f"declare(builder) failed: {_describe(e)}", str(file_path)
        ) from e
    return builder.build()


def _describe(error: Exception) -> str:
    message = str(error)
    return f"{type(error).__name__}: {message}" if message else type(error).__name__


@contextmanager
def _importable(directory: Path) -> Iterator[None]:
    """Make modules next to a suite file importable while it loads."""
    entry = str(directory.resolve())
    added = entry not in sys.path
    if added:
        sys.path.insert(0, entry)
    try:
        yield
    finally:
        if added and entry in sys.path:
            sys.path.remove(entry)
