"""YAML suite parser.

Parses YAML suite files into Suite trees. Case bodies and hooks are given as
``module:attribute`` import references:

    suite: User model
    hooks:
      before_each: [myproject.fixtures:reset_db]
    children:
      - case: requires a name
        body: myproject.checks:requires_name
      - case: not written yet
"""

import importlib
from pathlib import Path
from typing import Any, Callable, Union

import yaml

from ..errors import DeclarationError
from .schema import Case, Hook, HookKind, Suite, VALID_HOOK_KINDS


def parse_suite_file(file_path: Union[str, Path]) -> list[Suite]:
    """Parse a YAML suite file into root suites.

    Args:
        file_path: Path to the YAML file.

    Returns:
        Root suites declared in the file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        DeclarationError: If the YAML is malformed or a reference can't be resolved.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Suite file not found: {file_path}")

    if file_path.suffix not in (".yaml", ".yml"):
        raise DeclarationError(f"Expected .yaml or .yml file, got: {file_path.suffix}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DeclarationError(f"Invalid YAML: {e}", str(file_path)) from e

    if data is None:
        raise DeclarationError("Empty suite file", str(file_path))

    return parse_suite_data(data, source=str(file_path))


def parse_suite_data(data: Any, source: str = "<inline>") -> list[Suite]:
    """Parse root suites from already-loaded YAML data.

    The document is either a single suite mapping or ``{"suites": [...]}``.
    """
    if not isinstance(data, dict):
        raise DeclarationError(
            f"Suite document must be a YAML mapping, got {type(data).__name__}", source
        )

    if "suites" in data:
        suites_data = data["suites"]
        if not isinstance(suites_data, list):
            raise DeclarationError("'suites' must be a list", source)
        return [
            _parse_suite(s, f"suites[{i}]", source)
            for i, s in enumerate(suites_data)
        ]

    return [_parse_suite(data, "suite", source)]


def resolve_reference(reference: str, source: str = "<inline>") -> Callable[..., Any]:
    """Import ``package.module:attr`` and return the callable it names."""
    if not isinstance(reference, str) or ":" not in reference:
        raise DeclarationError(
            f"Invalid reference {reference!r}; expected 'module:attribute'", source
        )

    module_name, _, attr_path = reference.partition(":")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise DeclarationError(f"Cannot import '{module_name}': {e}", source) from e
    except Exception as e:
        raise DeclarationError(
            f"Error while importing '{module_name}': {type(e).__name__}: {e}", source
        ) from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise DeclarationError(
                f"'{module_name}' has no attribute '{attr_path}'", source
            ) from e

    if not callable(target):
        raise DeclarationError(f"'{reference}' is not callable", source)
    return target


def _parse_suite(data: Any, context: str, source: str) -> Suite:
    if not isinstance(data, dict):
        raise DeclarationError(f"{context} must be a mapping", source)
    _require_fields(data, ["suite"], context, source)

    suite = Suite(name=_name(data, "suite", context, source))
    suite.hooks = _parse_hooks(data.get("hooks", {}), context, source)

    children_data = data.get("children", [])
    if not isinstance(children_data, list):
        raise DeclarationError(f"'children' must be a list in {context}", source)

    for i, child in enumerate(children_data):
        child_context = f"{context}.children[{i}]"
        if isinstance(child, dict) and "suite" in child:
            suite.children.append(_parse_suite(child, child_context, source))
        elif isinstance(child, dict) and "case" in child:
            suite.children.append(_parse_case(child, child_context, source))
        else:
            raise DeclarationError(
                f"{child_context} must be a mapping with 'suite' or 'case'", source
            )

    return suite


def _parse_case(data: dict, context: str, source: str) -> Case:
    body = None
    if data.get("body") is not None:
        body = resolve_reference(data["body"], source)

    timeout = data.get("timeout")
    if timeout is not None and (not isinstance(timeout, int) or isinstance(timeout, bool)):
        raise DeclarationError(f"'timeout' must be an integer in {context}", source)

    return Case(name=_name(data, "case", context, source), body=body, timeout_ms=timeout)


def _name(data: dict, key: str, context: str, source: str) -> str:
    value = data[key]
    if value is None or isinstance(value, (dict, list)):
        raise DeclarationError(f"'{key}' must be a name in {context}", source)
    return str(value)


def _parse_hooks(data: Any, context: str, source: str) -> list[Hook]:
    if not isinstance(data, dict):
        raise DeclarationError(f"'hooks' must be a mapping in {context}", source)

    hooks = []
    for kind, refs in data.items():
        if kind not in VALID_HOOK_KINDS:
            raise DeclarationError(
                f"Invalid hook kind '{kind}' in {context}. Must be one of: "
                f"{', '.join(sorted(VALID_HOOK_KINDS))}",
                source,
            )
        if isinstance(refs, str):
            refs = [refs]
        if not isinstance(refs, list):
            raise DeclarationError(f"'hooks.{kind}' must be a list in {context}", source)
        for ref in refs:
            hooks.append(Hook(kind=HookKind(kind), fn=resolve_reference(ref, source), title=ref))
    return hooks


def _require_fields(
    data: dict, fields: list[str], context: str, source: str
) -> None:
    """Check that required fields exist in a dictionary."""
    for field_name in fields:
        if field_name not in data:
            raise DeclarationError(
                f"Missing required field '{field_name}' in {context}", source
            )
