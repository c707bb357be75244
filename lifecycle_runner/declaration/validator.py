"""Suite tree validator.

Checks a declared tree for problems that would make a run meaningless.
"""

from typing import Any

from .schema import (
    Case,
    Hook,
    HookKind,
    Suite,
    TreeIssue,
    TreeValidationResult,
)


def validate_tree(roots: Any) -> TreeValidationResult:
    """Validate a sequence of root suites.

    Checks:
    - Roots are suites with non-empty names
    - Children are suites or cases
    - Hooks have a known kind and a callable
    - Case bodies are callable or None (pending)

    Args:
        roots: Root suites, as handed to the runner.

    Returns:
        TreeValidationResult with errors and warnings.
    """
    errors: list[TreeIssue] = []
    warnings: list[TreeIssue] = []

    if isinstance(roots, (Suite, Case, str)) or not _is_sequence(roots):
        errors.append(TreeIssue(
            path="<roots>",
            message=f"Expected a sequence of suites, got {type(roots).__name__}",
        ))
        return TreeValidationResult(valid=False, errors=errors)

    for i, root in enumerate(roots):
        if not isinstance(root, Suite):
            errors.append(TreeIssue(
                path=f"roots[{i}]",
                message=f"Root must be a Suite, got {type(root).__name__}",
            ))
            continue
        _validate_suite(root, _label(root.name, i), errors, warnings, set())

    return TreeValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_suite(
    suite: Suite,
    path: str,
    errors: list[TreeIssue],
    warnings: list[TreeIssue],
    ancestors: set[int],
) -> None:
    """Validate one suite and recurse into its children.

    ``ancestors`` holds the ids of the suites enclosing this one; a child
    that is one of them is reported instead of recursed into.
    """
    ancestors = ancestors | {id(suite)}

    if not isinstance(suite.name, str) or not suite.name:
        errors.append(TreeIssue(
            path=path,
            message="Suite 'name' is required and must not be empty.",
        ))

    for i, hook in enumerate(suite.hooks):
        _validate_hook(hook, f"{path}.hooks[{i}]", errors)

    if not suite.children:
        warnings.append(TreeIssue(
            path=path,
            message="Suite has no cases or nested suites.",
            severity="warning",
        ))

    seen: set[str] = set()
    for i, child in enumerate(suite.children):
        if isinstance(child, Suite) and id(child) in ancestors:
            errors.append(TreeIssue(
                path=f"{path}.children[{i}]",
                message=f"Suite '{child.name}' contains itself (cycle in the suite tree).",
            ))
        elif isinstance(child, Suite):
            _validate_suite(
                child, f"{path} > {_label(child.name, i)}", errors, warnings, ancestors
            )
        elif isinstance(child, Case):
            case_path = f"{path} > {_label(child.name, i)}"
            _validate_case(child, case_path, errors)
            if child.name in seen:
                warnings.append(TreeIssue(
                    path=case_path,
                    message="Duplicate case name in the same suite.",
                    severity="warning",
                ))
            seen.add(child.name)
        else:
            errors.append(TreeIssue(
                path=f"{path}.children[{i}]",
                message=f"Child must be a Suite or Case, got {type(child).__name__}",
            ))


def _validate_hook(hook: Any, path: str, errors: list[TreeIssue]) -> None:
    if not isinstance(hook, Hook):
        errors.append(TreeIssue(
            path=path,
            message=f"Expected a Hook, got {type(hook).__name__}",
        ))
        return

    if not isinstance(hook.kind, HookKind):
        errors.append(TreeIssue(
            path=f"{path}.kind",
            message=f"Invalid hook kind '{hook.kind}'. Must be one of: "
                    f"{', '.join(k.value for k in HookKind)}",
        ))

    if not callable(hook.fn):
        errors.append(TreeIssue(
            path=f"{path}.fn",
            message="Hook function is not callable.",
        ))


def _validate_case(case: Case, path: str, errors: list[TreeIssue]) -> None:
    if not isinstance(case.name, str) or not case.name:
        errors.append(TreeIssue(
            path=path,
            message="Case 'name' is required and must not be empty.",
        ))

    if case.body is not None and not callable(case.body):
        errors.append(TreeIssue(
            path=f"{path}.body",
            message="Case body must be callable, or None for a pending case.",
        ))

    timeout = case.timeout_ms
    if timeout is not None and (
        not isinstance(timeout, int) or isinstance(timeout, bool) or timeout < 0
    ):
        errors.append(TreeIssue(
            path=f"{path}.timeout_ms",
            message=f"Timeout must be a non-negative integer, got {case.timeout_ms!r}.",
        ))


def _label(name: Any, index: int) -> str:
    return str(name) if name else f"<unnamed #{index}>"


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))
