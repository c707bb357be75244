"""Selecting cases by title."""

import re
from typing import Optional, Union

from .schema import Case, Suite


def filter_tree(
    roots: list[Suite],
    pattern: Union[str, re.Pattern],
    invert: bool = False,
) -> list[Suite]:
    """Return a copy of the tree keeping only cases whose title matches.

    A case title is its full path joined with spaces. Suites left without
    cases are dropped; kept suites keep all of their hooks.
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    kept = []
    for root in roots:
        pruned = _filter_suite(root, (), regex, invert)
        if pruned is not None:
            kept.append(pruned)
    return kept


def _filter_suite(
    suite: Suite,
    prefix: tuple[str, ...],
    regex: re.Pattern,
    invert: bool,
) -> Optional[Suite]:
    path = prefix + (suite.name,)
    children: list[Union[Suite, Case]] = []

    for child in suite.children:
        if isinstance(child, Suite):
            pruned = _filter_suite(child, path, regex, invert)
            if pruned is not None:
                children.append(pruned)
        else:
            title = " ".join(path + (child.name,))
            if bool(regex.search(title)) != invert:
                children.append(child)

    if not children:
        return None
    return Suite(name=suite.name, children=children, hooks=list(suite.hooks))
