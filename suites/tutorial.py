"""Tutorial suite: lifecycle hooks, a failing case, a passing case, pending cases.

The first case fails on purpose, so a run of this file reports 1 passing,
1 failing and 2 pending.
"""

import click

from lifecycle_runner.assertions import assert_deep_equal, assert_strict_equal


def declare(suite):
    with suite.describe("file to be tested"):
        with suite.context("function to be tested"):
            suite.before_all(lambda: click.echo("======before"))
            suite.after_all(lambda: click.echo("======after"))
            suite.before_each(lambda: click.echo("--------beforeEach"))
            suite.after_each(lambda: click.echo("--------afterEach"))

            suite.it("should do something", should_do_something)
            suite.it("should do something else", should_do_something_else)
            suite.pending("this is a pending test")

        with suite.context("function to be tested"):
            suite.pending("should do something")


def should_do_something():
    assert_strict_equal(1, 2)


def should_do_something_else():
    assert_deep_equal({"name": "joe"}, {"name": "joe"})
