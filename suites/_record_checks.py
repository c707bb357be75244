"""Case bodies referenced by user_record.yml."""

import asyncio

from lifecycle_runner.assertions import assert_deep_equal, assert_strict_equal
from lifecycle_runner.models import validate_record

_state = {}


def load_fixture():
    _state["record"] = {"name": "foo", "email": "foo@bar.com", "age": 35}


def empty_record_is_invalid():
    result = validate_record({})
    assert_deep_equal(sorted(result.errors), ["email", "name"])


async def complete_record_is_valid():
    await asyncio.sleep(0)
    result = validate_record(_state["record"])
    assert_strict_equal(result.valid, True)
    assert_strict_equal(_state["record"]["age"], 35)
