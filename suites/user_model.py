"""User model suite, written in the done-callback style."""

from lifecycle_runner.assertions import assert_strict_equal
from lifecycle_runner.models import User


def declare(suite):
    with suite.describe("User model"):
        suite.it("should return error fields when required ones are missing", missing_required_fields)
        suite.it("should have optional age field", optional_age_field)


def missing_required_fields(done):
    errors = User().validate().errors

    assert_strict_equal("name" in errors, True)
    assert_strict_equal("email" in errors, True)
    assert_strict_equal("age" in errors, False)
    done()


def optional_age_field(done):
    user = User(name="foo", email="foo@bar.com", age=35)

    assert_strict_equal(user.validate().valid, True)
    assert_strict_equal(user.age, 35)
    done()
