"""User model: required ``name`` and ``email``, optional integer ``age``."""

from typing import Any, Mapping, Optional

from .schema import FieldSpec, RecordSchema, ValidationResult

USER_SCHEMA = RecordSchema(
    name="User",
    fields=(
        FieldSpec("name", str, required=True),
        FieldSpec("email", str, required=True),
        FieldSpec("age", int),
    ),
)


class User:
    """A user record. from_dict() ignores keys outside the schema."""

    def __init__(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        age: Optional[int] = None,
    ):
        self.name = name
        self.email = email
        self.age = age

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        return cls(**{k: v for k, v in data.items() if k in USER_SCHEMA.field_names})

    def to_dict(self) -> dict[str, Any]:
        return {k: getattr(self, k) for k in USER_SCHEMA.field_names if getattr(self, k) is not None}

    def validate(self) -> ValidationResult:
        return USER_SCHEMA.validate(self.to_dict())

    def __repr__(self) -> str:
        return f"User(name={self.name!r}, email={self.email!r}, age={self.age!r})"


def validate_record(
    record: Optional[Mapping[str, Any]],
    schema: RecordSchema = USER_SCHEMA,
) -> ValidationResult:
    """Validate a plain mapping against a schema (the User schema by default)."""
    return schema.validate(record)
