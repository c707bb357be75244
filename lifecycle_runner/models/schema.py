"""Field-presence and type validation for plain records."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class FieldSpec:
    """One field of a record schema."""
    name: str
    type: type
    required: bool = False


@dataclass
class FieldError:
    """A single invalid or missing field."""
    path: str
    message: str
    kind: str = "required"  # "required" or "type"
    value: Any = None


@dataclass
class ValidationResult:
    """Result of record validation. ``errors`` only holds invalid fields."""
    errors: dict[str, FieldError] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors

    def __str__(self) -> str:
        if self.valid:
            return "Valid"
        return "Validation failed: " + ", ".join(
            f"{name}: {err.message}" for name, err in self.errors.items()
        )


@dataclass(frozen=True)
class RecordSchema:
    """An ordered set of field specs."""
    name: str
    fields: tuple[FieldSpec, ...]

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def validate(self, record: Optional[Mapping[str, Any]]) -> ValidationResult:
        """Check required fields are present and present fields have the right type.

        Required text fields must be non-empty. Fields not in the schema are
        ignored.
        """
        record = record or {}
        result = ValidationResult()

        for field_spec in self.fields:
            value = record.get(field_spec.name)

            if _is_missing(value):
                if field_spec.required:
                    result.errors[field_spec.name] = FieldError(
                        path=field_spec.name,
                        message=f"Path `{field_spec.name}` is required.",
                    )
                continue

            if not _has_type(value, field_spec.type):
                result.errors[field_spec.name] = FieldError(
                    path=field_spec.name,
                    message=(
                        f"Path `{field_spec.name}` must be of type {field_spec.type.__name__}, "
                        f"got {type(value).__name__}."
                    ),
                    kind="type",
                    value=value,
                )

        return result


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _has_type(value: Any, expected: type) -> bool:
    # bool is an int subclass but never a valid integer field value
    if expected is int and isinstance(value, bool):
        return False
    return isinstance(value, expected)
