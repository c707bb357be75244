"""Models module - record schemas and the User model."""

from .schema import FieldError, FieldSpec, RecordSchema, ValidationResult
from .user import USER_SCHEMA, User, validate_record

__all__ = [
    "FieldError",
    "FieldSpec",
    "RecordSchema",
    "ValidationResult",
    "USER_SCHEMA",
    "User",
    "validate_record",
]
