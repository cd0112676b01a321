"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested record or store key does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def missing_field(path: str, field: str) -> str:
    """Return message for a required field absent from stored data."""
    return f"{path}.{field}: missing required field"


def invalid_choice(path: str, value: object, choices: list[str]) -> str:
    """Return message for a value outside a closed set of choices."""
    return f"{path}: invalid value {value!r} (expected one of: {', '.join(choices)})"


def unknown_record_key(key: str) -> str:
    """Return message for a record key the store does not know."""
    return f"Unknown record key '{key}'"


def record_not_found(key: str, name: str) -> str:
    """Return message for a missing named record."""
    return f"Record '{name}' not found in '{key}'"


def duplicate_record_name(key: str, name: str) -> str:
    """Return message for a list holding the same name twice."""
    return f"Duplicate record name '{name}' in '{key}'"


def not_a_list_key(key: str) -> str:
    """Return message when a named-record operation targets a single-value key."""
    return f"'{key}' holds a single value, not a list of named records"
