"""Validation Messages — client-facing wording for request validation failures.

Invariants:
    - message_for is PURE: (field, error type, ctx) → message, or None when unmapped
    - Field labels replace underscores with spaces ("due_date" → "due date")
    - Wording is stable: clients match on these strings

Design Decisions:
    - Keyed on Pydantic error types, so schemas stay declarative and the
      wording lives in one place
    - Unmapped types return None: the handler falls back to Pydantic's own text
"""

from typing import Any


VALIDATION_FAILED_MESSAGE = "The given data was invalid."

# Raised by our own validators for values Pydantic parses but we refuse
DATE_INVALID = "date_invalid"


def _label(field_name: str) -> str:
    return field_name.replace("_", " ")


def required_message(field_name: str) -> str:
    return f"The {_label(field_name)} field is required."


def string_message(field_name: str) -> str:
    return f"The {_label(field_name)} field must be a string."


def max_length_message(field_name: str, limit: int) -> str:
    return (
        f"The {_label(field_name)} field must not be greater than "
        f"{limit} characters."
    )


def invalid_choice_message(field_name: str) -> str:
    return f"The selected {_label(field_name)} is invalid."


def date_message(field_name: str) -> str:
    return f"The {_label(field_name)} field must be a valid date."


def message_for(
    field_name: str, error_type: str, ctx: dict[str, Any] | None = None,
) -> str | None:
    """Translate one Pydantic error entry into its client-facing message."""
    if error_type == "missing":
        return required_message(field_name)
    if error_type == "string_type":
        return string_message(field_name)
    if error_type == "string_too_long" and ctx and "max_length" in ctx:
        return max_length_message(field_name, ctx["max_length"])
    if error_type in ("enum", "literal_error"):
        return invalid_choice_message(field_name)
    if error_type == DATE_INVALID or error_type.startswith(("datetime_", "date_")):
        return date_message(field_name)
    return None
