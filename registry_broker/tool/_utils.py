"""JSON Schema validation for tool parameters."""

from __future__ import annotations

from typing import Any

from jsonschema import ValidationError, validate


def validate_parameters(
    parameters: dict[str, Any],
    parameters_schema: dict[str, Any] | None,
) -> tuple[bool, list[str]]:
    """Validate parameters against JSON Schema.

    Args:
        parameters: Parameters to validate.
        parameters_schema: JSON Schema for validation.

    Returns:
        Tuple of (is_valid, list_of_errors).
    """
    if parameters_schema is None:
        return True, []

    try:
        validate(instance=parameters, schema=parameters_schema)
        return True, []
    except ValidationError as e:
        errors = [f"{e.json_path}: {e.message}"]
        if e.context:
            for error in e.context:
                errors.append(f"{error.json_path}: {error.message}")
        return False, errors
