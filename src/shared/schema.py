"""JSON Schema helpers for tool input schemas."""

from typing import Any

from jsonschema import Draft7Validator


def validate_schema(data: Any, schema: dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate data against a JSON Schema.

    Args:
        data: The data to validate
        schema: JSON Schema to validate against

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    if not schema:
        return True, []

    validator = Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))

    if not errors:
        return True, []

    error_messages = [
        f"{'.'.join(str(p) for p in e.path)}: {e.message}" if e.path else e.message
        for e in errors
    ]

    return False, error_messages


def create_tool_schema(parameters: list[dict[str, Any]]) -> dict[str, Any]:
    """
    Create an object schema from a list of parameter definitions.

    Each definition has ``name``, ``type`` and ``description`` and may set
    ``required`` (default True).

    Args:
        parameters: List of parameter definitions

    Returns:
        JSON Schema dictionary
    """
    type_mapping = {
        "string": "string",
        "str": "string",
        "integer": "integer",
        "int": "integer",
        "number": "number",
        "float": "number",
        "boolean": "boolean",
        "bool": "boolean",
    }

    properties: dict[str, Any] = {}
    for param in parameters:
        properties[param["name"]] = {
            "type": type_mapping.get(param.get("type", "string"), "string"),
            "description": param.get("description", ""),
        }

    return {
        "type": "object",
        "properties": properties,
        "required": [p["name"] for p in parameters if p.get("required", True)],
    }
