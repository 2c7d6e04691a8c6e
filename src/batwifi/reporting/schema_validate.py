"""Schema validation for canonical records."""

from typing import Any, Dict

from jsonschema import validate
from jsonschema.exceptions import ValidationError

_NULLABLE_STRING = {"type": ["string", "null"]}

BATTERY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "percentage": {"type": ["string", "number", "null"]},
        "state": _NULLABLE_STRING,
        "timeToEmpty": _NULLABLE_STRING,
    },
    "required": ["percentage", "state", "timeToEmpty"],
    "additionalProperties": False,
}

WIFI_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": {
        "type": "object",
        "additionalProperties": {"type": "string"},
    },
}


def validate_schema(payload: Any, schema: Dict[str, Any]) -> None:
    try:
        validate(instance=payload, schema=schema)
    except ValidationError as exc:
        path = ".".join([str(p) for p in exc.path]) if exc.path else "<root>"
        raise ValueError(f"schema validation failed at {path}: {exc.message}") from exc
