"""Turn the raw text after a command name into tool-call arguments."""

from __future__ import annotations

import json
from typing import Optional

from pydantic import JsonValue, TypeAdapter, ValidationError


class ArgumentError(ValueError):
    pass


_JSON_VALUE = TypeAdapter(JsonValue)


def _reject_constant(token: str) -> None:
    raise ValueError(f"{token} is not valid JSON")


def coerce_arguments(raw: Optional[str]) -> JsonValue:
    """Parse a raw argument string into the value sent as tool arguments.

    - None, empty or whitespace-only input gives `{}`.
    - Valid JSON is returned as parsed. Objects are the normal case; any
      other JSON value is passed through untouched for the server to judge.
    - Anything else raises ArgumentError. There is no guessing fallback
      (e.g. wrapping a bare URL), so the same input always fails the same way.
    """
    if raw is None or not raw.strip():
        return {}

    try:
        parsed = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        raise ArgumentError(
            f"Invalid JSON arguments: {e}. "
            "Pass a JSON object, e.g. {\"url\": \"https://example.com\"}"
        ) from e

    try:
        return _JSON_VALUE.validate_python(parsed)
    except ValidationError as e:
        raise ArgumentError(f"Unsupported argument value: {e}") from e
