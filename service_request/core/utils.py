"""
Lookup and coercion helpers shared by ServiceRequest accessors.
"""

import json
from collections.abc import Mapping
from typing import Any

from .exceptions import MalformedContentError

# Strings accepted as true by to_bool (after strip/lower).
TRUTHY_STRINGS = frozenset({"1", "true", "on", "yes", "y"})

_MISSING = object()


def array_get(data: Any, key: Any = None, default: Any = None) -> Any:
    """
    Get a value from a mapping, supporting dot paths for nested values.

    Args:
        data: mapping to search (anything else yields ``default``)
        key: literal key or dot path such as ``"filter.fields.0"``;
            ``None`` returns ``data`` itself
        default: value returned when the key cannot be resolved

    A literal key always wins over its dot-path reading, so
    ``{"a.b": 1}`` resolves ``"a.b"`` to ``1``.
    """
    if key is None:
        return data
    if not isinstance(data, Mapping):
        return default
    if key in data:
        return data[key]
    if not isinstance(key, str) or "." not in key:
        return default

    current = data
    for segment in key.split("."):
        current = _step(current, segment)
        if current is _MISSING:
            return default
    return current


def _step(container: Any, segment: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(segment, _MISSING)
    if isinstance(container, (list, tuple)) and segment.isdigit():
        index = int(segment)
        if index < len(container):
            return container[index]
    return _MISSING


def to_bool(value: Any) -> bool:
    """
    Coerce a loosely typed value (query string, header, JSON) to bool.

    True for ``True``, the number 1 and the strings in TRUTHY_STRINGS
    (case-insensitive, surrounding whitespace ignored). Everything else,
    including ``None``, ``0``, ``""`` and ``"false"``, is False.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if not isinstance(value, str):
        return False
    return value.strip().lower() in TRUTHY_STRINGS


def decode_json_payload(data: Any) -> dict:
    """
    Decode JSON content (str or bytes) into a payload mapping.

    Raises:
        MalformedContentError: content is not valid JSON, is not text,
            or does not hold a JSON object at the top level
    """
    try:
        decoded = json.loads(data)
    except (TypeError, ValueError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors.
        raise MalformedContentError("json", e) from e

    if not isinstance(decoded, dict):
        raise MalformedContentError(
            "json", TypeError(f"expected a JSON object, got {type(decoded).__name__}")
        )
    return decoded
