"""Decoding of PHP-serialized xprofile values into plain Python types."""

import math
import re
from typing import Any

import phpserialize

_SERIALIZED_PREFIXES = (b"a:", b"O:", b"s:", b"i:", b"d:", b"b:")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _as_bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def is_serialized(value: Any) -> bool:
    """
    Whether a value looks like PHP serialize() output.
    Mirrors WordPress is_serialized(): only the type prefix and terminator are checked.
    """
    if not isinstance(value, (str, bytes)):
        return False
    data = _as_bytes(value).strip()
    if data == b"N;":
        return True
    if len(data) < 4:
        return False
    return data[:2] in _SERIALIZED_PREFIXES and data[-1:] in (b";", b"}")


def maybe_unserialize(value: Any, default: Any = None) -> Any:
    """
    Unserialize a stored value if it is serialized, otherwise return it unchanged.
    A value that looks serialized but fails to decode yields `default`.
    """
    if not is_serialized(value):
        return value
    try:
        return phpserialize.loads(_as_bytes(value).strip(), decode_strings=True)
    except (ValueError, TypeError):
        return default


def serialize_value(value: Any) -> str:
    """Serialize lists and dicts the way BuddyPress stores them; scalars become text."""
    if isinstance(value, (list, tuple, dict)):
        return phpserialize.dumps(value).decode("utf-8")
    if value is None:
        return ""
    return str(value)


def absint(value: Any) -> int:
    """Non-negative integer coercion, like PHP absint(). Unparseable values become 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return abs(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return abs(int(value))
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return abs(int(match.group(1))) if match else 0
    return 0


def to_string_list(value: Any) -> list[str]:
    """
    Cast a decoded value to a list of strings, like PHP (array).
    Decoded PHP arrays arrive as dicts; their values are kept in order.
    """
    if value is None or value == "":
        return []
    if isinstance(value, dict):
        items = list(value.values())
    elif isinstance(value, (list, tuple, set)):
        items = list(value)
    else:
        items = [value]
    return [str(item) for item in items if item is not None]
