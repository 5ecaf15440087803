"""
Primitive guards and extractors over untyped JSON values.

Every function here is total: it accepts any value (None, lists, numbers,
strings, nested dicts) and returns a result without raising.
"""

import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel

Number = Union[int, float]

_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


def is_record(value: Any) -> bool:
    """True for JSON objects only; lists, scalars and None are not records."""
    return isinstance(value, Mapping)


def get_record(value: Any, key: str) -> Optional[Mapping]:
    if not is_record(value):
        return None
    nested = value.get(key)
    return nested if is_record(nested) else None


def get_array(value: Any, key: str) -> Optional[list]:
    if not is_record(value):
        return None
    nested = value.get(key)
    return nested if isinstance(nested, list) else None


def as_record(value: Any) -> Mapping:
    """Coerce a raw payload into a record; non-objects become an empty dict."""
    if is_record(value):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump()
    return {}


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_optional_string(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if _is_finite_number(value):
        return _format_number(value)
    return None


def to_number(value: Any) -> Optional[Number]:
    """Best-effort numeric coercion; numeric strings parse, non-finite is rejected."""
    if _is_finite_number(value):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        parsed = float(text)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def to_float(value: Any) -> Optional[float]:
    number = to_number(value)
    return float(number) if number is not None else None


def to_int(value: Any) -> Optional[int]:
    number = to_number(value)
    return int(number) if number is not None else None


def to_boolean(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if _is_finite_number(value):
        if value == 1:
            return True
        if value == 0:
            return False
        return None
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return None


def to_string_list(value: Any) -> List[str]:
    """List of strings from a list of strings or ``{"url": ...}`` records."""
    if not isinstance(value, list):
        return []
    result = []
    for entry in value:
        if is_record(entry):
            entry = entry.get("url") or entry.get("src")
        text = to_optional_string(entry)
        if text:
            result.append(text)
    return result


def to_string_map(value: Any) -> Optional[Dict[str, str]]:
    """``str -> str`` map; scalar values are coerced, nested values dropped."""
    if not is_record(value):
        return None
    result = {}
    for key, entry in value.items():
        if isinstance(entry, bool):
            result[str(key)] = "true" if entry else "false"
            continue
        text = to_optional_string(entry)
        if text is not None:
            result[str(key)] = text
    return result


def pick_path(record: Any, path: str) -> Any:
    """Value at a dotted path (``"product.name"``), or None."""
    current = record
    for part in path.split("."):
        if not is_record(current):
            return None
        current = current.get(part)
    return current


def pick(record: Any, keys: Iterable[str], coerce: Callable[[Any], Any] = None) -> Any:
    """
    First alias in ``keys`` whose value survives ``coerce``.

    Aliases are tried strictly in order; a later alias is only consulted when
    every earlier one is missing or blank after coercion.
    """
    for key in keys:
        value = pick_path(record, key)
        if value is None:
            continue
        if coerce is not None:
            value = coerce(value)
            if value is None:
                continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
