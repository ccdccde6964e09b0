import json
import math
import re
from collections.abc import Mapping
from typing import Any
from typing import Final
from typing import Optional

from pydantic import BaseModel

from sse_transform.types.field_map import FieldMap
from sse_transform.types.field_map import Rename
from sse_transform.types.field_map import Transform
from sse_transform.types.record import COMMENT_FIELD
from sse_transform.types.record import RESERVED_FIELDS
from sse_transform.types.record import Record

# `\r\n` has to be tried first, otherwise it would produce an empty segment.
_NEWLINE_PATTERN: Final = re.compile(r"\r\n|\r|\n")

# Only these labels may span multiple lines. Custom fields are always multi-line.
_MULTILINE_LABELS: Final = frozenset({"", "data"})

_EXPONENT_NOTATION_LIMIT: Final = 1e21


def split_lines(value: str) -> list[str]:
    return _NEWLINE_PATTERN.split(value)


def is_exact_integer(value: Any) -> bool:
    match value:
        case bool():
            return False
        case int():
            return True
        case float():
            return value.is_integer()
        case _:
            return False


def _normalize_number(value: float) -> float | int | None:
    if not math.isfinite(value):
        return None
    # Integral values are written without a fraction, up to the point where exponent notation takes over.
    if value.is_integer() and abs(value) < _EXPONENT_NOTATION_LIMIT:
        return int(value)
    return value


def _to_json_compatible(value: Any) -> Any:
    match value:
        case BaseModel():
            return _to_json_compatible(value.model_dump(mode="json"))
        case bool() | int() | str() | None:
            return value
        case float():
            return _normalize_number(value)
        case Mapping():
            return {key: _to_json_compatible(item) for key, item in value.items()}  # pyright: ignore[reportUnknownVariableType]
        case list() | tuple():
            return [_to_json_compatible(item) for item in value]  # pyright: ignore[reportUnknownVariableType]
        case _:
            # Left to `json.dumps`, which raises `TypeError` for it.
            return value


def to_json(value: Any) -> str:
    """Compact JSON: non-finite numbers become `null`, integral floats are written like integers (`1.0` -> `1`)."""
    return json.dumps(_to_json_compatible(value), separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _field_lines(label: str, value: Any, *, multiline: bool) -> list[str]:
    if not isinstance(value, str):
        return [f"{label}:{to_json(value)}\n"]
    segments: Final = split_lines(value)
    if not multiline:
        # Everything after the first line break is dropped.
        return [f"{label}:{segments[0]}\n"]
    return [f"{label}:{segment}\n" for segment in segments]


def encode(record: Record | Mapping[str, Any], field_map: Optional[FieldMap] = None) -> str:
    """
    Encodes a record as one Server-Sent Event.

    Reserved fields are written first (`id`, `event`, `data`, `retry`, `$comment`), followed by
    the custom fields listed in `field_map`, in the order of the field map. Custom fields without
    a mapping are dropped, and so is a `retry` value that is not an integer. Returns an empty string
    if nothing is left to write, otherwise the event including its terminating blank line.
    """
    if not isinstance(record, Record):
        record = Record.from_mapping(record)

    lines: Final[list[str]] = []
    for name, value in record.reserved_items():
        if name == "retry":
            if not is_exact_integer(value):
                continue
            value = to_json(value)
        label = "" if name == COMMENT_FIELD else name
        lines.extend(_field_lines(label, value, multiline=label in _MULTILINE_LABELS))

    for name, mapping in (field_map or {}).items():
        if name in RESERVED_FIELDS or name not in record.custom:
            continue
        value = record.custom[name]
        match mapping:
            case Rename(name=output_name):
                lines.extend(_field_lines(output_name, value, multiline=True))
            case Transform(function=function):
                lines.extend(_field_lines(name, function(value), multiline=True))
            case _:
                raise TypeError(f"Invalid mapping for field '{name}': expected `Rename` or `Transform`, got {mapping!r}.")

    if not lines:
        return ""
    return "".join(lines) + "\n"
