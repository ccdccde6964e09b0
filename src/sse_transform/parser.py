import json
from collections.abc import Mapping
from typing import Final
from typing import NoReturn

from sse_transform.types.parse_result import ParseFailure
from sse_transform.types.parse_result import ParseResult
from sse_transform.types.parse_result import ParseSuccess
from sse_transform.types.record import Record


def _reject_constant(constant: str) -> NoReturn:
    # `NaN`, `Infinity` and `-Infinity` are not part of JSON.
    raise ValueError(f"Invalid JSON constant '{constant}'.")


def parse(text: str | bytes | bytearray) -> ParseResult:
    """
    Parses one JSON document into a record. Never raises; failures are returned as `ParseFailure`.

    Arrays, strings, numbers and booleans have no fields, so they become an empty record.
    `null` is rejected.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            return ParseFailure(ValueError(f"Input is not valid UTF-8: {e}"), text.decode("utf-8", errors="replace"))

    try:
        document: Final = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        # Also covers `json.JSONDecodeError`.
        return ParseFailure(e, text)

    match document:
        case None:
            return ParseFailure(ValueError("Expected a JSON object, got null."), text)
        case Mapping():
            return ParseSuccess(Record.from_mapping(document))  # pyright: ignore[reportUnknownArgumentType]
        case _:
            return ParseSuccess(Record())
