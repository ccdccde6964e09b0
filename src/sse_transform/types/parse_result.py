from typing import NamedTuple
from typing import final

from sse_transform.types.record import Record


@final
class ParseSuccess(NamedTuple):
    record: Record


@final
class ParseFailure(NamedTuple):
    error: ValueError
    source: str  # The malformed input.


type ParseResult = ParseSuccess | ParseFailure
