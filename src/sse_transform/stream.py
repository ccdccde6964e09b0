import logging
from abc import ABC
from abc import abstractmethod
from collections.abc import AsyncGenerator
from collections.abc import AsyncIterable
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any
from typing import Final
from typing import NamedTuple
from typing import Optional
from typing import cast
from typing import final

from sse_transform.encoder import encode
from sse_transform.errors import SseDecodeError
from sse_transform.errors import SseEncodingError
from sse_transform.errors import SseStreamError
from sse_transform.parser import parse
from sse_transform.types.field_map import LooseFieldMap
from sse_transform.types.field_map import field_map_from
from sse_transform.types.parse_result import ParseFailure
from sse_transform.types.parse_result import ParseSuccess
from sse_transform.types.record import Record

logger: Final = logging.getLogger(__name__)

# Records (object mode) or JSON text (text mode).
type StreamItem = Record | Mapping[str, Any] | str | bytes | bytearray


@final
class SseTransformOptions(NamedTuple):
    object_mode: bool = False  # If `False`, every item is JSON text that has to be parsed first.
    field_map: LooseFieldMap = MappingProxyType({})


class ChunkSink(ABC):
    @abstractmethod
    async def emit(self, chunk: str) -> None:
        """Returns once the chunk has been accepted downstream."""

    @abstractmethod
    async def fail(self, error: SseStreamError) -> None:
        pass

    @abstractmethod
    async def close(self) -> None:
        pass


@final
class SseTransform:
    def __init__(self, options: Optional[SseTransformOptions] = None) -> None:
        self._options: Final = SseTransformOptions() if options is None else options
        self._field_map: Final = field_map_from(self._options.field_map)

    @property
    def options(self) -> SseTransformOptions:
        return self._options

    def process(self, item: StreamItem) -> str:
        record: Record | Mapping[str, Any]
        if self._options.object_mode:
            record = cast(Record | Mapping[str, Any], item)
        else:
            if not isinstance(item, (str, bytes, bytearray)):
                raise SseDecodeError(f"Expected JSON text, got {type(item).__name__}.", repr(item))
            match parse(item):
                case ParseFailure(error=error, source=source):
                    raise SseDecodeError(f"Unable to parse JSON input: {error}", source) from error
                case ParseSuccess(record=parsed):
                    record = parsed

        try:
            return encode(record, self._field_map)
        except Exception as e:
            raise SseEncodingError(f"Unable to encode record: {e}") from e

    async def stream(self, items: AsyncIterable[StreamItem]) -> AsyncGenerator[str]:
        """
        Encodes `items` one by one. The next item is only pulled from `items` once the consumer
        asks for the next chunk. The first failure ends the stream with an `SseStreamError`.
        """
        async for item in items:
            try:
                chunk = self.process(item)
            except SseStreamError as e:
                logger.error(f"Terminating SSE stream: {e}")
                raise
            logger.debug(f"Emitting SSE chunk of {len(chunk)} characters.")
            yield chunk

    def iter_chunks(self, items: Iterable[StreamItem]) -> Iterator[str]:
        for item in items:
            try:
                chunk = self.process(item)
            except SseStreamError as e:
                logger.error(f"Terminating SSE stream: {e}")
                raise
            yield chunk

    async def pump(self, source: AsyncIterable[StreamItem], sink: ChunkSink) -> None:
        try:
            async for chunk in self.stream(source):
                await sink.emit(chunk)
        except SseStreamError as e:
            await sink.fail(e)
            return
        await sink.close()
