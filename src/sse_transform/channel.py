import asyncio
import logging
from collections.abc import AsyncGenerator
from collections.abc import AsyncIterator
from enum import Enum
from enum import auto
from typing import Final
from typing import Optional
from typing import final

from sse_transform.errors import SseChannelClosedError
from sse_transform.stream import SseTransform
from sse_transform.stream import SseTransformOptions
from sse_transform.stream import StreamItem

logger: Final = logging.getLogger(__name__)


@final
class _EndOfInput(Enum):
    END = auto()


@final
class SseChannel:
    """
    Push-style front end of `SseTransform`: producers `write()` items and `end()` the input,
    a single consumer iterates over the encoded chunks. At most one written item is buffered,
    so `write()` blocks until the consumer has taken the previous one.
    """

    def __init__(self, options: Optional[SseTransformOptions] = None) -> None:
        self._transform: Final = SseTransform(options)
        self._queue: Final[asyncio.Queue[StreamItem | _EndOfInput]] = asyncio.Queue(maxsize=1)
        self._closed = False
        self._consumed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def write(self, item: StreamItem) -> None:
        if self._closed:
            raise SseChannelClosedError("Cannot write to a closed SSE channel.")
        await self._queue.put(item)

    async def end(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.debug("SSE channel input has ended.")
        await self._queue.put(_EndOfInput.END)

    async def _items(self) -> AsyncGenerator[StreamItem]:
        while True:
            item = await self._queue.get()
            if item is _EndOfInput.END:
                return
            yield item

    async def chunks(self) -> AsyncGenerator[str]:
        if self._consumed:
            raise RuntimeError("An SSE channel can only be consumed once.")
        self._consumed = True
        try:
            async for chunk in self._transform.stream(self._items()):
                yield chunk
        finally:
            # Ends the channel on a terminal error or when the consumer goes away.
            self._closed = True
            # Unblock a producer that is waiting for the item slot.
            while not self._queue.empty():
                self._queue.get_nowait()

    def __aiter__(self) -> AsyncIterator[str]:
        return self.chunks()
